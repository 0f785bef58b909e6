"""Build test configuration."""

from __future__ import annotations

from pathlib import Path

__all__ = ["config_path"]


def config_path(filename: str) -> Path:
    """Return the path to a test configuration file.

    Parameters
    ----------
    filename
        Name of the configuration file without the ``.yaml`` extension.

    Returns
    -------
    pathlib.Path
        Path to the configuration file.
    """
    base_path = Path(__file__).parent.parent / "data" / "config"
    return base_path / f"{filename}.yaml"
