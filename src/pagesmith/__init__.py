"""Template loading, caching, and rendering helpers for web responses."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

__version__: str
"""The version string of Pagesmith (PEP 440 / SemVer compatible)."""

try:
    __version__ = version("pagesmith")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"
