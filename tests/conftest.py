"""Test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog
from safir.logging import LogLevel, Profile, configure_logging
from structlog.stdlib import BoundLogger

from pagesmith.loader import TemplateConfig, TemplateLoader
from pagesmith.render import TemplateRenderHelper

from .support.source import CountingSource


@pytest.fixture(autouse=True)
def configure_test_logging() -> None:
    """Configure logging the way a production deployment would.

    This is redone for every test since the command-line interface
    reconfigures logging.
    """
    configure_logging(
        name="pagesmith", profile=Profile.production, log_level=LogLevel.DEBUG
    )


@pytest.fixture
def logger() -> BoundLogger:
    return structlog.get_logger("pagesmith")


@pytest.fixture
def template_dir() -> Path:
    """Return the directory holding test templates."""
    return Path(__file__).parent / "data" / "templates"


@pytest.fixture
def template_env(monkeypatch: pytest.MonkeyPatch, template_dir: Path) -> Path:
    """Point the configured template directory at the test templates."""
    monkeypatch.setenv("PAGESMITH_TEMPLATE_DIR", str(template_dir))
    return template_dir


@pytest.fixture
def source() -> CountingSource:
    return CountingSource()


@pytest.fixture
def loader(
    template_dir: Path, source: CountingSource, logger: BoundLogger
) -> TemplateLoader:
    """Return a loader with the common test templates registered."""
    loader = TemplateLoader(
        template_dir,
        {"explode": _explode, "shout": str.upper},
        logger=logger,
        source=source,
    )
    loader.register(TemplateConfig(name="home", files=("home.html",)))
    loader.register(
        TemplateConfig(name="page", files=("page.html", "header.html"))
    )
    loader.register(TemplateConfig(name="broken", files=("broken.html",)))
    loader.register(TemplateConfig(name="fails", files=("fails.html",)))
    loader.register(TemplateConfig(name="error", files=("error.html",)))
    return loader


@pytest.fixture
def helper(
    loader: TemplateLoader, logger: BoundLogger
) -> TemplateRenderHelper:
    return TemplateRenderHelper(loader, logger, error_template="error")


def _explode() -> str:
    raise RuntimeError("internal detail")
