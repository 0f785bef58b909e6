"""Render helper dependency for FastAPI.

Provides a `~pagesmith.render.TemplateRenderHelper` whose logger is bound to
the current request, sharing the process-wide template loader.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import Depends
from safir.dependencies.logger import logger_dependency
from structlog.stdlib import BoundLogger

from ..config import Config
from ..factory import Factory, ProcessContext
from ..render import TemplateRenderHelper

__all__ = ["RenderHelperDependency", "render_helper_dependency"]


class RenderHelperDependency:
    """Provide a per-request render helper as a dependency.

    The process context holding the template loader is created once by
    `initialize`, normally from the application lifespan, and shared by
    every request after that.
    """

    def __init__(self) -> None:
        self._process_context: ProcessContext | None = None

    async def __call__(
        self, logger: Annotated[BoundLogger, Depends(logger_dependency)]
    ) -> TemplateRenderHelper:
        """Create a render helper for the current request."""
        if not self._process_context:
            raise RuntimeError("RenderHelperDependency not initialized")
        return Factory(self._process_context, logger).create_render_helper()

    @property
    def process_context(self) -> ProcessContext:
        """The shared process context, once initialized."""
        if not self._process_context:
            raise RuntimeError("RenderHelperDependency not initialized")
        return self._process_context

    def initialize(self, config: Config) -> None:
        """Set up the process context.

        Must be called before the dependency is used.

        Parameters
        ----------
        config
            Pagesmith configuration.
        """
        logger = structlog.get_logger(config.logger_name)
        self._process_context = ProcessContext.from_config(config, logger)

    async def aclose(self) -> None:
        """Drop the process context."""
        self._process_context = None


render_helper_dependency = RenderHelperDependency()
"""The dependency that will return the render helper for the request."""
