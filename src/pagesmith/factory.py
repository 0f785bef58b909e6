"""Create Pagesmith components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Self

from structlog.stdlib import BoundLogger

from .config import Config
from .constants import DEFAULT_ERROR_TEMPLATE, PACKAGED_TEMPLATE_DIR
from .loader import TemplateConfig, TemplateLoader
from .models.enums import TemplateMode
from .render import TemplateRenderHelper
from .templates import html_source, text_source
from .types import TemplateFunctions
from .util import resource_url

__all__ = ["Factory", "ProcessContext"]


@dataclass(frozen=True, slots=True)
class ProcessContext:
    """Per-process application context.

    This object caches all of the per-process singletons that can be reused
    for every request. At present, that is only the template loader, whose
    cache of compiled templates must be shared by all requests.
    """

    config: Config
    """Pagesmith's configuration."""

    loader: TemplateLoader
    """Shared template loader with every configured template registered."""

    @classmethod
    def from_config(cls, config: Config, logger: BoundLogger) -> Self:
        """Create a new process context from the Pagesmith configuration.

        Parameters
        ----------
        config
            The Pagesmith configuration.
        logger
            Logger used by the template loader.

        Returns
        -------
        ProcessContext
            Shared context for a Pagesmith process.
        """
        source = html_source
        if config.mode == TemplateMode.text:
            source = text_source
        loader = TemplateLoader(
            config.template_dir,
            cls._build_functions(config),
            logger=logger,
            source=source,
            reload=config.reload,
            failure_lifetime=config.failure_lifetime,
        )
        for template in config.templates:
            loader.register(template)

        # Fall back on the built-in error page if the configuration names an
        # error template without defining it.
        error_template = config.error_template
        if error_template and error_template not in config.template_names:
            path = PACKAGED_TEMPLATE_DIR / DEFAULT_ERROR_TEMPLATE
            files = (str(path.resolve()),)
            loader.register(TemplateConfig(name=error_template, files=files))
            logger.debug("Using built-in error page", template=error_template)

        return cls(config=config, loader=loader)

    @staticmethod
    def _build_functions(config: Config) -> TemplateFunctions:
        """Build the functions available inside every template."""
        functions: dict[str, Any] = {}
        if config.base_url:
            functions["res_url"] = resource_url(config.base_url)
        return functions


class Factory:
    """Build Pagesmith components.

    Uses the contents of a `ProcessContext` to construct the components of
    the application on demand.

    Parameters
    ----------
    context
        Shared process context.
    logger
        Logger to use for errors, usually bound to the current request.
    """

    def __init__(self, context: ProcessContext, logger: BoundLogger) -> None:
        self._context = context
        self._logger = logger

    def create_render_helper(self) -> TemplateRenderHelper:
        """Create a helper for writing responses.

        Returns
        -------
        TemplateRenderHelper
            Render helper using the shared template loader.
        """
        return TemplateRenderHelper(
            self._context.loader,
            self._logger,
            error_template=self._context.config.error_template,
            site=self._context.config.site,
        )
