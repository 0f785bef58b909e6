"""Registry and cache of named templates."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from structlog.stdlib import BoundLogger

from .cache import FailureCache, TemplateCache
from .exceptions import TemplateNotFoundError
from .templates import html_source
from .types import Template, TemplateFunctions, TemplateSource

__all__ = [
    "TemplateConfig",
    "TemplateLoader",
]


class TemplateConfig(BaseModel):
    """Registration of a logical template name to its source files."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., title="Template name", examples=["home"])

    files: tuple[str, ...] = Field(
        ...,
        title="Template files",
        description=(
            "Files compiled together into the template, in order. Relative"
            " paths are resolved against the loader's base directory."
        ),
        examples=[("home.html", "layout.html")],
    )


class TemplateLoader:
    """Resolve template names to compiled templates, caching the results.

    The loader should be created once per process and all templates
    registered before it is used to serve requests. After that, `get` may be
    called concurrently from any number of threads.

    Parameters
    ----------
    base_dir
        Directory against which relative template file paths are resolved.
    functions
        Callables made available inside every template.
    logger
        Logger to use for compile messages.
    source
        Function that compiles template files. Defaults to
        `~pagesmith.templates.html_source`.
    reload
        If `True`, never cache and recompile on every call to `get`. Intended
        for development so that template edits take effect immediately.
    failure_lifetime
        If set, remember compile failures for this long and raise the same
        failure again without recompiling. Ignored if ``reload`` is set.

    Notes
    -----
    Cached templates are only valid for the base directory, functions, and
    source in effect when they were compiled. None of these can be changed
    after construction.
    """

    def __init__(
        self,
        base_dir: Path,
        functions: TemplateFunctions,
        *,
        logger: BoundLogger,
        source: TemplateSource = html_source,
        reload: bool = False,
        failure_lifetime: timedelta | None = None,
    ) -> None:
        self._base_dir = base_dir
        self._functions = functions
        self._logger = logger
        self._source = source
        self._reload = reload
        self._configs: dict[str, TemplateConfig] = {}
        self._cache = TemplateCache()
        self._failures: FailureCache | None = None
        if failure_lifetime and not reload:
            self._failures = FailureCache(failure_lifetime)

    @property
    def reload(self) -> bool:
        """Whether templates are recompiled on every lookup."""
        return self._reload

    def get(self, name: str) -> Template:
        """Return the compiled template for a name.

        Parameters
        ----------
        name
            Registered name of the template.

        Returns
        -------
        Template
            The compiled template. Unless in reload mode, the same object is
            returned for every call after the first successful one.

        Raises
        ------
        TemplateNotFoundError
            Raised if no template is registered under that name.
        Exception
            Any exception raised by the template source is propagated
            unchanged. The built-in sources raise
            `~pagesmith.exceptions.TemplateCompileError`.
        """
        if not self._reload:
            template = self._cache.get(name)
            if template is not None:
                return template
            if self._failures is not None:
                failure = self._failures.get(name)
                if failure is not None:
                    raise failure.with_traceback(None)

        config = self._configs.get(name)
        if not config:
            raise TemplateNotFoundError(name)
        files = [self._resolve(f) for f in config.files]
        try:
            template = self._source(name, self._functions, files)
        except Exception as e:
            self._logger.warning(
                "Cannot compile template", template=name, error=str(e)
            )
            if self._failures is not None:
                self._failures.store(name, e)
            raise
        self._logger.debug("Compiled template", template=name)

        if not self._reload:
            self._cache.store(name, template)
        return template

    def must_get(self, name: str) -> Template:
        """Return the compiled template for a name or fail loudly.

        Only for use at startup or where a missing template is a programming
        error, never with names derived from a request.

        Parameters
        ----------
        name
            Registered name of the template.

        Returns
        -------
        Template
            The compiled template.

        Raises
        ------
        Exception
            Whatever `get` raised, after logging it at critical level.
        """
        try:
            return self.get(name)
        except Exception as e:
            self._logger.critical(
                "Cannot get template", template=name, error=str(e)
            )
            raise

    def register(self, config: TemplateConfig) -> None:
        """Register a template, replacing any template with the same name.

        The files are not checked until the template is first requested.

        Parameters
        ----------
        config
            Name and files of the template.
        """
        self._configs[config.name] = config

    def _resolve(self, path: str) -> Path:
        """Resolve a configured template path against the base directory."""
        file = Path(path)
        return file if file.is_absolute() else self._base_dir / file
