"""Configuration for Pagesmith.

Pagesmith is configured by a YAML file listing the templates and how they
are compiled. A few settings that commonly differ between development and
production can also be overridden by environment variables with the
``PAGESMITH_`` prefix. Only the settings with explicit ``validation_alias``
settings support configuration via environment variable. Environment
variable names are matched case-insensitively against every name of the
setting, so the YAML key names without the prefix, such as ``RELOAD`` or
``LOG_LEVEL``, are honored as well.
"""

from __future__ import annotations

from pathlib import Path
from typing import Self, override

import yaml
from pydantic import AliasChoices, Field
from pydantic.alias_generators import to_camel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from safir.logging import LogLevel, Profile, configure_logging
from safir.pydantic import HumanTimedelta

from .loader import TemplateConfig
from .models.enums import TemplateMode
from .models.page import Site

__all__ = [
    "CamelCaseSettings",
    "Config",
    "EnvFirstSettings",
]


class CamelCaseSettings(BaseSettings):
    """Base class for Pydantic settings supporting camel-case.

    This base class also forbids all extra attributes.
    """

    model_config = SettingsConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )


class EnvFirstSettings(CamelCaseSettings):
    """Base class for Pydantic settings with environment overrides.

    Classes that inherit from this base class will prioritize environment
    variables over arguments to the class constructor.
    """

    @override
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Override the sources of settings.

        Deactivate :file:`.env` and secret file support. Allow environment
        variables to override init parameters, since init parameters come
        from the YAML configuration file and we want environment variables to
        take precedence.
        """
        return (env_settings, init_settings)


class Config(EnvFirstSettings):
    """Configuration for Pagesmith."""

    template_dir: Path = Field(
        Path("templates"),
        title="Template directory",
        description="Directory against which template paths are resolved",
        validation_alias=AliasChoices(
            "PAGESMITH_TEMPLATE_DIR", "templateDir", "template_dir"
        ),
    )

    reload: bool = Field(
        False,
        title="Reload templates",
        description=(
            "Recompile templates on every request instead of caching them."
            " Intended only for development."
        ),
        validation_alias=AliasChoices("PAGESMITH_RELOAD", "reload"),
    )

    mode: TemplateMode = Field(
        TemplateMode.html,
        title="Template mode",
        description=(
            "Whether output is escaped for HTML. Only use ``text`` if all"
            " template data is trusted."
        ),
    )

    error_template: str | None = Field(
        "error",
        title="Error template",
        description=(
            "Name of the template used for error pages. If no template with"
            " this name is configured, a built-in error page is used. Set to"
            " null to always send plain-text errors."
        ),
    )

    failure_lifetime: HumanTimedelta | None = Field(
        None,
        title="Compile failure lifetime",
        description=(
            "How long to remember that a template failed to compile before"
            " trying again. If not set, every request retries. Has no effect"
            " if templates are reloaded."
        ),
    )

    base_url: str | None = Field(
        None,
        title="Static resource base URL",
        description=(
            "If set, templates can call ``res_url(type, name)`` to build"
            " resource URLs under this base"
        ),
        examples=["https://example.com/static"],
    )

    site_title: str | None = Field(
        None,
        title="Site title",
        description="Title shown on error pages",
    )

    templates: list[TemplateConfig] = Field(
        [],
        title="Templates",
        description="Templates to register, by name",
    )

    log_level: LogLevel = Field(
        LogLevel.INFO,
        title="Logging level",
        description="Python logging level",
        validation_alias=AliasChoices(
            "PAGESMITH_LOG_LEVEL", "logLevel", "log_level"
        ),
    )

    profile: Profile = Field(
        Profile.production,
        title="Logging profile",
        description="Use ``development`` for human-readable logs",
        validation_alias=AliasChoices("PAGESMITH_PROFILE", "profile"),
    )

    logger_name: str = Field(
        "pagesmith",
        title="Logger name",
        description="Name of the logger used for all Pagesmith messages",
    )

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Construct a Config object from a configuration file.

        Parameters
        ----------
        path
            Path to the configuration file in YAML.

        Returns
        -------
        Config
            The corresponding `Config` object.
        """
        with path.open("r") as f:
            return cls.model_validate(yaml.safe_load(f) or {})

    @property
    def template_names(self) -> set[str]:
        """Names of all configured templates."""
        return {t.name for t in self.templates}

    @property
    def site(self) -> Site | None:
        """Site information for page templates, if a title is set."""
        if not self.site_title:
            return None
        return Site(title=self.site_title)

    def configure_logging(self) -> None:
        """Configure logging based on the Pagesmith configuration."""
        configure_logging(
            name=self.logger_name,
            profile=self.profile,
            log_level=self.log_level,
        )
