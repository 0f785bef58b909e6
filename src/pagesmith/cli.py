"""Administrative command-line interface."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import structlog
from safir.click import display_help

from .config import Config
from .constants import CONFIG_PATH
from .factory import ProcessContext

__all__ = [
    "check",
    "help",
    "main",
    "render",
]

_config_path_option = click.option(
    "--config-path",
    envvar="PAGESMITH_CONFIG_PATH",
    type=click.Path(path_type=Path),
    default=Path(CONFIG_PATH),
    show_default=True,
    help="Application configuration file.",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
def main() -> None:
    """Administrative command-line interface for pagesmith."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
@_config_path_option
def check(*, config_path: Path) -> None:
    """Compile every configured template.

    Exits with an error on the first template that cannot be compiled, so
    this can be used to validate templates before deployment.
    """
    context = _load_context(config_path)
    names = context.config.template_names
    if context.config.error_template:
        names.add(context.config.error_template)
    for name in sorted(names):
        try:
            context.loader.must_get(name)
        except Exception as e:
            raise click.ClickException(f"Template {name}: {e}") from e
        click.echo(f"{name}: ok")


@main.command()
@click.argument("name")
@click.option(
    "--data",
    default=None,
    help="Template data as a JSON object.",
)
@_config_path_option
def render(*, name: str, data: str | None, config_path: Path) -> None:
    """Render a template to standard output."""
    context = _load_context(config_path)
    try:
        template_data = json.loads(data) if data else {}
    except json.JSONDecodeError as e:
        raise click.BadParameter(str(e), param_hint="--data") from e
    try:
        template = context.loader.get(name)
        template.render(sys.stdout, template_data)
    except Exception as e:
        raise click.ClickException(f"Template {name}: {e}") from e


def _load_context(config_path: Path) -> ProcessContext:
    """Load the configuration and build the template loader."""
    config = Config.from_file(config_path)
    config.configure_logging()
    logger = structlog.get_logger(config.logger_name)
    return ProcessContext.from_config(config, logger)
