"""Enums used in Pagesmith models."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "TemplateErrorKind",
    "TemplateMode",
]


class TemplateErrorKind(Enum):
    """The class of a template failure."""

    not_found = "not_found"
    """No template is registered under the requested name."""

    compile = "compile"
    """The template source files could not be read or compiled."""

    write = "write"
    """Rendering or serialization failed after the response was started."""


class TemplateMode(Enum):
    """How templates are compiled."""

    html = "html"
    """Output is escaped for HTML.

    Use this for any template whose data may include untrusted input.
    """

    text = "text"
    """Output is not escaped.

    Only safe for non-HTML output or fully trusted data.
    """
