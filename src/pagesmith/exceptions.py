"""Exceptions for Pagesmith."""

from __future__ import annotations

from typing import ClassVar

from .models.enums import TemplateErrorKind

__all__ = [
    "ResponseCommittedError",
    "TemplateCompileError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateWriteError",
]


class TemplateError(Exception):
    """Base class for template failures.

    Callers should distinguish failures by checking `kind` rather than by
    comparing exception instances or messages.
    """

    kind: ClassVar[TemplateErrorKind]
    """The class of failure this exception represents."""


class TemplateNotFoundError(TemplateError):
    """No template is registered under the requested name.

    Parameters
    ----------
    name
        The name that was requested.
    """

    kind = TemplateErrorKind.not_found

    def __init__(self, name: str) -> None:
        super().__init__(f"Template {name} not found")
        self.name = name


class TemplateCompileError(TemplateError):
    """The template source files could not be read or compiled."""

    kind = TemplateErrorKind.compile


class TemplateWriteError(TemplateError):
    """Rendering or serialization failed after the response was started.

    The render helper never raises this. It logs render and serialization
    failures with their original exception, and this kind only classifies
    such failures. The only exception of this kind that is raised is
    `ResponseCommittedError`.
    """

    kind = TemplateErrorKind.write


class ResponseCommittedError(TemplateWriteError):
    """The status or headers were changed after the body was started."""
