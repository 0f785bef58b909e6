"""Protocols and type aliases shared across Pagesmith."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from pathlib import Path
from typing import Any, Protocol

__all__ = [
    "JSONEncoder",
    "JSONEncoderFactory",
    "ResponseSink",
    "Template",
    "TemplateFunctions",
    "TemplateSource",
    "TextSink",
]


class TextSink(Protocol):
    """Anything that rendered text can be written to."""

    def write(self, s: str, /) -> object: ...


class Template(Protocol):
    """A compiled, reusable rendering unit.

    A template may be rendered concurrently from several threads. If an
    error occurs while rendering, rendering stops, but partial output may
    already have been written to the sink.
    """

    @property
    def media_type(self) -> str:
        """Media type of the rendered output."""

    def render(self, sink: TextSink, data: Any) -> None:
        """Render the root template into ``sink``."""

    def render_named(self, sink: TextSink, name: str, data: Any) -> None:
        """Render the sub-template ``name`` of this unit into ``sink``."""


type TemplateFunctions = Mapping[str, Callable[..., Any]]
"""Named callables usable from within template bodies."""


type TemplateSource = Callable[[str, TemplateFunctions, list[Path]], Template]
"""Compiles a list of files into a `Template` under a logical name."""


class ResponseSink(Protocol):
    """The parts of an HTTP response used when rendering."""

    headers: MutableMapping[str, str]

    @property
    def status_code(self) -> int:
        """Status code that was or will be sent."""

    def write_status(self, status_code: int) -> None:
        """Set the response status code."""

    def write(self, data: str | bytes, /) -> int:
        """Append to the response body."""


class JSONEncoder(Protocol):
    """Serializes a value as JSON onto a sink."""

    def encode(self, data: Any) -> None:
        """Serialize ``data`` and write it."""


type JSONEncoderFactory = Callable[[TextSink], JSONEncoder]
"""Constructs a `JSONEncoder` writing to the given sink."""
