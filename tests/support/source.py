"""Template source wrappers for testing."""

from __future__ import annotations

import threading
import time
from pathlib import Path

from pagesmith.templates import html_source
from pagesmith.types import Template, TemplateFunctions, TemplateSource

__all__ = ["CountingSource", "FailingSource"]


class CountingSource:
    """Wrap a template source and record every call.

    Parameters
    ----------
    source
        Source to wrap.
    delay
        Seconds to sleep before compiling, to widen race windows.
    """

    def __init__(
        self, source: TemplateSource = html_source, *, delay: float = 0.0
    ) -> None:
        self._source = source
        self._delay = delay
        self._lock = threading.Lock()
        self.calls: list[tuple[str, list[Path]]] = []
        self.results: list[Template] = []

    def __call__(
        self, name: str, functions: TemplateFunctions, files: list[Path]
    ) -> Template:
        with self._lock:
            self.calls.append((name, files))
        if self._delay:
            time.sleep(self._delay)
        template = self._source(name, functions, files)
        with self._lock:
            self.results.append(template)
        return template

    @property
    def count(self) -> int:
        with self._lock:
            return len(self.calls)


class FailingSource:
    """Template source that always raises the same exception.

    Parameters
    ----------
    exc
        Exception to raise.
    """

    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.count = 0

    def __call__(
        self, name: str, functions: TemplateFunctions, files: list[Path]
    ) -> Template:
        self.count += 1
        raise self.exc
