"""Caches for compiled templates and compile failures.

These caches are owned by `~pagesmith.loader.TemplateLoader` and are not
intended for direct use. Both may be used from any thread.
"""

from __future__ import annotations

import threading
from datetime import timedelta

from cachetools import TTLCache

from .constants import FAILURE_CACHE_SIZE
from .types import Template

__all__ = [
    "FailureCache",
    "TemplateCache",
]


class TemplateCache:
    """A cache of compiled templates by name.

    Entries are never evicted. Compiled templates are immutable, so a caller
    can use the result of `get` without holding any lock.

    Notes
    -----
    There is no per-name lock around compilation. Two threads that miss the
    cache for the same name will both compile it and both call `store`, and
    the last one wins. Either result is a valid compiled template for that
    name.
    """

    def __init__(self) -> None:
        self._cache: dict[str, Template] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> Template | None:
        """Retrieve a compiled template, if available.

        Parameters
        ----------
        name
            Name of the template.

        Returns
        -------
        Template or None
            The cached template or `None` if it has not been compiled.
        """
        with self._lock:
            return self._cache.get(name)

    def store(self, name: str, template: Template) -> None:
        """Store a compiled template, replacing any existing entry.

        Parameters
        ----------
        name
            Name of the template.
        template
            The compiled template.
        """
        with self._lock:
            self._cache[name] = template


class FailureCache:
    """A cache of recent template compile failures by name.

    Parameters
    ----------
    lifetime
        How long to remember a failure.
    """

    def __init__(self, lifetime: timedelta) -> None:
        self._lock = threading.Lock()
        self._cache: TTLCache[str, Exception] = TTLCache(
            FAILURE_CACHE_SIZE, lifetime.total_seconds()
        )

    def get(self, name: str) -> Exception | None:
        """Retrieve the remembered failure for a template, if any.

        Parameters
        ----------
        name
            Name of the template.

        Returns
        -------
        Exception or None
            The exception raised by the last compile attempt, or `None` if
            there is no unexpired failure.
        """
        with self._lock:
            return self._cache.get(name)

    def store(self, name: str, exc: Exception) -> None:
        """Remember a compile failure.

        Parameters
        ----------
        name
            Name of the template.
        exc
            The exception raised while compiling.
        """
        with self._lock:
            self._cache[name] = exc
