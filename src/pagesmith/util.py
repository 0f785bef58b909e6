"""General utility functions."""

from __future__ import annotations

import base64
import os
import posixpath
from collections.abc import Callable
from urllib.parse import urlsplit, urlunsplit

from .constants import ERROR_ID_BYTES

__all__ = [
    "random_128_bits",
    "resource_url",
]


def random_128_bits() -> str:
    """Generate random 128 bits encoded in base64 without padding."""
    data = os.urandom(ERROR_ID_BYTES)
    return base64.urlsafe_b64encode(data).decode().rstrip("=")


def resource_url(base: str) -> Callable[[str, str], str]:
    """Build a function that constructs URLs for static resources.

    Parameters
    ----------
    base
        Base URL under which resources are served. May include a path.

    Returns
    -------
    Callable
        Function taking a resource type (such as ``css``) and a name and
        returning the URL of that resource under ``base``. Query and
        fragment of ``base`` are preserved.

    Examples
    --------
    .. code-block:: python

       res_url = resource_url("https://example.com/static")
       res_url("css", "main.css")
       # "https://example.com/static/css/main.css"
    """
    parts = urlsplit(base)

    def res_url(resource: str, name: str) -> str:
        path = posixpath.join(
            parts.path or "/", resource.lstrip("/"), name.lstrip("/")
        )
        return urlunsplit(parts._replace(path=posixpath.normpath(path)))

    return res_url
