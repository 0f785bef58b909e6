"""Constants for Pagesmith."""

from pathlib import Path

__all__ = [
    "CONFIG_PATH",
    "DEFAULT_ERROR_TEMPLATE",
    "ERROR_ID_BYTES",
    "FAILURE_CACHE_SIZE",
    "GENERIC_ERROR_MESSAGE",
    "JSON_CONTENT_TYPE",
    "PACKAGED_TEMPLATE_DIR",
    "TEXT_CONTENT_TYPE",
]

CONFIG_PATH = "/etc/pagesmith/pagesmith.yaml"
"""Default configuration path."""

DEFAULT_ERROR_TEMPLATE = "error.html"
"""File name of the packaged error page template."""

ERROR_ID_BYTES = 16
"""Number of random bytes in an error ID shown to users."""

FAILURE_CACHE_SIZE = 1000
"""Maximum number of template names with a remembered compile failure."""

GENERIC_ERROR_MESSAGE = "Please try again later"
"""Message shown to the client when a template cannot be found."""

JSON_CONTENT_TYPE = "application/json"
"""Content type of JSON responses."""

PACKAGED_TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Directory holding the templates shipped with Pagesmith."""

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
"""Content type of minimal plain-text error responses."""
