"""Models for data passed to page templates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "ErrorData",
    "ErrorPage",
    "Site",
]


class Site(BaseModel):
    """Site-wide information available to every page."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., title="Site title")

    keywords: list[str] = Field([], title="Keywords for page metadata")


class ErrorPage(BaseModel):
    """Data passed to the error page template.

    Only the external message and the error ID are shown. The internal error
    is logged alongside the error ID so that a user report can be matched to
    the log entry.
    """

    status_code: int = Field(
        ..., title="HTTP status code", examples=[500]
    )

    status: str = Field(
        ...,
        title="User-facing message",
        description="Must not contain internal error details",
        examples=["Something went wrong"],
    )

    error_id: str = Field(
        ...,
        title="Error ID",
        description="Random token identifying this failure in the logs",
    )

    site: Site | None = Field(None, title="Site information")


class ErrorData(BaseModel):
    """Data for a simple page showing a message."""

    site: Site | None = Field(None, title="Site information")

    message: str = Field(..., title="Message to show")
