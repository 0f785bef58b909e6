"""Helpers to write template, JSON, and error responses."""

from __future__ import annotations

import json
from typing import Any, Self

from fastapi.encoders import jsonable_encoder
from starlette.requests import Request
from structlog.stdlib import BoundLogger

from .constants import (
    GENERIC_ERROR_MESSAGE,
    JSON_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
)
from .exceptions import TemplateError
from .loader import TemplateLoader
from .models.enums import TemplateErrorKind
from .models.page import ErrorPage, Site
from .types import (
    JSONEncoder,
    JSONEncoderFactory,
    ResponseSink,
    Template,
    TextSink,
)
from .util import random_128_bits

__all__ = [
    "StreamJSONEncoder",
    "TemplateRenderHelper",
]


class StreamJSONEncoder:
    """Default JSON encoder.

    The value is converted with FastAPI's ``jsonable_encoder``, so pydantic
    models, dataclasses, and datetimes are supported, and is written followed
    by a newline. Nothing is written if serialization fails.

    Parameters
    ----------
    sink
        Where to write the encoded value.
    """

    def __init__(self, sink: TextSink) -> None:
        self._sink = sink

    def encode(self, data: Any) -> None:
        encoded = json.dumps(jsonable_encoder(data))
        self._sink.write(encoded + "\n")


class TemplateRenderHelper:
    """Write template, JSON, and error responses to a response sink.

    All methods are safe to call concurrently. None of them raise on
    template or serialization failures; those are logged instead.

    Parameters
    ----------
    loader
        Source of compiled templates.
    logger
        Logger for failures.
    error_template
        Name of the template used by `serve_error_template`, if any.
    encoder
        Constructor for the JSON encoder used by `json`. Defaults to
        `StreamJSONEncoder`.
    site
        Site information passed to the error template.
    """

    def __init__(
        self,
        loader: TemplateLoader,
        logger: BoundLogger,
        *,
        error_template: str | None = None,
        encoder: JSONEncoderFactory | None = None,
        site: Site | None = None,
    ) -> None:
        self._loader = loader
        self._logger = logger
        self._error_template = error_template
        self._encoder = encoder
        self._site = site

    def bind(self, **values: Any) -> Self:
        """Return a copy whose logger is bound with additional context.

        Parameters
        ----------
        **values
            Values to add to the logging context.

        Returns
        -------
        TemplateRenderHelper
            New helper sharing the same loader.
        """
        clone = self.clone()
        clone._logger = self._logger.bind(**values)
        return clone

    def clone(self) -> Self:
        """Return a copy sharing the same loader and logger."""
        return type(self)(
            self._loader,
            self._logger,
            error_template=self._error_template,
            encoder=self._encoder,
            site=self._site,
        )

    def json(self, sink: ResponseSink, data: Any) -> None:
        """Write a JSON response.

        The content type and ``X-Content-Type-Options: nosniff`` are set
        before anything is written so that browsers never interpret the
        response as HTML.

        Parameters
        ----------
        sink
            Response to write to.
        data
            Value to serialize.
        """
        sink.headers["Content-Type"] = JSON_CONTENT_TYPE
        sink.headers["X-Content-Type-Options"] = "nosniff"
        encoder: JSONEncoder
        if self._encoder:
            encoder = self._encoder(sink)
        else:
            encoder = StreamJSONEncoder(sink)
        try:
            encoder.encode(data)
        except Exception as e:
            self._logger.exception("Cannot encode value as JSON", error=str(e))

    def render(
        self,
        sink: ResponseSink,
        request: Request | None,
        name: str,
        data: Any,
    ) -> None:
        """Render a template as the response.

        If the template cannot be found or compiled, a generic error is sent
        instead. If rendering fails partway, the error is only logged, since
        part of the response may already have been written.

        Parameters
        ----------
        sink
            Response to write to.
        request
            The incoming request, used to add context to log messages.
        name
            Registered name of the template.
        data
            Data for the template.
        """
        logger = self._bind_request(self._logger, request)
        try:
            template = self._loader.get(name)
        except Exception as e:
            logger.error("Cannot find template", template=name, error=str(e))
            self.serve_error(sink, request, GENERIC_ERROR_MESSAGE, 500)
            return
        if "Content-Type" not in sink.headers:
            content_type = f"{template.media_type}; charset=utf-8"
            sink.headers["Content-Type"] = content_type
        try:
            template.render(sink, data)
        except Exception as e:
            logger.exception(
                "Cannot render template", template=name, error=str(e)
            )

    def serve_error(
        self,
        sink: ResponseSink,
        request: Request | None,
        message: str,
        status_code: int,
    ) -> None:
        """Write a minimal plain-text error response.

        Parameters
        ----------
        sink
            Response to write to.
        request
            The incoming request.
        message
            Message to show to the user.
        status_code
            HTTP status code of the response.
        """
        sink.headers["Content-Type"] = TEXT_CONTENT_TYPE
        sink.headers["X-Content-Type-Options"] = "nosniff"
        sink.write_status(status_code)
        sink.write(message + "\n")

    def serve_error_template(
        self,
        sink: ResponseSink,
        request: Request | None,
        error: BaseException,
        message: str,
        status_code: int,
    ) -> BoundLogger:
        """Write an error page identified by a new random error ID.

        The internal error is logged with the error ID, and only the error ID
        and ``message`` are shown to the user, who can then refer to the
        error ID when reporting the problem.

        Parameters
        ----------
        sink
            Response to write to.
        request
            The incoming request, used to add context to log messages.
        error
            The internal error. Never shown to the user.
        message
            Message to show to the user.
        status_code
            HTTP status code of the error page.

        Returns
        -------
        structlog.stdlib.BoundLogger
            Logger bound with the error and error ID, to which the caller can
            add further context.

        Notes
        -----
        If no error template is configured or it is not registered, a
        plain-text error is sent with status 401 instead. The same is done,
        with an additional log message, if the error template cannot be
        compiled.
        """
        error_id = random_128_bits()
        request_logger = self._bind_request(self._logger, request)
        logger = request_logger.bind(error=str(error), error_id=error_id)
        logger.error("Serving error page", status_code=status_code)

        template: Template | None = None
        if self._error_template:
            try:
                template = self._loader.get(self._error_template)
            except Exception as e:
                if not _is_not_found(e):
                    request_logger.error(
                        "Cannot load error template",
                        template=self._error_template,
                        error=str(e),
                        error_id=error_id,
                    )
        if template is None:
            self.serve_error(sink, request, message, 401)
            return logger

        page = ErrorPage(
            status_code=status_code,
            status=message,
            error_id=error_id,
            site=self._site,
        )
        if "Content-Type" not in sink.headers:
            content_type = f"{template.media_type}; charset=utf-8"
            sink.headers["Content-Type"] = content_type
        sink.write_status(status_code)
        try:
            template.render(sink, page)
        except Exception as e:
            logger.exception(
                "Cannot render error template", render_error=str(e)
            )
        return logger

    def _bind_request(
        self, logger: BoundLogger, request: Request | None
    ) -> BoundLogger:
        """Add request information to the logger, if there is a request."""
        if request is None:
            return logger
        return logger.bind(path=request.url.path, method=request.method)


def _is_not_found(exc: Exception) -> bool:
    """Whether an exception means that a template is not registered."""
    return (
        isinstance(exc, TemplateError)
        and exc.kind is TemplateErrorKind.not_found
    )
