"""Buffered response sink."""

from __future__ import annotations

from starlette.datastructures import MutableHeaders
from starlette.responses import Response

from .exceptions import ResponseCommittedError

__all__ = ["ResponseWriter"]


class ResponseWriter:
    """Collects a response in memory.

    This implements `~pagesmith.types.ResponseSink` for use with
    `~pagesmith.render.TemplateRenderHelper` and converts the result into a
    Starlette response. As with a streamed HTTP response, the status code and
    headers are fixed by the first write to the body, and later changes to
    them have no effect on the response.

    Parameters
    ----------
    strict
        If `True`, raise
        `~pagesmith.exceptions.ResponseCommittedError` when the status is
        set after the body has been started instead of ignoring it.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.headers = MutableHeaders()
        self._strict = strict
        self._status_code = 200
        self._body: list[bytes] = []
        self._committed: MutableHeaders | None = None

    @property
    def body(self) -> bytes:
        """Body written so far."""
        return b"".join(self._body)

    @property
    def committed(self) -> bool:
        """Whether the status and headers have been fixed."""
        return self._committed is not None

    @property
    def status_code(self) -> int:
        """Status code that was or will be sent."""
        return self._status_code

    def to_response(self) -> Response:
        """Convert to a Starlette response.

        Returns
        -------
        starlette.responses.Response
            Response with the committed status, headers, and body.
        """
        headers = self._committed
        if headers is None:
            headers = self.headers
        response = Response(content=self.body, status_code=self._status_code)
        for key, value in headers.items():
            response.headers[key] = value
        return response

    def write(self, data: str | bytes, /) -> int:
        """Append to the response body, committing status and headers.

        Parameters
        ----------
        data
            Data to append. Strings are encoded in UTF-8.

        Returns
        -------
        int
            Number of bytes written.
        """
        if self._committed is None:
            self._committed = MutableHeaders(raw=list(self.headers.raw))
        if isinstance(data, str):
            data = data.encode()
        self._body.append(data)
        return len(data)

    def write_status(self, status_code: int) -> None:
        """Set the response status code.

        Parameters
        ----------
        status_code
            HTTP status code.

        Raises
        ------
        ResponseCommittedError
            Raised in strict mode if the body has already been started.
        """
        if self._committed is not None:
            if self._strict:
                msg = f"Cannot set status {status_code} after body started"
                raise ResponseCommittedError(msg)
            return
        self._status_code = status_code
