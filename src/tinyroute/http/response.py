"""Mutable per-request HTTP response.

Every pipeline step shares one ``Response`` through ``ctx.res`` and
writes to it in place. Status follows the body unless set explicitly:

- a fresh response is ``404 Not Found``
- assigning a body sets ``200``
- assigning ``None`` as the body sets ``204``
"""

import json as json_module
from typing import Any

_STATUS_PHRASES: dict[int, str] = {
    200: "OK",
    201: "Created",
    202: "Accepted",
    204: "No Content",
    301: "Moved Permanently",
    302: "Found",
    304: "Not Modified",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    500: "Internal Server Error",
}


def status_phrase(status: int) -> str:
    return _STATUS_PHRASES.get(status, "")


def body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


class Response:
    """Response state for one request.

    ``body`` accepts ``str`` (text or HTML), ``bytes``, or any
    JSON-serializable value. ``content_type`` is inferred from the body
    unless a ``content-type`` header is set.
    """

    __slots__ = ("_body", "_explicit_status", "_status", "headers")

    def __init__(self) -> None:
        self._status: int = 404
        self._explicit_status: bool = False
        self._body: Any = None
        # Lower-case header names
        self.headers: dict[str, str] = {}

    @property
    def status(self) -> int:
        return self._status

    @status.setter
    def status(self, value: int) -> None:
        if not 100 <= value <= 999:
            msg = f"Invalid HTTP status code: {value}"
            raise ValueError(msg)
        self._status = value
        self._explicit_status = True

    @property
    def body(self) -> Any:
        return self._body

    @body.setter
    def body(self, value: Any) -> None:
        self._body = value
        if self._explicit_status:
            return
        self._status = 204 if value is None else 200

    @property
    def content_type(self) -> str:
        if "content-type" in self.headers:
            return self.headers["content-type"]
        body = self._body
        if isinstance(body, str):
            if body.lstrip().startswith("<"):
                return "text/html; charset=utf-8"
            return "text/plain; charset=utf-8"
        if isinstance(body, bytes | bytearray):
            return "application/octet-stream"
        if body is None:
            return "text/plain; charset=utf-8"
        return "application/json"

    @property
    def body_bytes(self) -> bytes:
        """Encode the body for the wire.

        An untouched 404 gets its status phrase as the body.
        """
        body = self._body
        if body is None:
            if self._status == 404:
                return b"Not Found"
            return b""
        if isinstance(body, bytes | bytearray):
            return bytes(body)
        if isinstance(body, str):
            return body.encode("utf-8")
        return json_module.dumps(body).encode("utf-8")

    def set_error(
        self,
        status: int,
        detail: str,
        headers: tuple[tuple[str, str], ...] = (),
    ) -> None:
        """Replace whatever the pipeline wrote with an error response."""
        self.headers = {name.lower(): value for name, value in headers}
        self._body = detail or status_phrase(status)
        self._status = status
        self._explicit_status = True

    def __repr__(self) -> str:
        return f"<Response {self._status} {self.content_type}>"
