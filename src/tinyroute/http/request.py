"""HTTP request.

Received metadata plus the two routing fields a matched route fills in.
``path`` is the pathname exactly as sent on the wire (percent-encoded),
which is what route patterns are matched against.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, quote

from tinyroute._internal.asgi import Receive, Scope
from tinyroute.http.headers import Headers

# RFC 3986 sub-delims and pchar extras that stay literal in a path
_PATH_SAFE = "/:@!$&'()*+,;="


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(slots=True)
class Request:
    """An HTTP request.

    Metadata is set once by the server. ``params`` and ``route_path`` are
    written by each route that matches; a later match overwrites an
    earlier one.

    Body is accessed asynchronously via ``.body()``, ``.text()``, ``.json()``.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query_string: str = ""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Routing — set by the matching route
    params: dict[str, str | None] = field(default_factory=dict)
    route_path: str | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive = field(default=_empty_receive, repr=False, compare=False)

    # Private: cached body
    _body: bytes | None = field(default=None, repr=False, compare=False)

    # -- Computed properties --

    @property
    def query(self) -> dict[str, str]:
        """Query parameters; the last value wins for repeated keys."""
        return dict(parse_qsl(self.query_string, keep_blank_values=True))

    @property
    def url(self) -> str:
        """Path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if self._body is not None:
            return self._body
        chunks: list[bytes] = []
        while True:
            message = await self._receive()
            chunk = message.get("body", b"")
            if chunk:
                chunks.append(chunk)
            if not message.get("more_body", False):
                break
        self._body = b"".join(chunks)
        return self._body

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON."""
        import json as json_module

        raw = await self.body()
        return json_module.loads(raw)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable.

        Prefers ``raw_path`` so percent-escapes survive until a route
        decodes its own parameters.
        """
        raw_path: bytes = scope.get("raw_path") or b""
        if raw_path:
            path = raw_path.decode("latin-1").split("?", 1)[0]
        else:
            path = quote(scope["path"], safe=_PATH_SAFE)
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=path,
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b"").decode("latin-1"),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
