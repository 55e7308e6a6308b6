"""tinyroute exception hierarchy.

Shared across Router, App, routes, and the server glue so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class TinyRouteError(Exception):
    """Base for all tinyroute-specific errors."""


class ConfigurationError(TinyRouteError):
    """Raised when a route or app is set up incorrectly.

    Raised at registration time (application startup), never per request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(TinyRouteError):
    """An error that maps directly to an HTTP status code.

    Raised by routes, middleware, or handlers. The server catches these
    and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no step in the pipeline produced a response."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class ParamDecodeError(HTTPError):
    """400 — a captured path parameter is not valid percent-encoding."""

    def __init__(self, raw: str) -> None:
        super().__init__(status=400, detail=f"Malformed path parameter {raw!r}")
