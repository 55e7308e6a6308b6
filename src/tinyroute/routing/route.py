"""Route and RouteMatch frozen dataclasses."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tinyroute._internal.invoke import invoke
from tinyroute._internal.types import Handler, Next
from tinyroute.routing.params import decode_params
from tinyroute.routing.pattern import Matcher

if TYPE_CHECKING:
    from tinyroute.context import Context

logger = logging.getLogger("tinyroute.routing")


def method_matches(request_method: str, route_method: str | None) -> bool:
    """Whether a request method is served by a route registered for *route_method*.

    ``None`` stands for any method. GET routes also answer HEAD requests.
    """
    if route_method is None:
        return True
    request_method = request_method.upper()
    route_method = route_method.upper()
    if request_method == route_method:
        return True
    return route_method == "GET" and request_method == "HEAD"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    params: dict[str, str | None]
    route_path: str


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route. Created at registration, never mutated.

    A route is a pipeline step: called with ``(ctx, next)`` it either runs
    its handler chain or hands control straight to ``next``.
    """

    method: str | None
    pattern: str
    matcher: Matcher
    handlers: tuple[Handler, ...]
    # handlers[0] alone, or all handlers composed in order
    handler: Handler

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Test a request against this route and decode its parameters.

        Raises ``ParamDecodeError`` when a captured value is malformed.
        """
        if not method_matches(method, self.method):
            return None
        raw = self.matcher.match(path)
        if raw is None:
            return None
        return RouteMatch(params=decode_params(raw), route_path=self.pattern)

    async def __call__(self, ctx: Context, next: Next) -> None:
        match = self.match(ctx.req.method, ctx.req.path)
        if match is None:
            await next()
            return

        logger.debug("%s %s matched route %s", ctx.req.method, ctx.req.path, self.pattern)
        ctx.req.params = match.params
        ctx.req.route_path = match.route_path
        await invoke(self.handler, ctx, next)

    def __repr__(self) -> str:
        return f"<Route {self.method or 'ALL'} {self.pattern!r}>"
