"""Ordered route list with per-method registration helpers.

Routes are tested strictly in registration order. There is no lookup
table: each route is a pipeline step that either handles the request or
forwards it, so several routes can serve one request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tinyroute._internal.compose import compose
from tinyroute._internal.types import Handler, Next
from tinyroute.config import RouterConfig
from tinyroute.errors import ConfigurationError
from tinyroute.routing.pattern import compile_pattern
from tinyroute.routing.route import Route

if TYPE_CHECKING:
    from tinyroute.context import Context

logger = logging.getLogger("tinyroute.routing")

METHODS: tuple[str, ...] = ("OPTIONS", "HEAD", "GET", "POST", "PUT", "PATCH", "DELETE")


def build_route(
    method: str | None,
    pattern: str,
    handlers: tuple[Handler, ...],
    config: RouterConfig,
) -> Route:
    """Compile a pattern and handler chain into a ``Route``.

    Raises ``ConfigurationError`` when *handlers* is empty or the pattern
    cannot be compiled.
    """
    method = method.upper() if method else None
    if not handlers:
        msg = f"Route {method or 'ALL'} {pattern} must have at least one handler"
        raise ConfigurationError(msg)

    matcher = compile_pattern(pattern, config)
    handler = handlers[0] if len(handlers) == 1 else compose(handlers)
    return Route(
        method=method,
        pattern=pattern,
        matcher=matcher,
        handlers=handlers,
        handler=handler,
    )


class Router:
    """An ordered list of compiled routes sharing one ``RouterConfig``.

    Usage::

        router = Router(RouterConfig(trailing=False))
        router.get("/users/:id", show_user).post("/users", create_user)
        app.use(router)

    A router is itself a pipeline step: when called it runs its routes in
    order and falls through to ``next`` if none of them stops the chain.
    """

    __slots__ = ("_chain", "_routes", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._routes: list[Route] = []
        self._chain: Handler | None = None

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes, in registration order."""
        return tuple(self._routes)

    def add(self, method: str | None, pattern: str, *handlers: Handler) -> Route:
        """Compile and append a route. ``method=None`` matches any method."""
        route = build_route(method, pattern, handlers, self.config)
        self._routes.append(route)
        self._chain = None
        logger.debug("Registered route %s %s", route.method or "ALL", pattern)
        return route

    # -- Per-method helpers --

    def options(self, pattern: str, *handlers: Handler) -> Router:
        self.add("OPTIONS", pattern, *handlers)
        return self

    def head(self, pattern: str, *handlers: Handler) -> Router:
        self.add("HEAD", pattern, *handlers)
        return self

    def get(self, pattern: str, *handlers: Handler) -> Router:
        """Register a GET route. It also answers HEAD requests."""
        self.add("GET", pattern, *handlers)
        return self

    def post(self, pattern: str, *handlers: Handler) -> Router:
        self.add("POST", pattern, *handlers)
        return self

    def put(self, pattern: str, *handlers: Handler) -> Router:
        self.add("PUT", pattern, *handlers)
        return self

    def patch(self, pattern: str, *handlers: Handler) -> Router:
        self.add("PATCH", pattern, *handlers)
        return self

    def delete(self, pattern: str, *handlers: Handler) -> Router:
        self.add("DELETE", pattern, *handlers)
        return self

    def all(self, pattern: str, *handlers: Handler) -> Router:
        """Register a route for every method."""
        self.add(None, pattern, *handlers)
        return self

    # -- Pipeline step --

    async def __call__(self, ctx: Context, next: Next) -> None:
        chain = self._chain
        if chain is None:
            chain = self._chain = compose(self._routes)
        await chain(ctx, next)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"<Router routes={len(self._routes)} config={self.config!r}>"
