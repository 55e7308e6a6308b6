"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(ctx: Context, next: Next) -> None: ...

No base class required. The framework checks the shape, not the lineage.

Middleware works on the mutable ``ctx.res`` instead of returning a
response. Awaiting ``next()`` runs the rest of the pipeline; not awaiting
it ends the request at this step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from tinyroute._internal.types import Next

if TYPE_CHECKING:
    from tinyroute.context import Context

__all__ = ["Middleware", "Next"]


class Middleware(Protocol):
    """Protocol for tinyroute middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(ctx: Context, next: Next) -> None:
            start = time.monotonic()
            await next()
            elapsed = time.monotonic() - start
            ctx.res.headers["x-time"] = f"{elapsed:.3f}"

        # Class middleware
        class RateLimiter:
            async def __call__(self, ctx: Context, next: Next) -> None:
                ...
    """

    def __call__(self, ctx: Context, next: Next) -> Any: ...
