"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(ctx: Context, next: Next) -> None

Routes and routers are middleware too.
"""

from tinyroute.middleware.protocol import Middleware, Next

__all__ = ["Middleware", "Next"]
