"""Invoke helpers — call sync or async handlers uniformly.

tinyroute handlers can be ``def`` or ``async def``. Any code that calls
a user-provided handler must handle both cases. This module provides
a single helper so the sync/async check lives in exactly one place.

Usage::

    from tinyroute._internal.invoke import invoke

    result = await invoke(handler, ctx, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    Works with both sync and async callables::

        # sync — returns immediately, no await needed
        def stamp(ctx, next):
            ctx.res.headers["x-seen"] = "1"
            next()  # the chain continues once stamp returns

        # async — returns coroutine, awaited automatically
        async def show(ctx, next):
            ctx.res.body = await load(ctx.req.params["id"])
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
