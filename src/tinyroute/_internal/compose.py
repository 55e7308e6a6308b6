"""Fold ``(ctx, next)`` steps into one step.

Each step receives ``next``, a zero-argument coroutine function that runs
the rest of the chain. A step that never calls ``next()`` ends the chain.
"""

import inspect
from collections.abc import Coroutine, Sequence
from typing import Any

from tinyroute._internal.invoke import invoke
from tinyroute._internal.types import Handler, Next


async def _end() -> None:
    return None


def compose(steps: Sequence[Handler]) -> Handler:
    """Return one step that runs *steps* in order.

    A sync step may call ``next()`` without awaiting or returning it; the
    rest of the chain then runs as soon as that step returns.

    Raises ``RuntimeError`` if a step calls ``next()`` more than once.
    """
    chain = tuple(steps)

    async def composed(ctx: Any, next: Next = _end) -> None:
        async def dispatch(i: int) -> None:
            if i == len(chain):
                await next()
                return

            pending: list[Coroutine[Any, Any, None]] = []

            def step_next() -> Coroutine[Any, Any, None]:
                if pending:
                    msg = "next() called multiple times"
                    raise RuntimeError(msg)
                pending.append(dispatch(i + 1))
                return pending[0]

            try:
                await invoke(chain[i], ctx, step_next)
            except BaseException:
                if pending and inspect.getcoroutinestate(pending[0]) == inspect.CORO_CREATED:
                    pending[0].close()
                raise

            # Called but never awaited
            if pending and inspect.getcoroutinestate(pending[0]) == inspect.CORO_CREATED:
                await pending[0]

        await dispatch(0)

    return composed
