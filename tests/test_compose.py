"""Tests for tinyroute._internal.compose — ordered (ctx, next) chains."""

from types import SimpleNamespace

import pytest

from tinyroute._internal.compose import compose


def _ctx() -> SimpleNamespace:
    return SimpleNamespace(calls=[])


@pytest.mark.anyio
async def test_runs_steps_in_order() -> None:
    async def a(ctx, next):
        ctx.calls.append("a")
        await next()
        ctx.calls.append("a-after")

    async def b(ctx, next):
        ctx.calls.append("b")
        await next()

    ctx = _ctx()
    await compose([a, b])(ctx)
    assert ctx.calls == ["a", "b", "a-after"]


@pytest.mark.anyio
async def test_step_that_does_not_call_next_stops_chain() -> None:
    async def a(ctx, next):
        ctx.calls.append("a")

    async def b(ctx, next):
        ctx.calls.append("b")

    ctx = _ctx()
    await compose([a, b])(ctx)
    assert ctx.calls == ["a"]


@pytest.mark.anyio
async def test_last_next_is_outer_continuation() -> None:
    async def a(ctx, next):
        await next()

    ctx = _ctx()

    async def outer():
        ctx.calls.append("outer")

    await compose([a])(ctx, outer)
    assert ctx.calls == ["outer"]


@pytest.mark.anyio
async def test_empty_chain_calls_continuation() -> None:
    ctx = _ctx()

    async def outer():
        ctx.calls.append("outer")

    await compose([])(ctx, outer)
    assert ctx.calls == ["outer"]


@pytest.mark.anyio
async def test_sync_steps() -> None:
    def a(ctx, next):
        ctx.calls.append("sync")

    ctx = _ctx()
    await compose([a])(ctx)
    assert ctx.calls == ["sync"]


@pytest.mark.anyio
async def test_next_called_twice_raises() -> None:
    async def a(ctx, next):
        await next()
        await next()

    with pytest.raises(RuntimeError, match="next\\(\\) called multiple times"):
        await compose([a])(_ctx())


@pytest.mark.anyio
async def test_errors_propagate() -> None:
    async def a(ctx, next):
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        await compose([a])(_ctx())


@pytest.mark.anyio
async def test_sync_step_calling_next_without_await_continues() -> None:
    def a(ctx, next):
        ctx.calls.append("a")
        next()

    async def b(ctx, next):
        ctx.calls.append("b")

    ctx = _ctx()
    await compose([a, b])(ctx)
    assert ctx.calls == ["a", "b"]


@pytest.mark.anyio
async def test_sync_step_calling_next_twice_raises() -> None:
    def a(ctx, next):
        next()
        next()

    with pytest.raises(RuntimeError, match="next\\(\\) called multiple times"):
        await compose([a])(_ctx())
