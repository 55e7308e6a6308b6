"""Tests for tinyroute.routing.router — registration and ordered dispatch."""

import pytest

from tinyroute.config import RouterConfig
from tinyroute.context import Context
from tinyroute.errors import ConfigurationError
from tinyroute.http.request import Request
from tinyroute.routing.router import METHODS, Router


async def _noop(ctx, next):
    return None


class TestRegistration:
    def test_add_returns_route(self) -> None:
        r = Router()
        route = r.add("get", "/users/:id", _noop)
        assert route.method == "GET"
        assert route.pattern == "/users/:id"
        assert route.handlers == (_noop,)
        assert route.handler is _noop
        assert r.routes == (route,)

    def test_any_method(self) -> None:
        r = Router()
        route = r.add(None, "/tiny", _noop)
        assert route.method is None

    def test_multiple_handlers_are_composed(self) -> None:
        async def other(ctx, next):
            return None

        route = Router().add("GET", "/tiny", _noop, other)
        assert route.handlers == (_noop, other)
        assert route.handler is not _noop

    def test_registration_order_kept(self) -> None:
        r = Router()
        r.get("/b", _noop).get("/a", _noop).post("/b", _noop)
        assert [(x.method, x.pattern) for x in r.routes] == [
            ("GET", "/b"),
            ("GET", "/a"),
            ("POST", "/b"),
        ]

    @pytest.mark.parametrize("method", [m.lower() for m in METHODS])
    def test_method_helpers(self, method: str) -> None:
        r = Router()
        assert getattr(r, method)("/tiny", _noop) is r
        assert r.routes[0].method == method.upper()

    def test_all_helper(self) -> None:
        r = Router()
        assert r.all("/tiny", _noop) is r
        assert r.routes[0].method is None

    def test_config_shared_by_routes(self) -> None:
        r = Router(RouterConfig(sensitive=True, trailing=False))
        r.get("/Tiny", _noop)
        matcher = r.routes[0].matcher
        assert matcher.match("/Tiny") == {}
        assert matcher.match("/tiny") is None
        assert matcher.match("/Tiny/") is None

    def test_len_and_repr(self) -> None:
        r = Router()
        r.get("/a", _noop)
        assert len(r) == 1
        assert "routes=1" in repr(r)


class TestRegistrationErrors:
    def test_no_handlers(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="must have at least one handler"):
            r.get("/tiny")

    def test_message_names_method_and_path(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="Route GET /tiny"):
            r.get("/tiny")
        with pytest.raises(ConfigurationError, match="Route ALL /tiny"):
            r.all("/tiny")

    def test_failure_leaves_earlier_routes(self) -> None:
        r = Router()
        r.get("/a", _noop)
        with pytest.raises(ConfigurationError):
            r.post("/b")
        assert [x.pattern for x in r.routes] == ["/a"]

    def test_invalid_pattern(self) -> None:
        with pytest.raises(ConfigurationError):
            Router().get("/:id/:id", _noop)


class TestRouterAsStep:
    @pytest.mark.anyio
    async def test_routes_stack_when_they_continue(self) -> None:
        calls = []

        async def first(ctx, next):
            calls.append("first")
            await next()

        async def second(ctx, next):
            calls.append("second")

        async def third(ctx, next):
            calls.append("third")

        r = Router()
        r.get("/tiny", first).get("/tiny", second).get("/tiny", third)
        await r(Context(req=Request(method="GET", path="/tiny")), _noop_next)
        assert calls == ["first", "second"]

    @pytest.mark.anyio
    async def test_falls_through_when_nothing_matches(self) -> None:
        reached = []

        async def outer():
            reached.append(True)

        r = Router()
        r.get("/a", _noop).post("/b", _noop)
        await r(Context(req=Request(method="GET", path="/b")), outer)
        assert reached == [True]

    @pytest.mark.anyio
    async def test_route_added_after_first_call_is_dispatched(self) -> None:
        calls = []

        async def first(ctx, next):
            calls.append("first")
            await next()

        async def second(ctx, next):
            calls.append("second")

        r = Router()
        r.get("/tiny", first)
        await r(Context(req=Request(method="GET", path="/tiny")), _noop_next)
        chain = r._chain
        await r(Context(req=Request(method="GET", path="/tiny")), _noop_next)
        assert r._chain is chain

        r.get("/tiny", second)
        await r(Context(req=Request(method="GET", path="/tiny")), _noop_next)
        assert calls == ["first", "first", "first", "second"]



async def _noop_next() -> None:
    return None
