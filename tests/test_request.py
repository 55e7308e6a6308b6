"""Tests for tinyroute.http.request — Request built from ASGI scopes."""

import pytest

from tinyroute.http.request import Request


def _scope(**overrides) -> dict:
    scope = {
        "type": "http",
        "method": "get",
        "path": "/package/a b",
        "raw_path": b"/package/a%20b",
        "query_string": b"q=1&tag=x",
        "headers": [(b"content-type", b"application/json")],
        "client": ("127.0.0.1", 5000),
    }
    scope.update(overrides)
    return scope


async def _receive_body():
    return {"type": "http.request", "body": b'{"a": 1}', "more_body": False}


class TestFromASGI:
    def test_path_keeps_percent_escapes(self) -> None:
        req = Request.from_asgi(_scope(), _receive_body)
        assert req.path == "/package/a%20b"

    def test_path_quoted_without_raw_path(self) -> None:
        req = Request.from_asgi(_scope(raw_path=None), _receive_body)
        assert req.path == "/package/a%20b"

    def test_method_upper_cased(self) -> None:
        assert Request.from_asgi(_scope(), _receive_body).method == "GET"

    def test_query(self) -> None:
        req = Request.from_asgi(_scope(), _receive_body)
        assert req.query == {"q": "1", "tag": "x"}
        assert req.url == "/package/a%20b?q=1&tag=x"

    def test_headers_and_client(self) -> None:
        req = Request.from_asgi(_scope(), _receive_body)
        assert req.content_type == "application/json"
        assert req.client == ("127.0.0.1", 5000)

    def test_routing_fields_start_empty(self) -> None:
        req = Request.from_asgi(_scope(), _receive_body)
        assert req.params == {}
        assert req.route_path is None


class TestBody:
    @pytest.mark.anyio
    async def test_json(self) -> None:
        req = Request.from_asgi(_scope(), _receive_body)
        assert await req.json() == {"a": 1}

    @pytest.mark.anyio
    async def test_body_is_cached(self) -> None:
        calls = []

        async def receive():
            calls.append(1)
            return {"type": "http.request", "body": b"hi", "more_body": False}

        req = Request.from_asgi(_scope(), receive)
        assert await req.text() == "hi"
        assert await req.body() == b"hi"
        assert len(calls) == 1

    @pytest.mark.anyio
    async def test_chunked_body(self) -> None:
        chunks = iter(
            [
                {"type": "http.request", "body": b"a", "more_body": True},
                {"type": "http.request", "body": b"b", "more_body": False},
            ]
        )

        async def receive():
            return next(chunks)

        req = Request.from_asgi(_scope(), receive)
        assert await req.body() == b"ab"

    @pytest.mark.anyio
    async def test_default_body_is_empty(self) -> None:
        assert await Request(method="GET", path="/").body() == b""
