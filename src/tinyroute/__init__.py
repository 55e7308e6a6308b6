"""tinyroute — path patterns compiled into continuation-style route steps.

Routes are middleware: each one either runs its handlers or hands the
request to the next step, so several routes can serve one request.

Basic usage::

    from tinyroute import App

    app = App()

    async def show(ctx, next):
        ctx.res.body = {"id": ctx.req.params["id"]}

    app.get("/users/:id", show)

Serve ``app`` with any ASGI server.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Context",
    "HTTPError",
    "Middleware",
    "Next",
    "NotFound",
    "ParamDecodeError",
    "Request",
    "Response",
    "Route",
    "Router",
    "RouterConfig",
    "TinyRouteError",
    "compile_pattern",
    "get_context",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tinyroute`` fast while providing a clean top-level API.
    """
    if name == "App":
        from tinyroute.app import App

        return App

    if name in ("AppConfig", "RouterConfig"):
        from tinyroute import config as _config

        return getattr(_config, name)

    if name == "Request":
        from tinyroute.http.request import Request

        return Request

    if name == "Response":
        from tinyroute.http.response import Response

        return Response

    if name in ("Route", "Router", "compile_pattern"):
        from tinyroute import routing as _routing

        return getattr(_routing, name)

    if name in ("Middleware", "Next"):
        from tinyroute.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("Context", "get_context"):
        from tinyroute import context as _ctx

        return getattr(_ctx, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "NotFound",
        "ParamDecodeError",
        "TinyRouteError",
    ):
        from tinyroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
