"""tinyroute application class.

Mutable during setup (middleware and route registration).
Frozen at runtime when ``__call__()`` is first invoked.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from tinyroute._internal.asgi import Receive, Scope, Send
from tinyroute._internal.compose import compose
from tinyroute._internal.types import ErrorHandler, Handler
from tinyroute.config import AppConfig
from tinyroute.middleware.protocol import Middleware
from tinyroute.routing.router import Router
from tinyroute.server.handler import handle_request

logger = logging.getLogger("tinyroute.server")


class App:
    """The tinyroute application: one ordered pipeline of steps.

    Middleware added with ``use()`` and routes added with ``get()``,
    ``post()``, ... share that pipeline and run in registration order::

        app = App()
        app.use(timing)
        app.get("/users/:id", load_user, show_user)
        app.all("/users/:id", not_allowed)

    Routes registered here are compiled with ``config.router`` and are
    kept, in order, on ``app.router``.

    Thread safety:
        The setup phase is single-threaded (registration at import time).
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread composes the pipeline, even when several ASGI workers
        call ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_pipeline",
        "_steps",
        "config",
        "router",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self.router: Router = Router(self.config.router)
        self._steps: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._pipeline: Handler | None = None

    # -- Middleware --

    def use(self, middleware: Middleware) -> App:
        """Append a step to the pipeline."""
        self._check_not_frozen()
        self._steps.append(middleware)
        return self

    # -- Route registration --

    def route(self, method: str | None, pattern: str, *handlers: Handler) -> App:
        """Register a route for *method* (``None`` for every method).

        Raises ``ConfigurationError`` when no handler is given.
        """
        self._check_not_frozen()
        route = self.router.add(method, pattern, *handlers)
        self._steps.append(route)
        return self

    def options(self, pattern: str, *handlers: Handler) -> App:
        return self.route("OPTIONS", pattern, *handlers)

    def head(self, pattern: str, *handlers: Handler) -> App:
        return self.route("HEAD", pattern, *handlers)

    def get(self, pattern: str, *handlers: Handler) -> App:
        """Register a GET route. It also answers HEAD requests."""
        return self.route("GET", pattern, *handlers)

    def post(self, pattern: str, *handlers: Handler) -> App:
        return self.route("POST", pattern, *handlers)

    def put(self, pattern: str, *handlers: Handler) -> App:
        return self.route("PUT", pattern, *handlers)

    def patch(self, pattern: str, *handlers: Handler) -> App:
        return self.route("PATCH", pattern, *handlers)

    def delete(self, pattern: str, *handlers: Handler) -> App:
        return self.route("DELETE", pattern, *handlers)

    def all(self, pattern: str, *handlers: Handler) -> App:
        """Register a route for every method."""
        return self.route(None, pattern, *handlers)

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler by status code or exception class.

        The handler is called as ``handler(ctx, exc)`` after ``ctx.res``
        has been filled with the default error response::

            @app.error(404)
            def not_found(ctx, exc):
                ctx.res.body = {"error": "no such page"}
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        assert self._pipeline is not None

        await handle_request(
            scope,
            receive,
            send,
            app=self,
            pipeline=self._pipeline,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge startup and shutdown; freeze on startup."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
            else:
                logger.warning("Ignoring unknown lifespan message %r", message["type"])

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compose the pipeline into its frozen runtime form.

        MUST only be called while holding _freeze_lock.
        """
        self._pipeline = compose(self._steps)
        self._frozen = True
        logger.debug(
            "App frozen: %d steps, %d routes",
            len(self._steps),
            len(self.router),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and middleware before the first request."
            )
            raise RuntimeError(msg)

    def __repr__(self) -> str:
        return f"<App steps={len(self._steps)} routes={len(self.router)}>"
