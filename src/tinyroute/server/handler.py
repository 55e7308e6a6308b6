"""ASGI handler — translates ASGI scope/messages to tinyroute types.

The only component that touches raw ASGI HTTP messages directly. Builds a
``Context`` from the scope, runs it through the pipeline, maps escaped
errors onto the response, and sends the response back through ASGI send().
"""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import Token
from typing import TYPE_CHECKING

from tinyroute._internal.asgi import Receive, Scope, Send
from tinyroute._internal.types import ErrorHandler, Handler
from tinyroute.context import Context, context_var
from tinyroute.errors import HTTPError
from tinyroute.http.request import Request
from tinyroute.server.errors import handle_http_error, handle_internal_error
from tinyroute.server.sender import send_response

if TYPE_CHECKING:
    from tinyroute.app import App


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    app: App | None,
    pipeline: Handler,
    error_handlers: Mapping[int | type, ErrorHandler],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline.

    Nothing in the pipeline writing a response leaves the default
    ``404 Not Found`` in place.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    ctx = Context(req=request, app=app)

    # Set context var (reset after dispatch)
    token: Token[Context] = context_var.set(ctx)
    try:
        await pipeline(ctx)
    except HTTPError as exc:
        await handle_http_error(exc, ctx, error_handlers)
    except Exception as exc:
        await handle_internal_error(exc, ctx, error_handlers, debug)
    finally:
        context_var.reset(token)

    await send_response(ctx.res, send, head=request.method == "HEAD")
