"""Error handling for requests that escape the pipeline.

Maps HTTPError exceptions and unexpected failures onto ``ctx.res``,
using registered error handlers or sensible defaults.
"""

import logging
import traceback
from collections.abc import Mapping

from tinyroute._internal.invoke import invoke
from tinyroute._internal.types import ErrorHandler
from tinyroute.context import Context
from tinyroute.errors import HTTPError

logger = logging.getLogger("tinyroute.server")


def find_error_handler(
    exc: Exception,
    error_handlers: Mapping[int | type, ErrorHandler],
) -> ErrorHandler | None:
    """Look up a handler for *exc*.

    Tries the exact exception class, then the status code of an
    ``HTTPError``, then the base classes in MRO order.
    """
    handler = error_handlers.get(type(exc))
    if handler is None and isinstance(exc, HTTPError):
        handler = error_handlers.get(exc.status)
    if handler is not None:
        return handler
    for cls in type(exc).__mro__[1:]:
        if cls in error_handlers:
            return error_handlers[cls]
    return None


async def _call_error_handler(handler: ErrorHandler, ctx: Context, exc: Exception) -> None:
    """Run a custom error handler; a failing handler leaves a plain 500."""
    try:
        await invoke(handler, ctx, exc)
    except Exception:
        logger.exception("Error handler for %s failed", type(exc).__name__)
        ctx.res.set_error(500, "Internal Server Error")


async def handle_http_error(
    exc: HTTPError,
    ctx: Context,
    error_handlers: Mapping[int | type, ErrorHandler],
) -> None:
    """Write an HTTPError to the response, via a custom handler if registered."""
    logger.debug("%d %s %s: %s", exc.status, ctx.req.method, ctx.req.path, exc.detail)
    ctx.res.set_error(exc.status, exc.detail, exc.headers)
    handler = find_error_handler(exc, error_handlers)
    if handler is not None:
        await _call_error_handler(handler, ctx, exc)


async def handle_internal_error(
    exc: Exception,
    ctx: Context,
    error_handlers: Mapping[int | type, ErrorHandler],
    debug: bool,
) -> None:
    """Log an unexpected exception and write a 500 response."""
    logger.exception("Unhandled error on %s %s", ctx.req.method, ctx.req.path, exc_info=exc)
    if debug:
        detail = "".join(traceback.format_exception(exc))
    else:
        detail = "Internal Server Error"
    ctx.res.set_error(500, detail)

    handler = find_error_handler(exc, error_handlers) or error_handlers.get(500)
    if handler is not None:
        await _call_error_handler(handler, ctx, exc)
