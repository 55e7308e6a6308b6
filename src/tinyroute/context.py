"""Per-request context.

A ``Context`` is created by the server for every HTTP request and handed
to each pipeline step. It is never shared between requests.

The current context is also published through a ``ContextVar`` so code
deep in a call stack can reach it without threading it through::

    from tinyroute.context import get_context

    user_id = get_context().req.params["id"]
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tinyroute.http.request import Request
from tinyroute.http.response import Response

if TYPE_CHECKING:
    from tinyroute.app import App


@dataclass(slots=True)
class Context:
    """Request, response, and a scratch ``state`` dict for one request."""

    req: Request
    res: Response = field(default_factory=Response)
    app: App | None = None
    # Free-form per-request storage for middleware
    state: dict[str, Any] = field(default_factory=dict)


context_var: ContextVar[Context] = ContextVar("tinyroute_context")
"""The current context. Set by the server before dispatch."""


def get_context() -> Context:
    """Return the current request context.

    Raises ``LookupError`` if called outside a request.
    """
    return context_var.get()
