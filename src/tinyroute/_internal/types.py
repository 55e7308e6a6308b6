"""Shared type aliases used across tinyroute modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# The continuation handed to every pipeline step
Next: TypeAlias = Callable[[], Awaitable[None]]

# Pipeline step / route handler — ``(ctx, next)``, sync or async
Handler: TypeAlias = Callable[..., Any]

# Error handler — receives (ctx, exc)
ErrorHandler: TypeAlias = Callable[..., Any]
