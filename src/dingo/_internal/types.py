"""Shared type aliases used across dingo modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from dingo.context import Context

# Route handler: receives the request Context, writes to ctx.response
Handler: TypeAlias = Callable[["Context"], Any]

# Positional handler: receives the Context plus one str per unnamed group
PositionalHandler: TypeAlias = Callable[..., Any]

# Error hook: (ctx, status) -> True when it wrote the response itself
ErrorHook: TypeAlias = Callable[["Context", int], bool]
