"""ASGI 3 callable types.

Only the dispatcher's ASGI adapter and the sender touch these.
Handlers see ``Context``, ``Request`` and ``ResponseWriter`` instead.
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeAlias

Message: TypeAlias = dict[str, Any]

Scope: TypeAlias = Mapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]
