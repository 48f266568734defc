"""Shared type aliases used across warren modules."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from warren.http.sink import ResponseSink

# Response writer: performs the side effects of one HTTP response
ResponseWriter: TypeAlias = Callable[["ResponseSink"], Awaitable[None] | None]

# Route handler: receives the request context, produces a response writer
Handler: TypeAlias = Callable[[Any], Awaitable[ResponseWriter] | ResponseWriter]

# Per-path mapping from HTTP method (or ``ALL``) to handler
MethodMap: TypeAlias = dict[str, Handler]
