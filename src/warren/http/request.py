"""The raw incoming request, as seen by the dispatcher.

Frozen metadata from the ASGI scope with async body access. This is what
a request context factory receives.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from warren._internal.asgi import Receive, Scope
from warren.http.headers import Headers


@dataclass(frozen=True, slots=True)
class ServerRequest:
    """An immutable incoming HTTP request.

    ``url`` is the request path without the query string; it is the value
    route resolution works from. Either ``url`` or ``method`` may be empty
    when the server hands over an incomplete scope, and resolution falls
    back accordingly.
    """

    method: str
    url: str
    query_string: bytes
    headers: Headers
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: cache for the consumed body
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> ServerRequest:
        """Build a request from a raw ASGI HTTP scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=(scope.get("method") or "").upper(),
            url=scope.get("path") or "",
            query_string=scope.get("query_string", b""),
            headers=Headers(tuple(scope.get("headers", ()))),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )

    @property
    def aborted(self) -> bool:
        """True once the client disconnected while the body was being read."""
        return self._cache.get("_aborted", False)

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                self._cache["_aborted"] = True
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self, encoding: str = "utf-8") -> str:
        """Read the body decoded as text."""
        return (await self.body()).decode(encoding)

    async def json(self) -> Any:
        """Parse the body as JSON."""
        import json as json_module

        raw = await self.body()
        return json_module.loads(raw)
