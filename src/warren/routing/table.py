"""The route table: URL path → HTTP method → handler."""

from collections.abc import Iterator
from http import HTTPMethod

from warren._internal.types import Handler, MethodMap

# Method-map key matching any request method
ALL = "ALL"

# WebDAV, CalDAV and other registered extension methods beyond HTTPMethod
EXTENSION_METHODS = frozenset(
    {
        "ACL", "BIND", "CHECKOUT", "COPY", "LINK", "LOCK", "M-SEARCH", "MERGE",
        "MKACTIVITY", "MKCALENDAR", "MKCOL", "MOVE", "NOTIFY", "PROPFIND",
        "PROPPATCH", "PURGE", "QUERY", "REBIND", "REPORT", "SEARCH", "SOURCE",
        "SUBSCRIBE", "UNBIND", "UNLINK", "UNLOCK", "UNSUBSCRIBE",
    }
)  # fmt: skip

HTTP_METHODS: frozenset[str] = (
    frozenset(method.value for method in HTTPMethod) | EXTENSION_METHODS
)


def is_route_method(name: str) -> bool:
    """True if *name* can key a method map (an HTTP verb or ``ALL``)."""
    return name == ALL or name in HTTP_METHODS


class RouteTable:
    """Two-level mapping of path → method → handler.

    Paths always start with ``/``. A later registration for the same
    (path, method) pair replaces the earlier one.

    Built during startup by :func:`~warren.routing.builder.build_routes`
    and treated as read-only while serving. To reload routes, build a new
    table and swap it in.
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: dict[str, MethodMap] = {}

    def add(self, path: str, method: str, handler: Handler) -> None:
        """Register *handler* for *method* at *path*."""
        self._routes.setdefault(path, {})[method] = handler

    def get(self, path: str) -> MethodMap | None:
        """Return the method map registered at *path*, if any."""
        return self._routes.get(path)

    def lookup(self, path: str, method: str) -> Handler | None:
        """Return the handler for exactly (*path*, *method*), if any."""
        methods = self._routes.get(path)
        if methods is None:
            return None
        return methods.get(method)

    def entries(self) -> Iterator[tuple[str, str, Handler]]:
        """Yield ``(method, path, handler)`` for every registration, by path."""
        for path in sorted(self._routes):
            for method, handler in sorted(self._routes[path].items()):
                yield method, path, handler

    def __contains__(self, path: object) -> bool:
        return path in self._routes

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        count = sum(len(methods) for methods in self._routes.values())
        return f"RouteTable({len(self._routes)} paths, {count} handlers)"
