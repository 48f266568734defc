"""Routing: filesystem-built route table and handler resolution.

The table is built once from a directory tree before serving starts and
is only read afterwards. Resolution is a pair of dict lookups plus, on a
miss, a walk up the requested path looking for scoped ``404``/``500``
handlers.
"""

from warren.routing.builder import RouteType, build_routes, default_route_type
from warren.routing.resolve import (
    get_handler_for_error,
    get_handler_for_not_found,
    get_handler_for_request,
)
from warren.routing.table import ALL, HTTP_METHODS, RouteTable

__all__ = [
    "ALL",
    "HTTP_METHODS",
    "RouteTable",
    "RouteType",
    "build_routes",
    "default_route_type",
    "get_handler_for_error",
    "get_handler_for_not_found",
    "get_handler_for_request",
]
