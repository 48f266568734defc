"""Handler resolution for incoming requests.

Every function here is total: when nothing in the table matches, a
built-in default handler is returned, so the dispatcher always has
something to invoke.

Not-found and error handlers are scoped by directory. A request for
``/a/b/c`` looks for ``/a/b/c/404``, then ``/a/b/404``, ``/a/404``, and
finally ``/404``; the closest level wins. Within one level, a handler for
the exact request method wins over an ``ALL`` handler.
"""

import posixpath

from warren._internal.types import Handler, MethodMap
from warren.http.request import ServerRequest
from warren.responses import status
from warren.routing.table import ALL, RouteTable

STATUS_NOT_FOUND = 404
STATUS_UNCAUGHT = 500

NOT_FOUND_SEGMENT = "404"
ERROR_SEGMENT = "500"

INDEX_SEGMENT = "index"


async def default_not_found(context: object) -> object:
    """Built-in not-found handler: plain-text 404."""
    return status(STATUS_NOT_FOUND)


async def default_uncaught(context: object) -> object:
    """Built-in error handler: plain-text 500."""
    return status(STATUS_UNCAUGHT)


def normalize_path(url: str) -> str:
    """Normalise a request path for table lookup.

    Collapses ``.``/``..`` and repeated slashes, drops any trailing slash,
    and guarantees a single leading ``/``.
    """
    path = posixpath.normpath("/" + url.lstrip("/"))
    if path.startswith("//"):
        path = "/" + path.lstrip("/")
    return path


def _method_handler(methods: MethodMap, method: str) -> Handler | None:
    handler = methods.get(method)
    if handler is None:
        handler = methods.get(ALL)
    return handler


def _scoped_handler(routes: RouteTable, path: str, method: str) -> Handler | None:
    methods = routes.get(path)
    if methods is None:
        return None
    return _method_handler(methods, method)


def _closest_handler(
    routes: RouteTable,
    request: ServerRequest,
    segment: str,
    default: Handler,
) -> Handler:
    """Walk from the request path up to ``/`` looking for a *segment* handler."""
    root = normalize_path(request.url) if request.url else "/"
    while root != "/":
        handler = _scoped_handler(routes, posixpath.join(root, segment), request.method)
        if handler is not None:
            return handler
        root = posixpath.dirname(root)

    handler = _scoped_handler(routes, posixpath.join(root, segment), request.method)
    if handler is not None:
        return handler
    return default


def get_handler_for_not_found(routes: RouteTable, request: ServerRequest) -> Handler:
    """Return the closest ``404`` handler for *request*."""
    return _closest_handler(routes, request, NOT_FOUND_SEGMENT, default_not_found)


def get_handler_for_error(routes: RouteTable, request: ServerRequest) -> Handler:
    """Return the closest ``500`` handler for *request*."""
    return _closest_handler(routes, request, ERROR_SEGMENT, default_uncaught)


def get_handler_for_request(routes: RouteTable, request: ServerRequest) -> Handler:
    """Return the handler for *request*.

    Resolution order:

    1. No URL at all: the built-in not-found handler.
    2. No method: not-found resolution.
    3. The exact path, else the directory's ``index`` route.
    4. The handler registered for the request method on that route,
       else its ``ALL`` handler.

    Any miss along the way falls through to not-found resolution.
    """
    if not request.url:
        return default_not_found
    if not request.method:
        return get_handler_for_not_found(routes, request)

    path = normalize_path(request.url)
    methods = routes.get(path)
    if methods is None:
        methods = routes.get(posixpath.join(path, INDEX_SEGMENT))
    if methods is None:
        return get_handler_for_not_found(routes, request)

    handler = _method_handler(methods, request.method)
    if handler is None:
        return get_handler_for_not_found(routes, request)
    return handler
