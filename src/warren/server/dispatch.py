"""ASGI request dispatch: one request from scope to finished response.

The only component that touches raw ASGI scopes directly. Each request
runs through four stages, strictly in order:

1. resolve the route handler and call it for a response writer
2. if that fails, call the closest ``500`` handler for a writer instead
3. run the writer against the response sink
4. if writing fails, send a bare 500 straight to the sink

``on_responded`` fires once at the end whichever way the request went.
Hooks are observers: their return values are ignored, and a hook that
raises is logged without changing the outcome of the request.
"""

import logging
from typing import Any

from warren._internal.asgi import Receive, Scope, Send
from warren._internal.invoke import invoke
from warren._internal.types import ResponseWriter
from warren.config import ServeOptions
from warren.errors import IncompleteResponse, InvalidResponse
from warren.http.request import ServerRequest
from warren.http.sink import ResponseSink
from warren.routing.resolve import get_handler_for_error, get_handler_for_request
from warren.routing.table import RouteTable
from warren.server.sender import send_fallback_response

logger = logging.getLogger("warren.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    routes: RouteTable,
    options: ServeOptions[Any],
) -> None:
    """Process a single HTTP request through the full lifecycle.

    Raises only when even the last-resort response could not be sent
    (or the context factory failed); the server's own error handling
    deals with the connection from there.
    """
    if scope["type"] != "http":
        return

    request = ServerRequest.from_asgi(scope, receive)
    context = options.get_request_context(request)
    sink = ResponseSink(send)

    try:
        await _respond(routes, request, context, sink, options)
    finally:
        await _notify("on_responded", options.on_responded, context, sink)


async def _respond(
    routes: RouteTable,
    request: ServerRequest,
    context: Any,
    sink: ResponseSink,
    options: ServeOptions[Any],
) -> None:
    try:
        writer = await _get_writer(routes, request, context, options)
        if not callable(writer):
            raise InvalidResponse(writer)
        await invoke(writer, sink)
        if not sink.finished:
            raise IncompleteResponse()
    except Exception as exc:
        logger.error(
            "Writing response failed: %s %s: %s",
            request.method,
            request.url,
            exc,
            exc_info=exc,
        )
        await _notify("on_error_writing", options.on_error_writing, context, exc)
        try:
            await send_fallback_response(sink)
        except Exception:
            logger.exception(
                "Fallback response could not be sent: %s %s", request.method, request.url
            )
            raise


async def _get_writer(
    routes: RouteTable,
    request: ServerRequest,
    context: Any,
    options: ServeOptions[Any],
) -> ResponseWriter:
    """Call the route handler, or the closest error handler if it fails.

    A failing error handler is not caught here; it surfaces as a write
    failure.
    """
    try:
        handler = get_handler_for_request(routes, request)
        return await invoke(handler, context)
    except Exception as exc:
        logger.exception("500 %s %s", request.method, request.url)
        await _notify("on_error_handling", options.on_error_handling, context, exc)
        error_handler = get_handler_for_error(routes, request)
        return await invoke(error_handler, context)


async def _notify(name: str, hook: Any, *args: Any) -> None:
    if hook is None:
        return
    try:
        await invoke(hook, *args)
    except Exception:
        logger.exception("%s hook raised", name)
