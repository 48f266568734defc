"""Response writer factories.

Each factory returns a writer: an async callable that receives the live
:class:`~warren.http.sink.ResponseSink`, sets status and headers, and ends
the response. Handlers return one of these::

    async def GET(context):
        return json({"ok": True})
"""

import json as json_module
from http import HTTPStatus
from pathlib import Path
from typing import Any

import anyio

from warren._internal.types import ResponseWriter
from warren.content_types import get_content_type
from warren.http.sink import ResponseSink

DEFAULT_STATUS = 200

# File responses are streamed in chunks of this size
CHUNK_SIZE = 64 * 1024


async def _write_body(sink: ResponseSink, status: int, content_type: str, body: bytes) -> None:
    sink.status_code = status
    sink.set_header("Content-Type", content_type)
    sink.set_header("Content-Length", len(body))
    await sink.end(body)


def text(body: str, *, status: int = DEFAULT_STATUS) -> ResponseWriter:
    """Respond with plain text."""

    async def write_text(sink: ResponseSink) -> None:
        await _write_body(sink, status, "text/plain", body.encode("utf-8"))

    return write_text


def json(data: Any, *, status: int = DEFAULT_STATUS) -> ResponseWriter:
    """Respond with *data* serialised as JSON."""

    async def write_json(sink: ResponseSink) -> None:
        body = json_module.dumps(data).encode("utf-8")
        await _write_body(sink, status, "application/json", body)

    return write_json


def html(body: str, *, status: int = DEFAULT_STATUS) -> ResponseWriter:
    """Respond with an HTML string."""

    async def write_html(sink: ResponseSink) -> None:
        await _write_body(sink, status, "text/html", body.encode("utf-8"))

    return write_html


def file(path: str | Path, *, status: int = DEFAULT_STATUS) -> ResponseWriter:
    """Respond with the contents of the file at *path*.

    The body is streamed chunk by chunk; flow control is left to the
    server behind the sink.
    """

    async def write_file(sink: ResponseSink) -> None:
        stat = await anyio.Path(path).stat()
        sink.status_code = status
        sink.set_header("Content-Type", get_content_type(path))
        sink.set_header("Content-Length", stat.st_size)
        async with await anyio.open_file(path, "rb") as f:
            while chunk := await f.read(CHUNK_SIZE):
                await sink.write(chunk)
        await sink.end()

    return write_file


def status(code: int, message: str | None = None) -> ResponseWriter:
    """A plain-text response with the given status code.

    The body defaults to the standard reason phrase (``"Not Found"`` for
    404), or the code itself when there is none.
    """
    if message is None:
        try:
            message = HTTPStatus(code).phrase
        except ValueError:
            message = str(code)
    body = message

    async def write_status(sink: ResponseSink) -> None:
        await _write_body(sink, code, "text/plain", body.encode("utf-8"))

    return write_status
