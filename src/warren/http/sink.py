"""The live response sink handed to response writers.

Wraps ASGI ``send()`` with a small stateful response object: status and
headers are staged until the first body write (or an explicit
``write_head``), then go out as ``http.response.start``. The sink knows
whether headers are on the wire and whether the body has ended, which is
what the dispatcher needs to decide if a last-resort response is still
possible.
"""

from collections.abc import Mapping

from warren._internal.asgi import Send
from warren.errors import HeadersAlreadySent, InvalidHeader, ResponseFinished


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _content_length_allowed(status: int) -> bool:
    # 304 may still describe the selected representation's length.
    return not (100 <= status < 200 or status == 204)


def _encode(chunk: str | bytes) -> bytes:
    return chunk.encode("utf-8") if isinstance(chunk, str) else chunk


def _check_header(name: str, value: str) -> None:
    """Reject a header that would fail or split when sent."""
    for part in (name, value):
        try:
            part.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise InvalidHeader(f"Header {name!r} is not latin-1 encodable") from exc
        if "\r" in part or "\n" in part or "\0" in part:
            raise InvalidHeader(f"Header {name!r} contains a control character")
    if not name or ":" in name or " " in name:
        raise InvalidHeader(f"Invalid header name {name!r}")


class ResponseSink:
    """One HTTP response over an ASGI ``send`` callable.

    Usage inside a response writer::

        async def write(sink: ResponseSink) -> None:
            sink.status_code = 201
            sink.set_header("Content-Type", "text/plain")
            await sink.end("created")

    Headers are case-insensitive and stored lower-cased. Status and headers
    can be changed freely until they are sent; afterwards any change raises
    :class:`HeadersAlreadySent`. Writing after :meth:`end` raises
    :class:`ResponseFinished`.
    """

    __slots__ = ("_finished", "_headers", "_headers_sent", "_send", "status_code")

    def __init__(self, send: Send) -> None:
        self._send = send
        self.status_code = 200
        self._headers: dict[str, list[str]] = {}
        self._headers_sent = False
        self._finished = False

    # -- State --

    @property
    def headers_sent(self) -> bool:
        return self._headers_sent

    @property
    def finished(self) -> bool:
        return self._finished

    # -- Headers --

    def set_header(self, name: str, value: str | int | list[str]) -> None:
        """Set a header, replacing any previous value.

        Raises:
            InvalidHeader: If the name or a value cannot be sent as-is.
        """
        self._check_headers_open()
        values = [str(v) for v in value] if isinstance(value, list) else [str(value)]
        for v in values:
            _check_header(name, v)
        self._headers[name.lower()] = values

    def get_header(self, name: str) -> str | None:
        values = self._headers.get(name.lower())
        if not values:
            return None
        return ", ".join(values)

    def has_header(self, name: str) -> bool:
        return name.lower() in self._headers

    def remove_header(self, name: str) -> None:
        self._check_headers_open()
        self._headers.pop(name.lower(), None)

    def reset(self) -> None:
        """Discard the staged status and headers.

        Only possible while nothing has been sent; raises
        :class:`HeadersAlreadySent` otherwise.
        """
        self._check_headers_open()
        self.status_code = 200
        self._headers.clear()

    # -- Sending --

    async def write_head(
        self,
        status: int,
        headers: Mapping[str, str | int] | None = None,
    ) -> None:
        """Send the status line and headers immediately."""
        self._check_headers_open()
        self.status_code = status
        for name, value in (headers or {}).items():
            self.set_header(name, value)
        await self._start()

    async def write(self, chunk: str | bytes) -> None:
        """Send a body chunk, sending headers first if needed."""
        if self._finished:
            raise ResponseFinished("Cannot write after the response has ended")
        if not self._headers_sent:
            await self._start()
        body = _encode(chunk)
        if body and _body_allowed(self.status_code):
            await self._send({"type": "http.response.body", "body": body, "more_body": True})

    async def end(self, chunk: str | bytes = b"") -> None:
        """Send the final body chunk and close the response."""
        if self._finished:
            raise ResponseFinished("Response has already ended")
        if not self._headers_sent:
            await self._start()
        body = _encode(chunk) if _body_allowed(self.status_code) else b""
        self._finished = True
        await self._send({"type": "http.response.body", "body": body, "more_body": False})

    async def _start(self) -> None:
        raw_headers = [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, values in self._headers.items()
            for value in values
            if name != "content-length" or _content_length_allowed(self.status_code)
        ]
        self._headers_sent = True
        await self._send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": raw_headers,
            }
        )

    def _check_headers_open(self) -> None:
        if self._headers_sent:
            raise HeadersAlreadySent("Cannot modify headers after they are sent")

    def __repr__(self) -> str:
        state = "finished" if self._finished else "sent" if self._headers_sent else "pending"
        return f"ResponseSink(status={self.status_code}, {state})"
