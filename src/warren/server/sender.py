"""Last-resort response emission.

Used by the dispatcher when writing the resolved response failed. Talks
to the sink directly, bypassing response writers.
"""

from warren.http.sink import ResponseSink

FALLBACK_STATUS = 500
FALLBACK_BODY = b"Internal Server Error"


async def send_fallback_response(sink: ResponseSink) -> None:
    """Send a bare plain-text 500.

    Whatever status and headers the failed writer staged are dropped
    first; the fallback carries only its own two headers.

    Raises :class:`~warren.errors.HeadersAlreadySent` when an earlier write
    already put headers on the wire; nothing can be done about it at this
    point.
    """
    sink.reset()
    await sink.write_head(
        FALLBACK_STATUS,
        {
            "Content-Type": "text/plain",
            "Content-Length": len(FALLBACK_BODY),
        },
    )
    await sink.end(FALLBACK_BODY)
