"""Tests for warren.http.sink: the live response over ASGI send()."""

from typing import Any

import pytest

from warren.errors import HeadersAlreadySent, InvalidHeader, ResponseFinished
from warren.http.sink import ResponseSink


def _sink() -> tuple[ResponseSink, list[dict[str, Any]]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    return ResponseSink(send), messages


class TestHeaders:
    def test_case_insensitive(self) -> None:
        sink, _ = _sink()
        sink.set_header("Content-Type", "text/plain")
        assert sink.get_header("content-type") == "text/plain"
        assert sink.has_header("CONTENT-TYPE")

    def test_replace_and_remove(self) -> None:
        sink, _ = _sink()
        sink.set_header("X-Tag", "a")
        sink.set_header("x-tag", "b")
        assert sink.get_header("X-Tag") == "b"
        sink.remove_header("X-Tag")
        assert sink.get_header("X-Tag") is None

    def test_list_and_int_values(self) -> None:
        sink, _ = _sink()
        sink.set_header("Vary", ["Accept", "Cookie"])
        sink.set_header("Content-Length", 12)
        assert sink.get_header("Vary") == "Accept, Cookie"
        assert sink.get_header("Content-Length") == "12"

    def test_unencodable_value_rejected_when_set(self) -> None:
        sink, _ = _sink()
        with pytest.raises(InvalidHeader):
            sink.set_header("Content-Disposition", 'attachment; filename="résumé–.pdf"')
        assert not sink.has_header("Content-Disposition")

    def test_header_injection_rejected(self) -> None:
        sink, _ = _sink()
        with pytest.raises(InvalidHeader):
            sink.set_header("Location", "/next\r\nSet-Cookie: a=1")
        with pytest.raises(InvalidHeader):
            sink.set_header("Bad Name", "1")

    def test_reset_discards_staged_state(self) -> None:
        sink, _ = _sink()
        sink.status_code = 302
        sink.set_header("Location", "/elsewhere")
        sink.reset()
        assert sink.status_code == 200
        assert not sink.has_header("Location")


class TestSending:
    @pytest.mark.asyncio
    async def test_end_sends_start_then_body(self) -> None:
        sink, messages = _sink()
        sink.status_code = 201
        sink.set_header("Content-Type", "text/plain")
        await sink.end("done")

        assert messages == [
            {
                "type": "http.response.start",
                "status": 201,
                "headers": [(b"content-type", b"text/plain")],
            },
            {"type": "http.response.body", "body": b"done", "more_body": False},
        ]
        assert sink.headers_sent
        assert sink.finished

    @pytest.mark.asyncio
    async def test_streamed_writes(self) -> None:
        sink, messages = _sink()
        await sink.write("a")
        await sink.write(b"b")
        await sink.end()

        assert messages[0]["type"] == "http.response.start"
        bodies = [(m["body"], m["more_body"]) for m in messages[1:]]
        assert bodies == [(b"a", True), (b"b", True), (b"", False)]

    @pytest.mark.asyncio
    async def test_write_head_merges_headers(self) -> None:
        sink, messages = _sink()
        sink.set_header("X-Early", "1")
        await sink.write_head(200, {"Content-Type": "text/plain"})

        assert messages[0]["status"] == 200
        assert dict(messages[0]["headers"]) == {
            b"x-early": b"1",
            b"content-type": b"text/plain",
        }
        assert sink.headers_sent
        assert not sink.finished

    @pytest.mark.asyncio
    async def test_no_body_for_204(self) -> None:
        sink, messages = _sink()
        sink.status_code = 204
        await sink.end("ignored")
        assert messages[-1]["body"] == b""

    @pytest.mark.asyncio
    async def test_no_content_length_for_204(self) -> None:
        sink, messages = _sink()
        sink.status_code = 204
        sink.set_header("Content-Length", 7)
        await sink.end("ignored")
        assert b"content-length" not in dict(messages[0]["headers"])

    @pytest.mark.asyncio
    async def test_content_length_kept_for_304(self) -> None:
        sink, messages = _sink()
        sink.status_code = 304
        sink.set_header("Content-Length", 7)
        await sink.end()
        assert dict(messages[0]["headers"])[b"content-length"] == b"7"


class TestMisuse:
    @pytest.mark.asyncio
    async def test_headers_locked_after_send(self) -> None:
        sink, _ = _sink()
        await sink.write("x")
        with pytest.raises(HeadersAlreadySent):
            sink.set_header("X-Late", "1")
        with pytest.raises(HeadersAlreadySent):
            await sink.write_head(500)

    @pytest.mark.asyncio
    async def test_reset_after_send(self) -> None:
        sink, _ = _sink()
        await sink.write("x")
        with pytest.raises(HeadersAlreadySent):
            sink.reset()

    @pytest.mark.asyncio
    async def test_write_after_end(self) -> None:
        sink, _ = _sink()
        await sink.end()
        with pytest.raises(ResponseFinished):
            await sink.write("more")
        with pytest.raises(ResponseFinished):
            await sink.end()
