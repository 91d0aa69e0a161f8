"""Tests for finch.http.response — Response values and the write-once sink."""

import anyio
import pytest

from finch.errors import ResponseAlreadySent
from finch.http.response import Response, ResponseSink


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.body == b""
        assert response.content_type is None
        assert response.headers == ()

    def test_with_header_is_immutable(self) -> None:
        original = Response("hi", status=201)
        response = original.with_header("X-Id", "1").with_header("X-Id", "2")
        assert response.status == 201
        assert response.headers == (("X-Id", "1"), ("X-Id", "2"))
        assert original.headers == ()

    def test_no_status_or_content_type_transforms(self) -> None:
        assert not hasattr(Response, "with_status")
        assert not hasattr(Response, "with_content_type")

    def test_body_conversions(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"abc").text == "abc"


class TestResponseSink:
    async def test_send_text(self) -> None:
        sink = ResponseSink()
        sink.send("<p>hi</p>")
        assert sink.committed
        assert sink.response.content_type == "text/html; charset=utf-8"
        assert sink.response.text == "<p>hi</p>"

    async def test_send_bytes(self) -> None:
        sink = ResponseSink()
        sink.send(b"\x00")
        assert sink.response.content_type == "application/octet-stream"

    async def test_staged_status_and_headers(self) -> None:
        sink = ResponseSink()
        sink.status(202).set_header("Retry-After", "5").set_header("Content-Type", "text/csv")
        sink.send("a,b")
        response = sink.response
        assert response.status == 202
        assert response.headers == (("Retry-After", "5"),)
        assert response.content_type == "text/csv"

    async def test_send_status(self) -> None:
        sink = ResponseSink()
        sink.send_status(403)
        assert sink.response.status == 403
        assert sink.response.text == "Forbidden"

    async def test_send_unknown_status(self) -> None:
        sink = ResponseSink()
        sink.send_status(599)
        assert sink.response.text == "599"

    async def test_json(self) -> None:
        sink = ResponseSink()
        sink.json({"ok": True})
        assert sink.response.content_type == "application/json"
        assert sink.response.text == '{"ok": true}'

    async def test_empty_send_has_no_content_type(self) -> None:
        sink = ResponseSink()
        sink.status(204).send()
        assert sink.response.content_type is None

    async def test_commits_exactly_once(self) -> None:
        sink = ResponseSink()
        sink.send("first")
        with pytest.raises(ResponseAlreadySent):
            sink.send("second")
        assert sink.response.text == "first"

    async def test_wait_for_later_commit(self) -> None:
        sink = ResponseSink()
        assert not sink.committed
        assert sink.response is None

        async def commit_later() -> None:
            await anyio.sleep(0.01)
            sink.commit(Response("late"))

        async with anyio.create_task_group() as tg:
            tg.start_soon(commit_later)
            response = await sink.wait()
        assert response.text == "late"
