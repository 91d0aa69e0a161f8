"""HTTP response value and the per-request response sink.

``Response`` is the immutable value that reaches the wire. ``ResponseSink``
is what controllers receive as their last positional argument: it accepts
a status, a content type, headers and a body, and commits exactly once.
"""

import json as json_module
from dataclasses import dataclass, replace
from http import HTTPStatus
from typing import Any

import anyio

from finch.errors import ResponseAlreadySent


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    ``content_type`` of ``None`` means no Content-Type header is sent.
    """

    body: str | bytes = b""
    status: int = 200
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


class ResponseSink:
    """Write-once response target handed to controller handlers.

    Status, headers and content type may be staged in any order; ``send``,
    ``send_status``, ``json`` and ``commit`` finalize the response. A second
    finalizing call raises ``ResponseAlreadySent``.

    Usage inside a handler::

        def read_report(self, req, res):
            res.status(202).set_header("Retry-After", "5")
            res.send("queued")

    Must be created inside a running event loop.
    """

    __slots__ = ("_committed", "_content_type", "_headers", "_response", "_status")

    def __init__(self) -> None:
        self._status = 200
        self._content_type: str | None = None
        self._headers: list[tuple[str, str]] = []
        self._response: Response | None = None
        self._committed = anyio.Event()

    # -- Staging --

    def status(self, status: int) -> "ResponseSink":
        """Stage the status code for the eventual response."""
        self._status = status
        return self

    def set_header(self, name: str, value: str) -> "ResponseSink":
        """Stage a header. ``Content-Type`` sets the content type."""
        if name.lower() == "content-type":
            self._content_type = value
        else:
            self._headers.append((name, value))
        return self

    # -- Finalizing --

    def send(self, body: str | bytes = b"", *, content_type: str | None = None) -> None:
        """Commit *body* with the staged status and headers.

        Without an explicit or staged content type, text bodies are sent as
        ``text/html`` and byte bodies as ``application/octet-stream``.
        """
        ct = content_type or self._content_type
        if ct is None and body:
            ct = "text/html; charset=utf-8" if isinstance(body, str) else "application/octet-stream"
        self.commit(
            Response(
                body=body,
                status=self._status,
                content_type=ct,
                headers=tuple(self._headers),
            )
        )

    def send_status(self, status: int) -> None:
        """Commit a status with its reason phrase as a plain-text body."""
        try:
            phrase = HTTPStatus(status).phrase
        except ValueError:
            phrase = str(status)
        self._status = status
        self.send(phrase, content_type="text/plain; charset=utf-8")

    def json(self, value: Any) -> None:
        """Commit *value* serialized as JSON."""
        self.send(json_module.dumps(value), content_type="application/json")

    def commit(self, response: Response) -> None:
        """Commit a fully built response. Raises if already committed."""
        if self._response is not None:
            msg = "A response has already been sent for this request."
            raise ResponseAlreadySent(msg)
        self._response = response
        self._committed.set()

    # -- Inspection --

    @property
    def committed(self) -> bool:
        """True once a response has been committed."""
        return self._response is not None

    @property
    def response(self) -> Response | None:
        """The committed response, or ``None``."""
        return self._response

    async def wait(self) -> Response:
        """Suspend until a response is committed, then return it."""
        await self._committed.wait()
        assert self._response is not None
        return self._response
