"""Immutable HTTP request.

Frozen metadata plus the already-parsed body. Controllers receive the
request as a positional argument after any path captures and the body.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from finch._internal.asgi import Receive, Scope
from finch.errors import BadRequest
from finch.http.headers import Headers
from finch.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``logical_path`` is the part of the URL path captured by the router's
    mount pattern (``"user/42"`` for ``GET /user/42`` with the default
    pattern). ``captures`` holds the groups captured by the matched route.
    ``body`` is the parsed JSON body, or ``None`` when nothing was parsed.
    """

    method: str
    path: str
    logical_path: str
    headers: Headers
    query_params: QueryParams
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    captures: tuple[str, ...] = ()
    body: Any = None
    raw_body: bytes = b""

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as received."""
        qs = self.query_params.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        logical_path: str,
        *,
        raw_body: bytes = b"",
    ) -> Request:
        """Create a Request from an ASGI scope and an already-read body.

        Raises ``BadRequest`` if a JSON body is malformed.
        """
        headers = Headers(tuple(scope.get("headers", ())))
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            logical_path=logical_path,
            headers=headers,
            query_params=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            body=parse_body(raw_body, headers.get("content-type")),
            raw_body=raw_body,
        )


async def read_body(receive: Receive) -> bytes:
    """Drain the ASGI receive channel into one bytes object."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def parse_body(raw: bytes, content_type: str | None) -> Any:
    """Parse a JSON request body.

    Returns ``None`` for empty bodies and for non-JSON content types, so
    handlers only receive a body argument when one was actually parsed.
    """
    if not raw or not content_type or "json" not in content_type.lower():
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise BadRequest(f"Malformed JSON body: {exc}") from exc
