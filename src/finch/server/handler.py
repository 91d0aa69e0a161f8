"""ASGI handler — translates ASGI scope/messages to finch types.

The only component that touches raw ASGI for requests. Extracts the
logical path with the mount pattern, reads and parses the body, hands the
request to the dispatcher, waits for the sink to be committed, and sends
the committed response.
"""

import logging
import re

from finch._internal.asgi import Receive, Scope, Send
from finch._internal.types import DebugHook
from finch.errors import HTTPError, NotFound
from finch.http.request import Request, read_body
from finch.http.response import Response, ResponseSink
from finch.server.dispatch import Dispatcher
from finch.server.sender import send_response

logger = logging.getLogger("finch.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    mount: re.Pattern[str],
    dispatcher: Dispatcher,
    debug: DebugHook | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline.

    Errors raised by controller handlers propagate to the ASGI server.
    """
    if scope["type"] != "http":
        return

    try:
        request = await _build_request(scope, receive, mount)
    except HTTPError as exc:
        logger.debug("%d %s %s: %s", exc.status, scope["method"], scope["path"], exc.detail)
        await send_response(_error_response(exc), send)
        return

    line = f"{request.method} {request.url} => {request.logical_path}"
    logger.debug(line)
    if debug is not None:
        debug(line)

    sink = ResponseSink()
    await dispatcher.dispatch(request, sink)
    response = await sink.wait()
    await send_response(response, send)


async def _build_request(scope: Scope, receive: Receive, mount: re.Pattern[str]) -> Request:
    found = mount.search(scope["path"])
    if found is None:
        raise NotFound()
    raw_body = await read_body(receive)
    return Request.from_asgi(scope, found.group(1) or "", raw_body=raw_body)


def _error_response(exc: HTTPError) -> Response:
    response = Response(
        body=exc.detail or str(exc.status),
        status=exc.status,
        content_type="text/plain; charset=utf-8",
    )
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response
