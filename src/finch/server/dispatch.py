"""Request dispatch — route table lookup, handler invocation, normalization.

Handlers are called positionally::

    handler(*captures, body, request, sink)     # body only for non-GET
                                                # requests that carried one

Whatever the handler returns is awaited if necessary, normalized, and
committed to the sink. Exceptions raised by handlers are not caught here.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

from finch._internal.invoke import call_handler, resolve
from finch.http.request import Request
from finch.http.response import Response, ResponseSink
from finch.routing.router import RouteTable
from finch.server.normalize import normalize

logger = logging.getLogger("finch.server")

NOT_FOUND_BODY = "Unknown Resource"


def build_arguments(
    captures: tuple[str | None, ...],
    request: Request,
    sink: ResponseSink,
) -> list[Any]:
    """Positional arguments for a matched handler."""
    args: list[Any] = list(captures)
    if request.method != "GET" and request.body is not None:
        args.append(request.body)
    args.append(request)
    args.append(sink)
    return args


class Dispatcher:
    """Dispatches requests against a compiled, read-only route table.

    Holds no per-request state; overlapping requests share one instance.
    """

    __slots__ = ("_not_found_handler", "_resources", "_table")

    def __init__(
        self,
        table: RouteTable,
        *,
        resources: str | Path = "",
        not_found_handler: Callable[..., Any] | None = None,
    ) -> None:
        self._table = table
        self._resources = resources
        self._not_found_handler = not_found_handler

    @property
    def table(self) -> RouteTable:
        return self._table

    async def dispatch(self, request: Request, sink: ResponseSink) -> None:
        """Run the first matching route for *request* and respond via *sink*."""
        match = self._table.match(request.method, request.logical_path)
        if match is None:
            await self._not_found(request, sink)
            return

        request = replace(request, captures=match.captures)
        args = build_arguments(match.captures, request, sink)
        value = await resolve(call_handler(match.route.handler, *args))
        await self._respond(value, sink)

    async def _not_found(self, request: Request, sink: ResponseSink) -> None:
        logger.debug("404 %s %s => %r", request.method, request.path, request.logical_path)
        if self._not_found_handler is not None:
            value = await resolve(call_handler(self._not_found_handler, request, sink))
            await self._respond(value, sink)
            return
        sink.commit(Response(body=NOT_FOUND_BODY, status=404, content_type="text/plain"))

    async def _respond(self, value: Any, sink: ResponseSink) -> None:
        response = await normalize(value, self._resources)
        if response is None:
            return
        if sink.committed:
            logger.warning(
                "Handler wrote the response and also returned %s; return value ignored",
                type(value).__name__,
            )
            return
        sink.commit(response)
