"""Finch router application.

Configured at construction, set up once (controller discovery and route
table compilation), then served as an ASGI application.
"""

import logging
from dataclasses import replace
from typing import Any

import anyio

from finch._internal.asgi import Receive, Scope, Send
from finch.config import RouterConfig, compile_mount_pattern
from finch.controllers import discover_controllers
from finch.errors import DiscoveryError
from finch.routing.builder import build_route_table
from finch.routing.route import describe_route
from finch.routing.router import RouteTable
from finch.server.dispatch import Dispatcher
from finch.server.handler import handle_request

logger = logging.getLogger("finch")


class Router:
    """The finch convention router, an ASGI 3.0 application.

    Usage::

        from finch import Router

        router = Router(controllers="controllers", resources="public")
        await router.setup()      # optional: runs on lifespan or first request

    Every HTTP request, whatever its verb, goes through the same handler:
    the mount pattern's capture group is the logical path matched against
    the route table.

    Setup runs at most once. Concurrent first requests wait on a lock, so
    no request ever sees a partially built table.
    """

    __slots__ = ("_dispatcher", "_mount", "_setup_lock", "config")

    def __init__(self, config: RouterConfig | None = None, **overrides: Any) -> None:
        config = config or RouterConfig()
        if overrides:
            config = replace(config, **overrides)
        self.config: RouterConfig = config
        self._mount = compile_mount_pattern(config.route)
        self._setup_lock = anyio.Lock()

        # Set during setup()
        self._dispatcher: Dispatcher | None = None

    @property
    def ready(self) -> bool:
        """True once setup has completed and requests can be dispatched."""
        return self._dispatcher is not None

    @property
    def table(self) -> RouteTable | None:
        """The compiled route table, or ``None`` before setup."""
        return self._dispatcher.table if self._dispatcher is not None else None

    async def setup(self) -> RouteTable:
        """Discover controllers, build the route table, attach the dispatcher.

        Calls ``config.done`` on success. On discovery failure calls
        ``config.error`` with the error and re-raises it.

        Raises:
            DiscoveryError: The controllers could not be discovered.
        """
        if self._dispatcher is not None:
            return self._dispatcher.table

        async with self._setup_lock:
            if self._dispatcher is not None:
                return self._dispatcher.table

            config = self.config
            try:
                controllers = await discover_controllers(
                    config.controllers,
                    suffix=config.controller_suffix,
                )
            except DiscoveryError as exc:
                logger.error("Controller discovery failed: %s", exc)
                if config.error is not None:
                    config.error(exc)
                raise

            table = build_route_table(controllers, no_empty_read=config.no_empty_read)
            self._report_routes(table, len(controllers))

            self._dispatcher = Dispatcher(
                table,
                resources=config.resources,
                not_found_handler=config.not_found_handler,
            )

        if config.done is not None:
            config.done()
        return table

    def _report_routes(self, table: RouteTable, controller_count: int) -> None:
        lines = [describe_route(route) for route in table.routes]
        logger.info("%d route(s) from %d controller(s)", len(table), controller_count)
        for line in lines:
            logger.debug("  %s", line)
        if self.config.debug is not None:
            self.config.debug("Routes:\n" + "\n".join(lines))

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if self._dispatcher is None:
            await self.setup()
        assert self._dispatcher is not None

        await handle_request(
            scope,
            receive,
            send,
            mount=self._mount,
            dispatcher=self._dispatcher,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Sets the router up at startup, before the first HTTP request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.setup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the router with the pounce development server."""
        from finch.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.reload,
        )
