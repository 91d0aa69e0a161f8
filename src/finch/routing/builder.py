"""Route table construction from controllers.

For each controller, in discovery order:

1. its ``route(registrar)`` hook runs, appending explicit records;
2. prefixed and named handlers compile in enumeration order;
3. standard actions expand last.

The controller's base is passed explicitly to every step and stored on
each record as it is created.
"""

import logging
import re
from collections.abc import Iterable, Sequence

from finch._internal.types import Handler, Verb
from finch.controllers import ControllerDescriptor
from finch.errors import ConfigurationError
from finch.routing.conventions import (
    STANDARD_ACTIONS,
    compile_member,
    expand_standard_action,
)
from finch.routing.reflect import reflect_members, registration_hook
from finch.routing.route import RouteRecord
from finch.routing.router import RouteTable

logger = logging.getLogger("finch.routing")


class RouteRegistrar:
    """Explicit registration interface handed to a controller's ``route`` hook.

    Every call appends a record to the accumulator immediately, scoped to
    the controller's base::

        def route(router):
            router.get("recent", recent)
            router.route(["GET", "POST"], re.compile(r"^tag/(\\w+)$"), by_tag)
    """

    __slots__ = ("_base", "_records")

    def __init__(self, base: str, records: list[RouteRecord]) -> None:
        self._base = base
        self._records = records

    @property
    def base(self) -> str:
        return self._base

    def route(
        self,
        verb: str | Iterable[str],
        path: str | re.Pattern[str] | None,
        handler: Handler,
    ) -> None:
        """Register *handler* for *verb* (or a set of verbs) at *path*."""
        if path is not None and not isinstance(path, (str, re.Pattern)):
            msg = f"Route path must be a string, a compiled pattern, or None, not {type(path).__name__}"
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = f"Route handler for {path!r} is not callable"
            raise ConfigurationError(msg)
        self._records.append(
            RouteRecord(base=self._base, path=path, verb=normalize_verb(verb), handler=handler)
        )

    def get(self, path: str | re.Pattern[str] | None, handler: Handler) -> None:
        self.route("GET", path, handler)

    def post(self, path: str | re.Pattern[str] | None, handler: Handler) -> None:
        self.route("POST", path, handler)

    def put(self, path: str | re.Pattern[str] | None, handler: Handler) -> None:
        self.route("PUT", path, handler)

    def delete(self, path: str | re.Pattern[str] | None, handler: Handler) -> None:
        self.route("DELETE", path, handler)


def normalize_verb(verb: str | Iterable[str]) -> Verb:
    """Upper-case a verb, or freeze an iterable of verbs into a set."""
    if isinstance(verb, str):
        return verb.upper()
    verbs = frozenset(v.upper() for v in verb)
    if not verbs:
        msg = "Route verb set must not be empty"
        raise ConfigurationError(msg)
    return verbs


def build_controller_routes(
    descriptor: ControllerDescriptor,
    records: list[RouteRecord],
    *,
    no_empty_read: bool = False,
) -> list[RouteRecord]:
    """Append one controller's records to *records* and return it."""
    base = descriptor.base
    controller = descriptor.controller

    hook = registration_hook(controller)
    if hook is not None:
        hook(RouteRegistrar(base, records))

    standard: list[tuple[str, Handler]] = []
    for name, handler in reflect_members(controller):
        if name in STANDARD_ACTIONS:
            standard.append((name, handler))
            continue
        records.extend(compile_member(base, name, handler))

    for action, handler in standard:
        records.extend(
            expand_standard_action(base, action, handler, no_empty_read=no_empty_read)
        )

    return records


def build_route_table(
    controllers: Sequence[ControllerDescriptor],
    *,
    no_empty_read: bool = False,
) -> RouteTable:
    """Build and compile the route table for *controllers*."""
    records: list[RouteRecord] = []
    for descriptor in controllers:
        before = len(records)
        build_controller_routes(descriptor, records, no_empty_read=no_empty_read)
        logger.debug(
            "Controller %r contributed %d route(s)", descriptor.identifier, len(records) - before
        )

    table = RouteTable(records)
    table.compile()
    return table
