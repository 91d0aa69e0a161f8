"""Naming conventions — map handler names to verbs and paths.

Three kinds of names produce routes:

- standard actions, ``read`` ``write`` ``create`` ``delete`` ``remove``,
  which answer the controller's base path itself (``read`` also answers
  ``base/<digits>``);
- prefixed actions, ``createAccount``, which answer ``base/account`` with
  the action's verb;
- anything else, ``stats``, which answers ``GET base/stats``.

``classify`` is pure and knows nothing about controllers, so the rules can
be exercised with bare strings.
"""

import functools
import re
from types import MappingProxyType
from typing import Any, Literal, NamedTuple

from finch._internal.types import Handler
from finch.routing.reflect import HOOK_NAME
from finch.routing.route import RouteRecord

ACTION_VERBS: MappingProxyType[str, str] = MappingProxyType(
    {
        "read": "GET",
        "write": "PUT",
        "create": "POST",
        "delete": "DELETE",
        "remove": "DELETE",
    }
)

# Expansion order for standard actions found on one controller
STANDARD_ACTIONS: tuple[str, ...] = tuple(ACTION_VERBS)

# readFoo, writeFooBar: camelCase suffix
_CAMEL_ACTION_RE = re.compile(r"^(read|write|create|delete|remove)([A-Z])(\w*)\Z", re.ASCII)

# Whole remaining path is a decimal id, with no trailing newline
ID_PATTERN = re.compile(r"^([0-9]+)\Z")

PathKind = Literal["standard", "prefixed", "named"]


class ConventionEntry(NamedTuple):
    """What a single handler name means, independent of any controller."""

    name: str
    verb: str
    path_kind: PathKind
    path: str | None


def classify(name: str) -> ConventionEntry | None:
    """Classify a handler name. Returns ``None`` for the ``route`` hook.

    Examples::

        classify("read")          -> ("read", "GET", "standard", None)
        classify("writeFoo")      -> ("writeFoo", "PUT", "prefixed", "foo")
        classify("create_account") -> ("create_account", "GET", "named", "create_account")
        classify("stats")         -> ("stats", "GET", "named", "stats")
    """
    if name == HOOK_NAME:
        return None

    if name in ACTION_VERBS:
        return ConventionEntry(name, ACTION_VERBS[name], "standard", None)

    match = _CAMEL_ACTION_RE.match(name)
    if match:
        action, first, rest = match.groups()
        return ConventionEntry(name, ACTION_VERBS[action], "prefixed", first.lower() + rest)

    return ConventionEntry(name, "GET", "named", name)


def compile_member(base: str, name: str, handler: Handler) -> list[RouteRecord]:
    """Compile one prefixed or named handler into route records.

    Standard actions compile to nothing here; they need the whole
    controller's action set and go through ``expand_standard_action``.
    """
    entry = classify(name)
    if entry is None or entry.path_kind == "standard":
        return []
    return [RouteRecord(base=base, path=entry.path, verb=entry.verb, handler=handler, name=name)]


def expand_standard_action(
    base: str,
    action: str,
    handler: Handler,
    *,
    no_empty_read: bool = False,
) -> list[RouteRecord]:
    """Expand a bare standard action into its route records.

    ``read`` yields an id route (``base/42`` -> ``read("42", ...)``) and,
    unless *no_empty_read*, a bare route (``base`` -> ``read(None, ...)``).
    Every other action yields one bare route with its verb.
    """
    verb = ACTION_VERBS[action]
    if verb != "GET":
        return [RouteRecord(base=base, path=None, verb=verb, handler=handler, name=action)]

    records = [RouteRecord(base=base, path=ID_PATTERN, verb=verb, handler=handler, name=action)]
    if not no_empty_read:
        records.append(
            RouteRecord(base=base, path=None, verb=verb, handler=_without_id(handler), name=action)
        )
    return records


def _without_id(read: Handler) -> Handler:
    """Wrap *read* so it receives ``None`` in place of the id argument."""

    @functools.wraps(read)
    def read_without_id(*args: Any) -> Any:
        return read(None, *args)

    return read_without_id
