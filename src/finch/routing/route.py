"""RouteRecord and RouteMatch frozen dataclasses."""

import re
from dataclasses import dataclass

from finch._internal.types import Handler, Verb


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """One compiled entry in the route table.

    ``path`` is ``None`` (matches the bare ``base``), an exact string
    (matches ``base/path``), or a compiled pattern applied to whatever
    follows ``base/``. ``base`` is fixed when the record is created.
    """

    base: str
    path: str | re.Pattern[str] | None
    verb: Verb
    handler: Handler
    name: str | None = None

    @property
    def is_pattern(self) -> bool:
        return isinstance(self.path, re.Pattern)

    @property
    def full_path(self) -> str | None:
        """The exact logical path this record answers, or ``None`` for patterns."""
        if isinstance(self.path, re.Pattern):
            return None
        return self.base + ("/" + self.path if self.path else "")

    def accepts(self, method: str) -> bool:
        """Whether this record's verb (or verb set) admits *method*."""
        if isinstance(self.verb, str):
            return self.verb == method
        return method in self.verb

    @property
    def shape(self) -> tuple[str, str | None, str, str | None]:
        """Comparable description without the handler object."""
        path = self.path.pattern if isinstance(self.path, re.Pattern) else self.path
        return (self.base, path, verb_label(self.verb), self.name)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: RouteRecord
    captures: tuple[str | None, ...] = ()


def verb_label(verb: Verb) -> str:
    """``"GET"`` or ``"GET|POST"`` for verb sets (sorted)."""
    if isinstance(verb, str):
        return verb
    return "|".join(sorted(verb))


def describe_route(route: RouteRecord) -> str:
    """One-line human description used by debug output and ``finch routes``."""
    if isinstance(route.path, re.Pattern):
        target = f"{route.base}/{route.path.pattern}"
    else:
        target = route.full_path or "(root)"
    handler_name = route.name or getattr(route.handler, "__name__", repr(route.handler))
    return f"{verb_label(route.verb):<7} {target}  {handler_name}"
