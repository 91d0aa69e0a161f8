"""Ordered route table with first-match-wins scanning.

Records are added during setup and frozen by ``compile()``. Matching walks
the records in insertion order; the first record whose verb and path both
fit wins, and later records are never considered for that request.
"""

from collections.abc import Iterable, Iterator

from finch.routing.route import RouteMatch, RouteRecord


class RouteTable:
    """Priority-ordered route records.

    Usage::

        table = RouteTable()
        table.add(RouteRecord("user", ID_PATTERN, "GET", read))
        table.compile()
        match = table.match("GET", "user/42")   # RouteMatch(..., ("42",))
    """

    __slots__ = ("_compiled", "_records")

    def __init__(self, records: Iterable[RouteRecord] = ()) -> None:
        self._records: list[RouteRecord] = list(records)
        self._compiled = False

    def add(self, record: RouteRecord) -> None:
        """Append a record. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._records.append(record)

    def extend(self, records: Iterable[RouteRecord]) -> None:
        for record in records:
            self.add(record)

    def compile(self) -> None:
        """Freeze the table. No more records can be added."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def routes(self) -> tuple[RouteRecord, ...]:
        """All records in match-priority order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RouteRecord]:
        return iter(self._records)

    def match(self, method: str, query: str) -> RouteMatch | None:
        """Find the first record answering *method* on the logical path *query*.

        Exact records (``path`` ``None`` or a string) must equal the whole
        query. Pattern records see only what follows ``base/`` and
        contribute their groups as captures. Returns ``None`` when nothing
        matches; that is the not-found path, not an error.
        """
        for record in self._records:
            if not record.accepts(method):
                continue

            full_path = record.full_path
            if full_path is not None:
                if query == full_path:
                    return RouteMatch(route=record)
                continue

            prefix = record.base + "/"
            if not query.startswith(prefix):
                continue

            found = record.path.search(query[len(prefix) :])  # type: ignore[union-attr]
            if found is None:
                continue
            return RouteMatch(route=record, captures=found.groups())

        return None
