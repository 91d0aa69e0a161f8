"""Finch exception hierarchy.

Shared across discovery, the route table, the dispatcher, and the ASGI
handler so every module raises and catches the same types.
"""

from dataclasses import dataclass


class FinchError(Exception):
    """Base for all finch-specific errors."""


class ConfigurationError(FinchError):
    """Raised when router configuration is invalid.

    Typically raised while constructing the ``Router`` or during setup.
    """


class DiscoveryError(FinchError):
    """Controller discovery failed (unreadable directory, broken module).

    The underlying ``OSError`` or import error is chained as ``__cause__``.
    """


class ResponseAlreadySent(FinchError):  # noqa: N818
    """A response sink was committed more than once for a single request."""


@dataclass(frozen=True, slots=True)
class HTTPError(FinchError):
    """An error that maps directly to an HTTP status code.

    Raised by the request pipeline before a route is dispatched. The ASGI
    handler catches these and answers with a plain-text response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — the request path is outside the router's mount pattern."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class BadRequest(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — the request body could not be parsed."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)
