"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from finch._internal.types import DebugHook
from finch.errors import ConfigurationError

# Whole request path, leading slash stripped: "/user/42" -> "user/42"
DEFAULT_ROUTE = r"^/(.*)\Z"


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(controllers="app/controllers", resources="public")
    """

    # Controllers: a directory of controller modules, or a ready-made
    # mapping of identifier -> controller (bypasses the filesystem)
    controllers: str | Path | Mapping[str, Any] = "controllers"
    controller_suffix: str = ".py"

    # Root directory used to resolve string return values to files
    resources: str | Path = ""

    # Mount pattern; its single capture group is the logical request path
    route: str | re.Pattern[str] = DEFAULT_ROUTE

    # Skip the bare-base GET route that calls read(None, ...)
    no_empty_read: bool = False

    # Hooks
    not_found_handler: Callable[..., Any] | None = None
    debug: DebugHook | None = None
    error: Callable[[Exception], None] | None = None
    done: Callable[[], None] | None = None

    # Server (``Router.run`` / ``finch run``)
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False


def compile_mount_pattern(route: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile the mount pattern and check it captures exactly one group.

    Raises ``ConfigurationError`` for invalid regexes or a wrong group count.
    """
    if isinstance(route, re.Pattern):
        pattern = route
    else:
        try:
            pattern = re.compile(route)
        except re.error as exc:
            msg = f"Invalid route pattern {route!r}: {exc}"
            raise ConfigurationError(msg) from exc

    if pattern.groups != 1:
        msg = (
            f"Route pattern {pattern.pattern!r} must have exactly one capture group "
            f"for the logical path, found {pattern.groups}."
        )
        raise ConfigurationError(msg)
    return pattern
