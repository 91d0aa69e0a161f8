"""Shared type aliases used across finch modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: controller member with variable positional signature
Handler: TypeAlias = Callable[..., Any]

# Route verb: a single HTTP method or a set of them
Verb: TypeAlias = str | frozenset[str]

# Diagnostic callback: receives one preformatted line
DebugHook: TypeAlias = Callable[[str], None]
