"""Invoke helpers — call handlers and tag what they return.

Controller handlers can be ``def`` or ``async def``, and a plain ``def``
may still hand back an awaitable (a task, a future, a coroutine from a
helper). The dispatcher must know which kind of value it holds before it
can normalize a response, so every call goes through ``call_handler``::

    from finch._internal.invoke import call_handler, resolve

    result = call_handler(handler, *args)   # Immediate | Deferred
    value = await resolve(result)
"""

import inspect
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any

from finch._internal.types import Handler


@dataclass(frozen=True, slots=True)
class Immediate:
    """A handler return value that is already final."""

    value: Any


@dataclass(frozen=True, slots=True)
class Deferred:
    """A handler return value that must be awaited before use."""

    awaitable: Awaitable[Any]


HandlerResult = Immediate | Deferred


def call_handler(handler: Handler, *args: Any) -> HandlerResult:
    """Call *handler* positionally and tag its return value.

    Exceptions raised by the handler are not caught.
    """
    result = handler(*args)
    if inspect.isawaitable(result):
        return Deferred(result)
    return Immediate(result)


async def resolve(result: HandlerResult) -> Any:
    """Return the final value of a tagged result, suspending if deferred.

    A deferred value that never completes leaves the caller suspended;
    there is no timeout.
    """
    match result:
        case Deferred(awaitable=awaitable):
            return await awaitable
        case Immediate(value=value):
            return value
