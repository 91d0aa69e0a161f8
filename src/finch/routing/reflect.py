"""Controller reflection — which members of a controller are handlers.

A controller is any of:

- a module (loaded from a controllers directory),
- a mapping of name -> callable,
- an object whose class defines the handlers as methods.

Reflection looks at the controller's own namespace and at its immediate
type, never further up the class hierarchy. Values are read through
``getattr`` so methods come back already bound to the controller.
"""

from collections.abc import Iterator, Mapping
from types import ModuleType
from typing import Any

from finch._internal.types import Handler

# Names every object carries, plus the JavaScript-style constructor name
IGNORED_NAMES: frozenset[str] = frozenset(dir(object)) | {"constructor"}

# Registration hook, never a route itself
HOOK_NAME = "route"


def reflect(controller: Any) -> list[str]:
    """Return the handler names of *controller* in enumeration order."""
    return [name for name, _ in reflect_members(controller)]


def reflect_members(controller: Any) -> list[tuple[str, Handler]]:
    """Return ``(name, bound handler)`` pairs in enumeration order.

    Own names come first in declaration order, then names declared on the
    immediate type that the instance does not shadow.
    """
    members: list[tuple[str, Handler]] = []
    seen: set[str] = set()
    for name, value in _candidates(controller):
        if name in seen:
            continue
        seen.add(name)
        if is_handler_name(name) and _is_handler_value(value):
            members.append((name, value))
    return members


def registration_hook(controller: Any) -> Handler | None:
    """Return the controller's ``route`` hook, if it defines a callable one."""
    if isinstance(controller, Mapping):
        hook = controller.get(HOOK_NAME)
    else:
        hook = getattr(controller, HOOK_NAME, None)
    return hook if callable(hook) else None


def is_handler_name(name: str) -> bool:
    return not name.startswith("_") and name != HOOK_NAME and name not in IGNORED_NAMES


def _is_handler_value(value: Any) -> bool:
    # Classes are callable but construct objects; they are not handlers.
    return callable(value) and not isinstance(value, type)


def _candidates(controller: Any) -> Iterator[tuple[str, Any]]:
    if isinstance(controller, Mapping):
        yield from controller.items()
        return

    if isinstance(controller, ModuleType):
        yield from _module_candidates(controller)
        return

    yield from getattr(controller, "__dict__", {}).items()

    cls = type(controller)
    for name, raw in vars(cls).items():
        if name.startswith("_") or isinstance(raw, property):
            continue
        yield name, getattr(controller, name)


def _module_candidates(module: ModuleType) -> Iterator[tuple[str, Any]]:
    """Module namespace entries that belong to the module.

    ``__all__`` wins when present; otherwise only objects defined in the
    module itself count, so imported helpers never become routes.
    """
    exported = getattr(module, "__all__", None)
    for name, value in vars(module).items():
        if exported is not None:
            if name in exported:
                yield name, value
        elif getattr(value, "__module__", None) == module.__name__:
            yield name, value
