"""Controller discovery.

Controllers come either from a directory, where every ``*.py`` file is a
controller module named after its stem, or from a mapping supplied by the
application. File names may contain dots to express nesting:
``admin.user.py`` serves under ``admin/user``.
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any

import anyio

from finch.errors import DiscoveryError

logger = logging.getLogger("finch.controllers")


@dataclass(frozen=True, slots=True)
class ControllerDescriptor:
    """A discovered controller and the identifier it was found under."""

    identifier: str
    controller: Any

    @property
    def base(self) -> str:
        """Namespace the controller's routes live under."""
        return self.identifier.replace(".", "/")


def describe_controllers(controllers: Mapping[str, Any]) -> list[ControllerDescriptor]:
    """Build descriptors from an identifier -> controller mapping.

    Mapping order is discovery order. Classes are instantiated with no
    arguments so their methods can be bound.
    """
    descriptors: list[ControllerDescriptor] = []
    for identifier, controller in controllers.items():
        if isinstance(controller, type):
            controller = controller()
        descriptors.append(ControllerDescriptor(identifier, controller))
    return descriptors


async def discover_controllers(
    source: str | Path | Mapping[str, Any],
    *,
    suffix: str = ".py",
) -> list[ControllerDescriptor]:
    """Discover controllers from a directory or a ready-made mapping.

    Directory entries are visited in sorted order. Entries that do not end
    in *suffix*, start with ``_``, or are not regular files are skipped.

    Raises:
        DiscoveryError: The directory cannot be listed or a controller
            module fails to import.
    """
    if isinstance(source, Mapping):
        return describe_controllers(source)

    directory = anyio.Path(source)
    try:
        entries = sorted([entry async for entry in directory.iterdir()], key=lambda p: p.name)
    except OSError as exc:
        msg = f"Cannot read controllers directory {str(source)!r}: {exc}"
        raise DiscoveryError(msg) from exc

    descriptors: list[ControllerDescriptor] = []
    for entry in entries:
        name = entry.name
        if not name.endswith(suffix) or name.startswith("_"):
            continue
        if not await entry.is_file():
            continue

        identifier = name[: len(name) - len(suffix)]
        module = load_controller_module(Path(entry), identifier)
        logger.debug("Loaded controller %r from %s", identifier, entry)
        descriptors.append(ControllerDescriptor(identifier, module))

    return descriptors


def load_controller_module(file: Path, identifier: str) -> ModuleType:
    """Import a controller file as a standalone module.

    The module is registered in ``sys.modules`` under a private name so
    dataclasses and pickling inside controllers behave normally.
    """
    module_name = "_finch_controller_" + identifier.replace(".", "__")
    # Explicit loader: controller files need not end in ".py"
    loader = importlib.machinery.SourceFileLoader(module_name, str(file))
    spec = importlib.util.spec_from_file_location(module_name, file, loader=loader)
    if spec is None or spec.loader is None:
        msg = f"Cannot load controller {identifier!r} from {file}"
        raise DiscoveryError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        del sys.modules[module_name]
        msg = f"Controller {identifier!r} failed to import: {exc}"
        raise DiscoveryError(msg) from exc
    return module
