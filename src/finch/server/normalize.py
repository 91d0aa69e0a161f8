"""Response normalization — maps handler return values to Responses.

isinstance-based dispatch, no magic:

1. ``str``                    -> a resource file if one exists under the
                                 resource root, else the text itself as
                                 ``text/plain``
2. ``Mapping`` / ``list`` /
   ``tuple``                  -> ``application/json``
3. anything else (``None``)   -> no response; the handler owns the sink

The string case is deliberately ambiguous: a handler that returns text
which happens to name an existing file serves that file.
"""

import json as json_module
import logging
import mimetypes
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import anyio

from finch.http.response import Response

logger = logging.getLogger("finch.server")


async def normalize(value: Any, resources: str | Path = "") -> Response | None:
    """Convert a handler's final return value to a Response, or ``None``."""
    match value:
        case str():
            return await _text_or_resource(value, resources)
        case Mapping():
            return _json_response(dict(value))
        case list() | tuple():
            return _json_response(value)
        case _:
            return None


def _json_response(value: Any) -> Response:
    return Response(body=json_module.dumps(value), content_type="application/json")


async def _text_or_resource(text: str, resources: str | Path) -> Response:
    path = resource_path(resources, text)

    try:
        exists = await path.exists()
    except (OSError, ValueError):
        # Unstatable names (too long, NUL bytes) are plain text.
        exists = False

    if not exists:
        return Response(body=text, content_type="text/plain")

    try:
        data = await path.read_bytes()
    except OSError as exc:
        logger.warning("Failed to read resource %s: %s", path, exc)
        return Response(body=b"", status=500)

    content_type, _ = mimetypes.guess_type(str(path))
    return Response(body=data, content_type=content_type)


def resource_path(resources: str | Path, relative: str) -> anyio.Path:
    """Join *relative* under *resources* the way a path join would.

    With a resource root, a leading slash on *relative* does not escape it.
    """
    if str(resources):
        return anyio.Path(resources, relative.lstrip("/"))
    return anyio.Path(relative or ".")
