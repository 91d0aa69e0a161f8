"""``finch routes`` — list the route table a controllers directory produces.

Routes print in match-priority order: when two rows could answer the same
request, the upper one wins.
"""

import argparse
import re
import sys

import anyio

from finch.controllers import discover_controllers
from finch.errors import DiscoveryError
from finch.routing.builder import build_route_table
from finch.routing.route import RouteRecord, verb_label


def run_routes(args: argparse.Namespace) -> None:
    """Discover ``args.controllers`` and print METHOD, PATH, HANDLER rows."""
    try:
        controllers = anyio.run(discover_controllers, args.controllers)
    except DiscoveryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    table = build_route_table(controllers, no_empty_read=args.no_empty_read)
    if not len(table):
        print("No routes registered.")
        return

    rows = [_row(route) for route in table.routes]

    max_methods = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, path, handler_name in rows:
        print(fmt.format(methods_str, path, handler_name))


def _row(route: RouteRecord) -> tuple[str, str, str]:
    if isinstance(route.path, re.Pattern):
        path = f"/{route.base}/<{route.path.pattern}>"
    else:
        path = "/" + (route.full_path or "")
    handler_name = route.name or getattr(route.handler, "__name__", repr(route.handler))
    return verb_label(route.verb), path, handler_name
