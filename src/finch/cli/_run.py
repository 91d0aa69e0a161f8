"""``finch run`` — serve a controllers directory with the dev server."""

import argparse

from finch.app import Router
from finch.config import RouterConfig


def run_server(args: argparse.Namespace) -> None:
    """Build a Router from CLI arguments and serve it."""
    config = RouterConfig(
        controllers=args.controllers,
        resources=args.resources,
        no_empty_read=args.no_empty_read,
        reload=args.reload,
    )
    Router(config).run(host=args.host, port=args.port)
