"""Finch CLI — route listing and a development server.

Entry point registered as ``finch`` in ``pyproject.toml``::

    [project.scripts]
    finch = "finch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``finch`` command."""
    parser = argparse.ArgumentParser(
        prog="finch",
        description="Finch — convention-based HTTP routing for controller modules.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- finch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes controllers produce")
    routes_parser.add_argument("controllers", help="Controllers directory")
    routes_parser.add_argument(
        "--no-empty-read",
        action="store_true",
        help="Omit the bare-base GET route for read()",
    )

    # -- finch run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the development server")
    run_parser.add_argument("controllers", help="Controllers directory")
    run_parser.add_argument("--resources", default="", help="Resource root for file responses")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--reload", action="store_true", help="Restart on file changes")
    run_parser.add_argument(
        "--no-empty-read",
        action="store_true",
        help="Omit the bare-base GET route for read()",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from finch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from finch.cli._run import run_server

        run_server(args)
