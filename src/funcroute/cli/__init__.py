"""Funcroute CLI — local server and route listing.

Entry point registered as ``funcroute`` in ``pyproject.toml``::

    [project.scripts]
    funcroute = "funcroute.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``funcroute`` command."""
    parser = argparse.ArgumentParser(
        prog="funcroute",
        description="Funcroute — an exact-match router for function-URL events.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- funcroute serve --------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a router over local HTTP")
    serve_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument("--log-level", default=None, help="Logging level (e.g. debug)")

    # -- funcroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("router", help="Import string (e.g. myapp:router)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from funcroute.cli._serve import run_serve

        run_serve(args)
    elif args.command == "routes":
        from funcroute.cli._routes import run_routes

        run_routes(args)
