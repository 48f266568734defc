"""Warren CLI: list and serve filesystem routes.

Entry point registered as ``warren`` in ``pyproject.toml``::

    [project.scripts]
    warren = "warren.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``warren`` command."""
    parser = argparse.ArgumentParser(
        prog="warren",
        description="Warren: serve a directory tree as HTTP routes.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: info, or the app config for run)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- warren routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes a directory defines")
    routes_parser.add_argument(
        "target",
        help="Routes directory or import string (e.g. site:app)",
    )

    # -- warren run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument(
        "target",
        help="Routes directory or import string (e.g. site:app)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on file changes (import-string targets re-read routes)",
    )
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug logging, including every route as it is registered",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or "info").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from warren.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from warren.cli._run import run_server

        run_server(args)
