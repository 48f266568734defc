"""``warren routes``: print the route table."""

import argparse
import sys

from warren.cli._resolve import resolve_app
from warren.config import AppConfig
from warren.errors import WarrenError


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / HANDLER table for ``args.target``."""
    try:
        app = resolve_app(args.target, config=AppConfig(log_level=args.log_level or "info"))
    except (ModuleNotFoundError, AttributeError, TypeError, WarrenError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [
        (method, path, getattr(handler, "__qualname__", repr(handler)))
        for method, path, handler in app.routes.entries()
    ]
    if not rows:
        print("No routes registered.")
        return

    max_method = max(6, *(len(r[0]) for r in rows))
    max_path = max(4, *(len(r[1]) for r in rows))

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))
