"""``warren run``: start the server."""

import argparse
import sys
from dataclasses import replace
from typing import Any

from warren.cli._resolve import is_import_string, resolve_app
from warren.config import AppConfig
from warren.errors import WarrenError


def _config_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.reload:
        overrides["reload"] = True
    if args.debug:
        overrides["debug"] = True
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return overrides


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.target`` and serve it until interrupted.

    CLI flags override the app's config.
    """
    overrides = _config_overrides(args)
    try:
        app = resolve_app(args.target, config=AppConfig(**overrides))
    except (ModuleNotFoundError, AttributeError, TypeError, WarrenError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if overrides:
        app.config = replace(app.config, **overrides)

    app.run(
        args.host,
        args.port,
        app_path=args.target if is_import_string(args.target) else None,
    )
