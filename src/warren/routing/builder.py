"""Route table construction from a directory tree.

Walks the routes directory and classifies every file:

- hidden files (``.name``) and bytecode caches are ignored
- ``.py`` files are *dynamic*: loaded as modules, and every module-level
  callable named after an HTTP verb (``GET``, ``POST``, ...) or ``ALL`` is
  registered as a handler
- everything else is *static*: served verbatim under ``GET``

Static files keep their extension in the URL; dynamic files lose it::

    routes/
      style.css          # GET /style.css
      index.py           # /index  (also answers /)
      404.py             # not-found handler for the whole tree
      docs/
        index.py         # /docs/index  (also answers /docs)
        500.py           # error handler for /docs/...
"""

from __future__ import annotations

import enum
import importlib.util
import logging
import re
from collections.abc import Callable, Mapping
from pathlib import Path, PurePath, PurePosixPath
from typing import Any

from warren._internal.invoke import invoke
from warren.errors import ConfigurationError, RouteLoadError
from warren.responses import file
from warren.routing.files import walk
from warren.routing.table import RouteTable, is_route_method

logger = logging.getLogger("warren.routing")

IMPORTABLE_EXTENSIONS = frozenset({".py"})

# Directory names whose contents are never routed
_SKIPPED_DIRS = frozenset({"__pycache__"})

_MODULE_NAME_RE = re.compile(r"\W")

RouteAddedCallback = Callable[[str, str], Any]
ModuleLoader = Callable[[Path], Any]


class RouteType(enum.Enum):
    """How a file under the routes directory is routed."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    IGNORED = "ignored"


def default_route_type(path: str | PurePath) -> RouteType:
    """Classify *path* by its name and extension."""
    path = PurePath(path)
    if path.name.startswith("."):
        return RouteType.IGNORED
    if _SKIPPED_DIRS.intersection(path.parts):
        return RouteType.IGNORED
    if path.suffix in IMPORTABLE_EXTENSIONS:
        return RouteType.DYNAMIC
    return RouteType.STATIC


def load_module(path: Path) -> Mapping[str, Any]:
    """Execute the Python file at *path* and return its namespace.

    Raises:
        RouteLoadError: If the file cannot be imported for any reason.
    """
    module_name = "_warren_route_" + _MODULE_NAME_RE.sub("_", str(path))
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise RouteLoadError(path, "no import loader for this file")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise RouteLoadError(path, f"{type(exc).__name__}: {exc}") from exc
    return vars(module)


async def build_routes(
    directory: str | Path,
    *,
    routes: RouteTable | None = None,
    get_route_type: Callable[[Path], RouteType] = default_route_type,
    on_route_added: RouteAddedCallback | None = None,
    load_module: ModuleLoader = load_module,
) -> RouteTable:
    """Walk *directory* and register a route for every file found.

    Args:
        directory: Root of the routes tree.
        routes: Existing table to extend. A new one is created if omitted.
        get_route_type: Classifies each file path.
        on_route_added: Called with ``(method, path)`` for each registration.
        load_module: Loads a dynamic route file and returns its exported
            names. May be sync or async.

    Returns:
        The populated route table.

    Raises:
        FileNotFoundError: If *directory* does not exist.
        RouteLoadError: If a dynamic route file fails to load.
        ConfigurationError: If *get_route_type* returns an unknown value.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Routes directory not found: {root}")

    if routes is None:
        routes = RouteTable()

    def register(method: str, path: str, handler: Any) -> None:
        routes.add(path, method, handler)
        logger.debug("route added: %s %s", method, path)
        if on_route_added is not None:
            on_route_added(method, path)

    async for entry in walk(root):
        filepath = Path(entry)
        route_type = get_route_type(filepath)
        relative = PurePosixPath(filepath.relative_to(root).as_posix())

        if route_type is RouteType.STATIC:
            register("GET", f"/{relative}", _static_handler(filepath))
        elif route_type is RouteType.DYNAMIC:
            try:
                exports = await invoke(load_module, filepath)
            except RouteLoadError as exc:
                logger.error("%s", exc)
                raise
            route = f"/{relative.with_suffix('')}"
            for name, value in exports.items():
                if is_route_method(name) and callable(value):
                    register(name, route, value)
        elif route_type is RouteType.IGNORED:
            continue
        else:
            raise ConfigurationError(f"Invalid route type for {filepath}: {route_type!r}")

    return routes


def _static_handler(path: Path) -> Callable[[Any], Any]:
    async def serve_static(context: Any) -> Any:
        return file(path)

    return serve_static
