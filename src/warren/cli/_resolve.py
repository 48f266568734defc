"""Turn a CLI target into an App.

A target names either a routes tree on disk or a module that already
builds one::

    warren routes ./routes          # build the tree now
    warren run site:app             # use site.app
    warren run site                 # same, attribute defaults to "app"
    warren run site:create_app      # call it, it must return an App
"""

import importlib
from pathlib import Path

from warren.app import App
from warren.config import AppConfig

DEFAULT_ATTRIBUTE = "app"


def is_import_string(target: str) -> bool:
    """True unless *target* is an existing directory."""
    return not Path(target).is_dir()


def resolve_app(target: str, *, config: AppConfig | None = None) -> App:
    """Return the App *target* names.

    A directory is built with :meth:`App.from_directory` using *config*;
    an import-string target brings its own config and ignores it.

    Raises:
        ModuleNotFoundError: The module part does not import.
        AttributeError: The module has no such attribute.
        TypeError: The attribute is not an App and is not a callable
            returning one, or that callable raised.
        RouteLoadError: A file in the routes tree failed to load.
    """
    if not is_import_string(target):
        return App.from_directory(target, config=config)

    module_name, _, attribute = target.partition(":")
    found = getattr(importlib.import_module(module_name), attribute or DEFAULT_ATTRIBUTE)
    if isinstance(found, App):
        return found

    if not callable(found):
        raise TypeError(f"{target!r} is a {type(found).__name__}, expected a warren App")
    try:
        app = found()
    except Exception as exc:
        raise TypeError(f"Calling {target!r} to build the app failed: {exc}") from exc
    if not isinstance(app, App):
        raise TypeError(f"{target!r} returned a {type(app).__name__}, expected a warren App")
    return app
