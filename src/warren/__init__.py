"""Warren: filesystem-routed request dispatch for ASGI.

A directory tree is the route table. Python files export handlers named
after HTTP methods; every other file is served as-is::

    routes/
      index.py        # async def GET(context): return text("hi")
      logo.png        # GET /logo.png
      api/
        users.py      # GET, POST /api/users
        404.py        # ALL: not-found handler for /api/...

Serving it::

    from warren import App

    app = App.from_directory("routes")
    app.run()
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ALL",
    "App",
    "AppConfig",
    "RequestContext",
    "ResponseSink",
    "RouteTable",
    "RouteType",
    "ServeOptions",
    "ServerRequest",
    "WarrenError",
    "build_routes",
    "file",
    "html",
    "json",
    "serve",
    "status",
    "text",
]

_LAZY = {
    "App": "warren.app",
    "serve": "warren.app",
    "AppConfig": "warren.config",
    "ServeOptions": "warren.config",
    "RequestContext": "warren.context",
    "ResponseSink": "warren.http.sink",
    "ServerRequest": "warren.http.request",
    "WarrenError": "warren.errors",
    "ALL": "warren.routing.table",
    "RouteTable": "warren.routing.table",
    "RouteType": "warren.routing.builder",
    "build_routes": "warren.routing.builder",
    "file": "warren.responses",
    "html": "warren.responses",
    "json": "warren.responses",
    "status": "warren.responses",
    "text": "warren.responses",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warren`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        raise AttributeError(f"module 'warren' has no attribute {name!r}")

    import importlib

    return getattr(importlib.import_module(module_name), name)
