"""Development and production server startup.

Starts a pounce ASGI server with a live warren App object. pounce is an
optional dependency (``pip install warren[server]``); it is imported only
when a server is actually started.
"""

from __future__ import annotations


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    log_level: str = "info",
    app_path: str | None = None,
) -> None:
    """Serve *app* with pounce until interrupted.

    Pounce's ``run()`` takes an import string (e.g., ``"site:app"``), but
    warren has a live ``App`` object. We use ``pounce.Server`` directly with
    the ASGI callable.

    Args:
        app: ASGI callable (warren App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes. Route files are only re-read on
            restart, so this is what picks up edits under the routes tree.
        log_level: Server log level (``"debug"``, ``"info"``, ...).
        app_path: Optional ``"module:attribute"`` import string. When
            provided, pounce reimports the app on each reload cycle.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
