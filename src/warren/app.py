"""The warren ASGI application.

Pairs a route table with serving options and exposes the ASGI 3.0
callable. Build one from a directory::

    from warren import App

    app = App.from_directory("routes")

or from a table you already have::

    routes = await build_routes("routes")
    app = serve(routes, ServeOptions(on_responded=log_access))
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generic

import anyio

from warren._internal.asgi import Receive, Scope, Send
from warren._internal.invoke import invoke
from warren.config import AppConfig, ContextT, ServeOptions
from warren.routing.builder import build_routes
from warren.routing.table import RouteTable
from warren.server.dispatch import handle_request

logger = logging.getLogger("warren.server")


class App(Generic[ContextT]):
    """An ASGI application serving a :class:`RouteTable`.

    The table is read-only while serving. :meth:`swap_routes` replaces it
    wholesale, which is how a rebuilt table goes live.
    """

    def __init__(
        self,
        routes: RouteTable,
        options: ServeOptions[ContextT] | None = None,
        *,
        config: AppConfig | None = None,
    ) -> None:
        self._routes = routes
        self.options: ServeOptions[ContextT] = options or ServeOptions()
        self.config = config or AppConfig()
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []

    @classmethod
    def from_directory(
        cls,
        directory: str | Path | None = None,
        options: ServeOptions[ContextT] | None = None,
        *,
        config: AppConfig | None = None,
        **build_options: Any,
    ) -> App[ContextT]:
        """Build the route table for *directory* and wrap it in an App.

        Runs the async builder to completion, so call this at import time
        or from synchronous setup code, not from inside an event loop.
        Extra keyword arguments go to
        :func:`~warren.routing.builder.build_routes`.
        """
        config = config or AppConfig()
        _apply_log_level(config)
        root = directory if directory is not None else config.routes_dir
        routes = anyio.run(functools.partial(build_routes, root, **build_options))
        logger.info("Loaded %d routes from %s", len(routes), root)
        return cls(routes, options, config=config)

    @property
    def routes(self) -> RouteTable:
        return self._routes

    def swap_routes(self, routes: RouteTable) -> RouteTable:
        """Serve *routes* from now on and return the previous table.

        Requests already being dispatched finish against the table they
        resolved with.
        """
        previous, self._routes = self._routes, routes
        return previous

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run when the server starts.

        Supports both sync and async functions::

            @app.on_startup
            async def setup():
                await warm_cache()
        """
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run when the server shuts down."""
        self._shutdown_hooks.append(func)
        return func

    # -- Serving --

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        app_path: str | None = None,
    ) -> None:
        """Start a pounce server for this app.

        Args:
            host: Override bind host.
            port: Override bind port.
            app_path: ``"module:attribute"`` import string for this app;
                lets reload re-import it, re-reading the routes tree.
        """
        from warren.server.dev import run_server

        _apply_log_level(self.config)
        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.reload,
            log_level=self.config.effective_log_level,
            app_path=app_path,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            routes=self._routes,
            options=self.options,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Runs registered startup/shutdown hooks and signals completion
        back to the server.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        await invoke(hook)
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    await invoke(hook)
                await send({"type": "lifespan.shutdown.complete"})
                return

    def __repr__(self) -> str:
        return f"App({self._routes!r})"


def _apply_log_level(config: AppConfig) -> None:
    logging.getLogger("warren").setLevel(config.effective_log_level.upper())


def serve(
    routes: RouteTable,
    options: ServeOptions[ContextT] | None = None,
) -> App[ContextT]:
    """Return an ASGI app dispatching requests against *routes*."""
    return App(routes, options)
