"""Serving configuration.

Both configuration objects are frozen dataclasses, immutable after
creation, IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from warren.context import RequestContextGetter, default_request_context
from warren.http.sink import ResponseSink

ContextT = TypeVar("ContextT")


def _ignore(*args: Any) -> None:
    return None


@dataclass(frozen=True, slots=True)
class ServeOptions(Generic[ContextT]):
    """Request-dispatch hooks. Every field is optional.

    Attributes:
        get_request_context: Builds the context handed to handlers from the
            raw request. Defaults to :func:`~warren.context.default_request_context`.
        on_error_handling: Called with ``(context, error)`` when a route
            handler fails, before the error handler is resolved.
        on_error_writing: Called with ``(context, error)`` when writing the
            response fails, before the last-resort response is attempted.
        on_responded: Called with ``(context, sink)`` exactly once per
            request, after the response has completed or failed for good.

    A hook set to ``None`` is skipped. Hooks observe only; whatever they
    return is ignored, and if one raises the error is logged and dispatch
    carries on.
    """

    get_request_context: RequestContextGetter = default_request_context
    on_error_handling: Callable[[ContextT, Exception], Any] | None = _ignore
    on_error_writing: Callable[[ContextT, Exception], Any] | None = _ignore
    on_responded: Callable[[ContextT, ResponseSink], Any] | None = _ignore


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Server configuration for ``App.run()`` and the CLI.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(routes_dir="site", port=3000)

    ``log_level`` sets the level of the ``warren`` loggers and is passed to
    the server. ``debug`` overrides it with ``"debug"``, which among other
    things logs every route as it is registered.
    """

    routes_dir: str | Path = "routes"
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development mode)
    reload: bool = False

    log_level: str = "info"

    @property
    def effective_log_level(self) -> str:
        return "debug" if self.debug else self.log_level
