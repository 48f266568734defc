"""Warren exception hierarchy.

Shared across the route builder, the response sink, and the dispatcher
so every module raises and catches the same types.
"""

from pathlib import Path


class WarrenError(Exception):
    """Base for all warren-specific errors."""


class ConfigurationError(WarrenError):
    """Raised when route building or serving is configured incorrectly."""


class RouteLoadError(WarrenError):
    """A dynamic route file could not be loaded as a module.

    Fatal during route building. The original exception is chained
    as ``__cause__``.
    """

    def __init__(self, path: str | Path, detail: str = "") -> None:
        self.path = str(path)
        message = f"Failed to load route module {self.path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidResponse(WarrenError, TypeError):
    """A handler produced something that is not a response writer."""

    def __init__(self, value: object = None) -> None:
        self.value = value
        super().__init__("Invalid response")


class IncompleteResponse(WarrenError):
    """A response writer returned without ending the response."""

    def __init__(self, detail: str = "Response writer did not end the response") -> None:
        super().__init__(detail)


class HeadersAlreadySent(WarrenError):  # noqa: N818
    """Status or headers were changed after they went out on the wire."""


class ResponseFinished(WarrenError):  # noqa: N818
    """Body data was written after the response was ended."""


class InvalidHeader(WarrenError, ValueError):  # noqa: N818
    """A header name or value cannot go on the wire as-is.

    Raised when the header is set, so a response that never got a valid
    header staged can still be replaced by a last-resort response.
    """
