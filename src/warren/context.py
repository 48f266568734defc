"""Per-request context passed to route handlers.

The dispatcher never looks inside a context; it only builds one per
request through a :data:`RequestContextGetter` and hands it to handlers
and hooks. Applications that need more request-scoped data supply their
own getter returning their own type.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from warren.http.request import ServerRequest

logger = logging.getLogger("warren.request")

RequestContextGetter: TypeAlias = Callable[[ServerRequest], Any]


@dataclass(slots=True)
class RequestContext:
    """The default request context.

    Attributes:
        request: The incoming request.
        logger: Logger adapter tagging records with method and path.
        state: Free-form per-request storage for handlers.
    """

    request: ServerRequest
    logger: logging.LoggerAdapter[logging.Logger]
    state: dict[str, Any] = field(default_factory=dict)


def default_request_context(request: ServerRequest) -> RequestContext:
    """Build the default :class:`RequestContext` for *request*."""
    adapter = logging.LoggerAdapter(logger, {"method": request.method, "path": request.url})
    return RequestContext(request=request, logger=adapter)
