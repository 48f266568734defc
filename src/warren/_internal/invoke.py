"""Call user code that may or may not be a coroutine function.

Route handlers, response writers, dispatch hooks, lifespan hooks and
custom module loaders all come from the embedding application, and each
of them may be written with ``def`` or ``async def``.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Return ``func(*args, **kwargs)``, awaiting it first when needed.

    A plain function that returns an awaitable (for example a sync
    response writer returning ``sink.end(...)``) is awaited too.
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        return await result
    return result
