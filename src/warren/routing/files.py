"""Async directory traversal for route building."""

from collections.abc import AsyncIterator

import anyio


async def walk(directory: str | anyio.Path) -> AsyncIterator[anyio.Path]:
    """Yield every file under *directory*, depth-first.

    Entries are visited in sorted order so registration is deterministic.
    I/O errors propagate.
    """
    root = anyio.Path(directory)
    entries = sorted([entry async for entry in root.iterdir()], key=lambda entry: entry.name)
    for entry in entries:
        if await entry.is_dir():
            async for path in walk(entry):
                yield path
        else:
            yield entry
