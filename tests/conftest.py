"""Shared fixtures: build routes trees on disk."""

import logging
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

WriteTree = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_tree(tmp_path: Path) -> WriteTree:
    """Return a function writing ``{relative path: contents}`` under a fresh root."""
    root = tmp_path / "routes"
    root.mkdir()

    def write(files: dict[str, str]) -> Path:
        for name, contents in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(contents), encoding="utf-8")
        return root

    return write


@pytest.fixture
def warren_logger() -> Iterator[logging.Logger]:
    """The ``warren`` logger, with its level restored after the test."""
    logger = logging.getLogger("warren")
    level = logger.level
    yield logger
    logger.setLevel(level)
