"""Tests for warren.content_types."""

import pytest

from warren.content_types import DEFAULT_CONTENT_TYPE, get_content_type


class TestGetContentType:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("style.css", "text/css"),
            ("/srv/site/index.html", "text/html"),
            ("app.js", "application/javascript"),
            ("LOGO.SVG", "image/svg+xml"),
            ("photo.png", "image/png"),
        ],
    )
    def test_known_extensions(self, path: str, expected: str) -> None:
        assert get_content_type(path) == expected

    def test_no_extension(self) -> None:
        assert get_content_type("README") == DEFAULT_CONTENT_TYPE

    def test_unknown_extension(self) -> None:
        assert get_content_type("data.zzzunknown") == DEFAULT_CONTENT_TYPE
