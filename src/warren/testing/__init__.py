"""Testing utilities for warren applications."""

from warren.testing.client import TestClient, TestResponse

__all__ = ["TestClient", "TestResponse"]
