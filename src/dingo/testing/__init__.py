"""Test utilities for dingo applications.

    from dingo.testing import TestClient
"""

from dingo.testing.client import TestClient, TestResponse

__all__ = ["TestClient", "TestResponse"]
