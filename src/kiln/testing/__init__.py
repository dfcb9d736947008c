"""Test utilities for kiln applications.

    from kiln.testing import TestClient
"""

from kiln.testing.client import TestClient

__all__ = ["TestClient"]
