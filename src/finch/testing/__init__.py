"""Test utilities for finch routers::

    from finch.testing import TestClient
"""

from finch.testing.client import TestClient

__all__ = ["TestClient"]
