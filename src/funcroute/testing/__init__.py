"""Testing utilities for funcroute routers.

Usage::

    from funcroute.testing import TestClient

    async with TestClient(router) as client:
        response = await client.get("/")
        assert response.status_code == 200
"""

from funcroute.testing.client import TestClient

__all__ = ["TestClient"]
