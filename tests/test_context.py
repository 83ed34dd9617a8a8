"""Tests for funcroute.context — request-scoped ContextVar."""

import pytest

from funcroute import Router, get_request
from funcroute.testing import TestClient


class TestGetRequest:
    def test_outside_dispatch_raises(self) -> None:
        with pytest.raises(LookupError):
            get_request()

    @pytest.mark.anyio
    async def test_inside_handler(self) -> None:
        router = Router()
        router.add_route("GET", "/who", lambda request: {"same": get_request() is request})
        async with TestClient(router) as client:
            response = await client.get("/who")
        assert response.body == {"same": True}

    @pytest.mark.anyio
    async def test_reset_after_dispatch(self) -> None:
        router = Router()
        router.add_route("GET", "/a", lambda request: "ok")
        async with TestClient(router) as client:
            await client.get("/a")
        with pytest.raises(LookupError):
            get_request()
