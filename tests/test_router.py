"""Tests for funcroute.routing.router — registration and dispatch."""

import logging

import anyio

import pytest

from funcroute import Response, Router
from funcroute.config import RouterConfig
from funcroute.errors import ConfigurationError
from funcroute.http.request import Request
from funcroute.testing import TestClient


class TestRegistration:
    def test_add_route_upper_cases_method(self) -> None:
        router = Router()
        router.add_route("get", "/a", lambda request: "a")
        assert [(r.method, r.path) for r in router.routes] == [("GET", "/a")]

    def test_route_decorator_multiple_methods(self) -> None:
        router = Router()

        @router.route("/items", methods=["GET", "POST"])
        def items(request):
            return []

        assert [(r.method, r.path, r.handler) for r in router.routes] == [
            ("GET", "/items", items),
            ("POST", "/items", items),
        ]

    def test_path_must_start_with_slash(self) -> None:
        with pytest.raises(ConfigurationError, match="must start with '/'"):
            Router().add_route("GET", "items", lambda request: None)

    def test_empty_method_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="non-empty"):
            Router().add_route("", "/a", lambda request: None)

    def test_handler_must_be_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="not callable"):
            Router().add_route("GET", "/a", "nope")  # type: ignore[arg-type]

    def test_middleware_must_be_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="not callable"):
            Router().use_pre(42)  # type: ignore[arg-type]

    def test_terminal_handler_must_be_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="not callable"):
            Router().set_not_found_handler(None)  # type: ignore[arg-type]

    @pytest.mark.anyio
    async def test_reregistration_overwrites(self) -> None:
        router = Router()
        router.add_route("GET", "/x", lambda request: "first")
        router.add_route("GET", "/x", lambda request: "second")
        assert len(router.routes) == 1

        async with TestClient(router) as client:
            response = await client.get("/x")
        assert response.body == "second"


class TestDispatch:
    @pytest.mark.anyio
    async def test_registered_route(self) -> None:
        router = Router()

        async def hello(request: Request) -> Response:
            return Response.json({"message": "hello"})

        router.add_route("GET", "/hello", hello)
        async with TestClient(router) as client:
            response = await client.get("/hello")
        assert response.status_code == 200
        assert response.body == {"message": "hello"}

    @pytest.mark.anyio
    async def test_sync_handler(self) -> None:
        router = Router()
        router.add_route("GET", "/sync", lambda request: {"sync": True})
        async with TestClient(router) as client:
            response = await client.get("/sync")
        assert response.body == {"sync": True}

    @pytest.mark.anyio
    async def test_handler_sees_request(self) -> None:
        router = Router()
        router.add_route("POST", "/echo", lambda request: request.json())
        async with TestClient(router) as client:
            response = await client.post("/echo", json={"a": 1})
        assert response.body == {"a": 1}

    @pytest.mark.anyio
    async def test_query_in_path(self) -> None:
        router = Router()
        router.add_route("GET", "/search", lambda request: dict(request.query))
        async with TestClient(router) as client:
            response = await client.get("/search?q=x&page=2")
        assert response.body == {"q": "x", "page": "2"}

    @pytest.mark.anyio
    async def test_method_is_case_insensitive(self) -> None:
        router = Router()
        router.add_route("GET", "/a", lambda request: "ok")
        async with TestClient(router) as client:
            response = await client.request("get", "/a")
        assert response.status_code == 200

    @pytest.mark.anyio
    async def test_unknown_path_is_404(self) -> None:
        router = Router()
        router.add_route("GET", "/a", lambda request: "ok")
        async with TestClient(router) as client:
            response = await client.get("/missing")
        assert response.status_code == 404
        assert response.body == {"error": "Not Found"}

    @pytest.mark.anyio
    async def test_wrong_method_is_405(self) -> None:
        router = Router()
        router.add_route("GET", "/a", lambda request: "ok")
        async with TestClient(router) as client:
            response = await client.delete("/a")
        assert response.status_code == 405
        assert response.body == {"error": "Method Not Allowed"}

    @pytest.mark.anyio
    async def test_custom_not_found(self) -> None:
        router = Router()
        router.set_not_found_handler(
            lambda request: Response.json({"missing": request.path}, status_code=404)
        )
        async with TestClient(router) as client:
            response = await client.get("/nowhere")
        assert response.status_code == 404
        assert response.body == {"missing": "/nowhere"}

    @pytest.mark.anyio
    async def test_custom_method_not_allowed(self) -> None:
        router = Router()
        router.add_route("GET", "/a", lambda request: "ok")

        async def not_allowed() -> Response:
            return Response(status_code=405, body="nope")

        router.set_method_not_allowed_handler(not_allowed)
        async with TestClient(router) as client:
            response = await client.post("/a")
        assert response.status_code == 405
        assert response.body == "nope"

    @pytest.mark.anyio
    async def test_terminal_handlers_skip_middleware(self) -> None:
        router = Router()
        seen: list[str] = []

        async def tracking(request, next):
            seen.append(request.path)
            return await next(request)

        router.use_pre(tracking)
        async with TestClient(router) as client:
            await client.get("/missing")
        assert seen == []

    @pytest.mark.anyio
    async def test_none_return_is_204(self) -> None:
        router = Router()
        router.add_route("DELETE", "/a", lambda request: None)
        async with TestClient(router) as client:
            response = await client.delete("/a")
        assert response.status_code == 204

    @pytest.mark.anyio
    async def test_concurrent_dispatch(self) -> None:
        router = Router()

        async def slow(request: Request) -> dict:
            await anyio.sleep(0.01)
            return {"n": request.query["n"]}

        router.add_route("GET", "/slow", slow)
        results: dict[str, object] = {}

        async with TestClient(router) as client:

            async def call(n: int) -> None:
                results[str(n)] = (await client.get(f"/slow?n={n}")).body

            async with anyio.create_task_group() as tg:
                for n in range(10):
                    tg.start_soon(call, n)

        assert results == {str(n): {"n": str(n)} for n in range(10)}


class TestTrailingSlash:
    @pytest.mark.anyio
    async def test_stripped_by_default(self) -> None:
        router = Router()
        router.add_route("GET", "/users", lambda request: "users")
        async with TestClient(router) as client:
            response = await client.get("/users/")
        assert response.status_code == 200
        assert response.body == "users"

    @pytest.mark.anyio
    async def test_handler_sees_original_path(self) -> None:
        router = Router()
        router.add_route("GET", "/users", lambda request: request.path)
        async with TestClient(router) as client:
            response = await client.get("/users/")
        assert response.body == "/users/"

    @pytest.mark.anyio
    async def test_root_is_kept(self) -> None:
        router = Router()
        router.add_route("GET", "/", lambda request: "root")
        async with TestClient(router) as client:
            response = await client.get("/")
        assert response.body == "root"

    @pytest.mark.anyio
    async def test_disabled(self) -> None:
        router = Router(RouterConfig(strip_trailing_slash=False))
        router.add_route("GET", "/users", lambda request: "users")
        assert router.strip_trailing_slash is False
        async with TestClient(router) as client:
            assert (await client.get("/users/")).status_code == 404
            assert (await client.get("/users")).status_code == 200

    @pytest.mark.anyio
    async def test_setter(self) -> None:
        router = Router()
        router.set_strip_trailing_slash(False)
        router.add_route("GET", "/users/", lambda request: "slash")
        async with TestClient(router) as client:
            response = await client.get("/users/")
        assert response.body == "slash"

    def test_freeze_warns_about_unreachable_routes(self, caplog: pytest.LogCaptureFixture) -> None:
        router = Router()
        router.add_route("GET", "/users/", lambda request: "slash")
        with caplog.at_level(logging.WARNING, logger="funcroute.router"):
            router.freeze()
        assert any("ends with '/'" in r.getMessage() for r in caplog.records)


class TestFreeze:
    def test_not_frozen_initially(self) -> None:
        assert Router().frozen is False

    def test_freeze_is_idempotent(self) -> None:
        router = Router()
        router.freeze()
        router.freeze()
        assert router.frozen

    def test_registration_after_freeze_raises(self) -> None:
        router = Router()
        router.freeze()
        with pytest.raises(ConfigurationError, match="Cannot modify"):
            router.add_route("GET", "/a", lambda request: None)
        with pytest.raises(ConfigurationError):
            router.use_pre(lambda request, next: next(request))
        with pytest.raises(ConfigurationError):
            router.use_post(lambda request, next: next(request))
        with pytest.raises(ConfigurationError):
            router.set_strip_trailing_slash(False)

    @pytest.mark.anyio
    async def test_first_dispatch_freezes(self) -> None:
        router = Router()
        await router.handle_request(Request.build("GET", "/"))
        assert router.frozen

    @pytest.mark.anyio
    async def test_terminal_handlers_replaceable_after_freeze(self) -> None:
        router = Router()
        router.freeze()
        router.set_not_found_handler(lambda: Response(status_code=404, body="gone"))
        response = await router.handle_request(Request.build("GET", "/x"))
        assert response.body == "gone"


class TestHandleEvent:
    @pytest.mark.anyio
    async def test_wire_shape(self) -> None:
        router = Router()
        router.add_route("GET", "/ping", lambda request: {"pong": request.request_id})
        event = {
            "rawPath": "/ping",
            "requestContext": {"requestId": "r-9", "http": {"method": "GET", "path": "/ping"}},
        }
        wire = await router.handle_event(event)
        assert wire == {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json"},
            "body": {"pong": "r-9"},
        }

    @pytest.mark.anyio
    async def test_context_reaches_handler(self) -> None:
        router = Router()
        ctx = object()
        router.add_route("GET", "/ctx", lambda request: {"same": request.context is ctx})
        event = {"requestContext": {"http": {"method": "GET", "path": "/ctx"}}}
        wire = await router.handle_event(event, ctx)
        assert wire["body"] == {"same": True}


class TestLogging:
    @pytest.mark.anyio
    async def test_one_completion_record(self, caplog: pytest.LogCaptureFixture) -> None:
        router = Router()
        router.add_route("GET", "/a", lambda request: "ok")
        with caplog.at_level(logging.INFO, logger="funcroute.router"):
            await router.handle_request(Request.build("GET", "/a"))
        records = [r for r in caplog.records if r.getMessage().startswith("Request completed")]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "method=GET path=/a status=200" in records[0].getMessage()

    @pytest.mark.anyio
    async def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        router = Router(logger=logging.getLogger("orders.http"))
        with caplog.at_level(logging.INFO, logger="orders.http"):
            await router.handle_request(Request.build("GET", "/x"))
        assert [r.name for r in caplog.records if "Request completed" in r.getMessage()] == [
            "orders.http"
        ]
