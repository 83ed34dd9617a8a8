"""Local bridge — serve a Router over a plain HTTP connection.

``LocalBridge`` is an ASGI application. It translates each connection's
request into the same ``Request`` a function-URL event produces, hands
it to the router, and writes the ``Response`` back. It never routes or
runs middleware itself.
"""

import logging
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from funcroute._internal.asgi import Receive, Scope, Send
from funcroute.http.cookies import split_cookie_header
from funcroute.http.headers import Headers
from funcroute.http.query import QueryParams
from funcroute.http.request import Invocation, Request
from funcroute.routing.router import Router
from funcroute.server.errors import default_panic
from funcroute.server.sender import encode_response, send_response

logger = logging.getLogger("funcroute.server")

# Stand-ins for metadata only the serverless runtime provides
PLACEHOLDER_ACCOUNT_ID = "123456789012"
PLACEHOLDER_API_ID = "local-api-id"
PLACEHOLDER_DOMAIN_NAME = "localhost"
PLACEHOLDER_DOMAIN_PREFIX = "local"


def _decode_headers(raw: Iterable[tuple[bytes, bytes]]) -> Headers:
    return Headers((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)


async def read_body(receive: Receive) -> bytes:
    """Read the full request body from ASGI ``http.request`` messages."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunk = message.get("body", b"")
        if chunk:
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def request_from_scope(scope: Scope, body: bytes) -> Request:
    """Translate an ASGI HTTP scope and its body into a Request."""
    headers = _decode_headers(scope.get("headers", ()))
    client = scope.get("client")
    invocation = Invocation(
        request_id=f"local-{uuid.uuid4().hex}",
        source_ip=client[0] if client else "",
        user_agent=headers.get("user-agent", "") or "",
        received_at=datetime.now(UTC),
        account_id=PLACEHOLDER_ACCOUNT_ID,
        api_id=PLACEHOLDER_API_ID,
        domain_name=PLACEHOLDER_DOMAIN_NAME,
        domain_prefix=PLACEHOLDER_DOMAIN_PREFIX,
        protocol=f"HTTP/{scope.get('http_version', '1.1')}",
    )
    try:
        text_body: str | bytes = body.decode("utf-8")
    except UnicodeDecodeError:
        text_body = body
    return Request(
        method=scope["method"],
        path=scope["path"],
        headers=headers,
        query=QueryParams.parse(scope.get("query_string", b"").decode("latin-1")),
        cookies=split_cookie_header(headers.get("cookie", "") or ""),
        body=text_body,
        invocation=invocation,
    )


class LocalBridge:
    """ASGI application wrapping a Router for local serving.

    Usage::

        bridge = LocalBridge(router)
        # any ASGI server: pounce, or httpx.ASGITransport(app=bridge) in tests
    """

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            logger.debug("Ignoring unsupported ASGI scope type %r", scope["type"])
            return

        body = await read_body(receive)
        request = request_from_scope(scope, body)
        response = await self.router.handle_request(request)
        try:
            encoded = encode_response(response)
        except (TypeError, ValueError):
            # The completion record is already written; this one carries the cause
            logger.exception(
                "Response for %s %s could not be encoded; sending 500",
                request.method,
                request.path,
            )
            encoded = encode_response(default_panic(request))
        await send_response(encoded, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze the router at startup, before the first connection."""
        while True:
            message: Any = await receive()
            if message["type"] == "lifespan.startup":
                self.router.freeze()
                logger.info("Local bridge ready: %d routes", len(self.router.routes))
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
