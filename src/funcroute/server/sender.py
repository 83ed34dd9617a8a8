"""ASGI response sending — translates a funcroute Response to ASGI messages."""

from dataclasses import dataclass

from funcroute._internal.asgi import Send
from funcroute.http.response import JSON_CONTENT_TYPE, Response


@dataclass(frozen=True, slots=True)
class EncodedResponse:
    """A response already serialized to ASGI status, raw headers and body."""

    status: int
    headers: list[tuple[bytes, bytes]]
    body: bytes


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def encode_headers(response: Response, body: bytes) -> list[tuple[bytes, bytes]]:
    """Response headers as raw ASGI pairs, plus content-type and content-length."""
    raw_headers: list[tuple[bytes, bytes]] = []
    for name, value in response.headers.items():
        if name.lower() == "content-length":
            continue
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    if response.is_structured and response.header("content-type") is None:
        raw_headers.append((b"content-type", JSON_CONTENT_TYPE.encode("latin-1")))

    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    return raw_headers


def encode_response(response: Response) -> EncodedResponse:
    """Serialize *response* for the wire without sending anything.

    Raises:
        TypeError: If a structured body is not JSON-serializable.
        ValueError: If the body or a header cannot be encoded.
    """
    body = response.encode_body() if _body_allowed(response.status_code) else b""
    return EncodedResponse(response.status_code, encode_headers(response, body), body)


async def send_response(response: Response | EncodedResponse, send: Send) -> None:
    """Send headers and status, then the serialized body."""
    encoded = response if isinstance(response, EncodedResponse) else encode_response(response)

    await send(
        {
            "type": "http.response.start",
            "status": encoded.status,
            "headers": encoded.headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": encoded.body,
        }
    )
