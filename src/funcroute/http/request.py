"""Immutable, source-agnostic request.

The same Request is built from a function-URL invocation event or from
a local HTTP connection. It is constructed once per inbound call and
never mutated afterwards.
"""

from __future__ import annotations

import base64
import json as json_module
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from funcroute.http.cookies import parse_cookies
from funcroute.http.headers import Headers
from funcroute.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Invocation:
    """Invocation metadata supplied by the event source.

    The local bridge fills the fields a raw connection cannot provide
    with placeholders.
    """

    request_id: str = ""
    source_ip: str = ""
    user_agent: str = ""
    received_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    account_id: str = ""
    api_id: str = ""
    domain_name: str = ""
    domain_prefix: str = ""
    protocol: str = "HTTP/1.1"


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request.

    ``method`` is upper-cased on creation. ``headers`` match keys
    case-insensitively. ``cookies`` keeps the raw ``name=value`` strings
    in arrival order; use ``cookie()`` for lookups.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    cookies: tuple[str, ...] = ()
    body: str | bytes = ""
    is_base64_encoded: bool = False
    invocation: Invocation = field(default_factory=Invocation)

    # Opaque caller value (runtime context, deadline holder). Never read by the router.
    context: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())

    # -- Metadata --

    @property
    def request_id(self) -> str:
        return self.invocation.request_id

    @property
    def source_ip(self) -> str:
        return self.invocation.source_ip

    @property
    def user_agent(self) -> str:
        return self.invocation.user_agent

    @property
    def received_at(self) -> datetime:
        return self.invocation.received_at

    @property
    def raw_query_string(self) -> str:
        return self.query.raw

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    # -- Body access --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes, decoding base64 when the event flagged it."""
        if self.is_base64_encoded:
            return base64.b64decode(self.body)
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as text (UTF-8)."""
        return self.body_bytes.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body_bytes)

    def cookie(self, name: str, default: str | None = None) -> str | None:
        """Return the value of cookie *name*, or *default*."""
        return parse_cookies(self.cookies).get(name, default)

    # -- Factories --

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        query: Mapping[str, str] | str | None = None,
        cookies: Iterable[str] = (),
        body: str | bytes = "",
        invocation: Invocation | None = None,
        context: Any = None,
    ) -> Request:
        """Build a Request from plain values.

        *query* may be a mapping or a raw query string.
        """
        if isinstance(query, str):
            params = QueryParams.parse(query)
        else:
            params = QueryParams(query)
        return cls(
            method=method,
            path=path,
            headers=Headers(headers or ()),
            query=params,
            cookies=tuple(cookies),
            body=body,
            invocation=invocation or Invocation(),
            context=context,
        )

    @classmethod
    def from_event(cls, event: Mapping[str, Any], context: Any = None) -> Request:
        """Create a Request from a function-URL invocation event (payload 2.0)."""
        ctx = event.get("requestContext") or {}
        http = ctx.get("http") or {}

        time_epoch = ctx.get("timeEpoch")
        received_at = (
            datetime.fromtimestamp(time_epoch / 1000, tz=UTC)
            if time_epoch is not None
            else datetime.now(UTC)
        )
        invocation = Invocation(
            request_id=ctx.get("requestId", ""),
            source_ip=http.get("sourceIp", ""),
            user_agent=http.get("userAgent", ""),
            received_at=received_at,
            account_id=ctx.get("accountId", ""),
            api_id=ctx.get("apiId", ""),
            domain_name=ctx.get("domainName", ""),
            domain_prefix=ctx.get("domainPrefix", ""),
            protocol=http.get("protocol", "HTTP/1.1"),
        )
        return cls(
            method=http.get("method") or "GET",
            path=http.get("path") or event.get("rawPath") or "/",
            headers=Headers(event.get("headers") or {}),
            query=QueryParams(
                event.get("queryStringParameters") or {},
                raw=event.get("rawQueryString", ""),
            ),
            cookies=tuple(event.get("cookies") or ()),
            body=event.get("body") or "",
            is_base64_encoded=bool(event.get("isBase64Encoded", False)),
            invocation=invocation,
            context=context,
        )
