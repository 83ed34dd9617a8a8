"""Response header middleware — fixed headers, security headers, timing.

All three are post-processing middleware: they call ``next`` first and
adjust the response an inner layer produced.
"""

import time
from collections.abc import Mapping
from dataclasses import dataclass

from funcroute.http.request import Request
from funcroute.http.response import Response
from funcroute.middleware.protocol import Next


class ResponseHeadersMiddleware:
    """Inject a fixed set of headers into every response.

    Existing headers with the same name are overwritten::

        router.use_post(ResponseHeadersMiddleware({"X-Service": "orders"}))
    """

    __slots__ = ("headers",)

    def __init__(self, headers: Mapping[str, str]) -> None:
        self.headers = dict(headers)

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        response.headers.update(self.headers)
        return response


@dataclass(frozen=True, slots=True)
class SecurityHeadersConfig:
    """Configuration for security headers.

    All values are applied as-is. Use standard header values.
    """

    x_frame_options: str = "DENY"
    x_content_type_options: str = "nosniff"
    referrer_policy: str = "strict-origin-when-cross-origin"
    strict_transport_security: str | None = None


class SecurityHeadersMiddleware:
    """Add common security headers to every response.

    - X-Frame-Options — prevents clickjacking
    - X-Content-Type-Options — prevents MIME sniffing
    - Referrer-Policy — controls referrer leakage
    - Strict-Transport-Security — only when configured
    """

    __slots__ = ("config",)

    def __init__(self, config: SecurityHeadersConfig | None = None) -> None:
        self.config = config or SecurityHeadersConfig()

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        cfg = self.config
        secured = response.with_headers(
            {
                "X-Frame-Options": cfg.x_frame_options,
                "X-Content-Type-Options": cfg.x_content_type_options,
                "Referrer-Policy": cfg.referrer_policy,
            }
        )
        if cfg.strict_transport_security:
            secured = secured.with_header(
                "Strict-Transport-Security", cfg.strict_transport_security
            )
        return secured


class TimingMiddleware:
    """Add an ``X-Response-Time`` header measuring the downstream chain."""

    __slots__ = ("header",)

    def __init__(self, header: str = "X-Response-Time") -> None:
        self.header = header

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.perf_counter()
        response = await next(request)
        elapsed = time.perf_counter() - start
        response.headers[self.header] = f"{elapsed * 1000:.3f}ms"
        return response
