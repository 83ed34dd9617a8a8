"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Each registration pairs it with a ``MiddlewareConfig`` naming the
paths, methods, and header values for which it is skipped.

Built-in middleware:
    CORSMiddleware -- Cross-Origin Resource Sharing
    ResponseHeadersMiddleware -- Inject fixed response headers
    SecurityHeadersMiddleware -- X-Frame-Options, X-Content-Type-Options, Referrer-Policy
    TimingMiddleware -- X-Response-Time header
    TokenAuthMiddleware -- Bearer / API-key token check
"""

from funcroute.middleware.auth import TokenAuthConfig, TokenAuthMiddleware
from funcroute.middleware.config import MiddlewareConfig, MiddlewareEntry
from funcroute.middleware.cors import CORSConfig, CORSMiddleware
from funcroute.middleware.headers import (
    ResponseHeadersMiddleware,
    SecurityHeadersConfig,
    SecurityHeadersMiddleware,
    TimingMiddleware,
)
from funcroute.middleware.protocol import Middleware, Next

__all__ = [
    "CORSConfig",
    "CORSMiddleware",
    "Middleware",
    "MiddlewareConfig",
    "MiddlewareEntry",
    "Next",
    "ResponseHeadersMiddleware",
    "SecurityHeadersConfig",
    "SecurityHeadersMiddleware",
    "TimingMiddleware",
    "TokenAuthConfig",
    "TokenAuthMiddleware",
]
