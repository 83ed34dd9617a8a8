"""CORS middleware.

Answers preflight requests itself and adds ``Access-Control-*``
headers to the responses of actual cross-origin requests.
"""

from dataclasses import dataclass

from funcroute.http.request import Request
from funcroute.http.response import Response
from funcroute.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """Which origins may call the router, and with what.

    Nothing is allowed until ``allow_origins`` is set::

        CORSConfig(allow_origins=("https://shop.example",), allow_methods=("GET", "POST"))
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 600

    @property
    def any_origin(self) -> bool:
        return "*" in self.allow_origins


class CORSMiddleware:
    """Cross-Origin Resource Sharing as pre-middleware.

    An ``OPTIONS`` request carrying an allowed ``Origin`` gets a 204
    preflight response and never reaches the handler. Other requests
    from an allowed origin run normally and have the CORS headers added.
    Requests without an allowed origin pass through untouched.

    Unmatched requests never reach middleware, so register an
    ``OPTIONS`` route for every path that should answer preflights.
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _origin(self, request: Request) -> str | None:
        origin = request.headers.get("origin")
        if origin is None:
            return None
        if self.config.any_origin or origin in self.config.allow_origins:
            return origin
        return None

    def _origin_headers(self, origin: str) -> dict[str, str]:
        cfg = self.config
        # Credentialed responses must echo the concrete origin
        if cfg.any_origin and not cfg.allow_credentials:
            headers = {"Access-Control-Allow-Origin": "*"}
        else:
            headers = {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
        if cfg.allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"
        if cfg.expose_headers:
            headers["Access-Control-Expose-Headers"] = ", ".join(cfg.expose_headers)
        return headers

    def _preflight(self, request: Request, origin: str) -> Response:
        cfg = self.config
        headers = self._origin_headers(origin)
        if request.headers.get("access-control-request-method"):
            headers["Access-Control-Allow-Methods"] = ", ".join(cfg.allow_methods)
        if cfg.allow_headers:
            headers["Access-Control-Allow-Headers"] = ", ".join(cfg.allow_headers)
        headers["Access-Control-Max-Age"] = str(cfg.max_age)
        return Response(status_code=204, headers=headers)

    async def __call__(self, request: Request, next: Next) -> Response:
        origin = self._origin(request)
        if origin is None:
            return await next(request)
        if request.method == "OPTIONS":
            return self._preflight(request, origin)
        response = await next(request)
        return response.with_headers(self._origin_headers(origin))
