"""Bearer-token authentication middleware.

Rejects requests that carry no token, or a token that is neither in
the configured set nor accepted by the ``verify_token`` callback, with
a 401 JSON response. Authenticated requests continue down the chain
unchanged.

Usage::

    from funcroute.middleware import MiddlewareConfig, TokenAuthConfig, TokenAuthMiddleware

    router.use_pre(
        TokenAuthMiddleware(TokenAuthConfig(tokens=frozenset({"s3cret"}))),
        MiddlewareConfig(excluded_routes=("/health",)),
    )
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from funcroute._internal.invoke import invoke
from funcroute.errors import ConfigurationError
from funcroute.http.request import Request
from funcroute.http.response import Response
from funcroute.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class TokenAuthConfig:
    """Token authentication configuration.

    Attributes:
        tokens: Static set of accepted tokens.
        verify_token: Callback deciding whether a token is accepted
            (sync or async). Consulted when the token is not in ``tokens``.
        token_header: Header carrying the token.
        token_scheme: Expected scheme prefix. Empty means the header
            value is the bare token (e.g. ``X-API-Key``).
        realm: Realm advertised in ``WWW-Authenticate``.
    """

    tokens: frozenset[str] = frozenset()
    verify_token: Callable[[str], bool | Awaitable[bool]] | None = None
    token_header: str = "Authorization"
    token_scheme: str = "Bearer"
    realm: str = "funcroute"


class TokenAuthMiddleware:
    """Reject unauthenticated requests before they reach the handler."""

    __slots__ = ("_config",)

    def __init__(self, config: TokenAuthConfig) -> None:
        if not config.tokens and config.verify_token is None:
            msg = "TokenAuthConfig requires 'tokens' or 'verify_token' to be set."
            raise ConfigurationError(msg)
        self._config = config

    def _extract_token(self, request: Request) -> str | None:
        """Extract the token from the configured header."""
        header = request.headers.get(self._config.token_header)
        if header is None:
            return None

        scheme = self._config.token_scheme
        if scheme:
            prefix = f"{scheme} "
            if not header.startswith(prefix):
                return None
            header = header[len(prefix) :]

        token = header.strip()
        return token if token else None

    async def _is_valid(self, token: str) -> bool:
        if token in self._config.tokens:
            return True
        if self._config.verify_token is None:
            return False
        return bool(await invoke(self._config.verify_token, token))

    def _unauthorized(self) -> Response:
        challenge = self._config.token_scheme or "Token"
        return Response.json(
            {"error": "Unauthorized"},
            status_code=401,
            headers={"WWW-Authenticate": f'{challenge} realm="{self._config.realm}"'},
        )

    async def __call__(self, request: Request, next: Next) -> Response:
        token = self._extract_token(request)
        if token is None or not await self._is_valid(token):
            return self._unauthorized()
        return await next(request)
