"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The router checks the shape, not the lineage.
Not calling ``next`` short-circuits everything downstream, including
the route handler.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from funcroute.http.request import Request
from funcroute.http.response import Response

# The next stage in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for funcroute middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            response.headers["X-Time"] = f"{time.monotonic() - start:.3f}"
            return response

        # Class middleware
        class RequireJSON:
            async def __call__(self, request: Request, next: Next) -> Response:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
