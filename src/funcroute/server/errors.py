"""Terminal handlers and error responses.

Built-in defaults for the three terminal handlers (not found, method
not allowed, panic), the helper that calls user-supplied ones, and the
conversion of a handler-reported ``HTTPError`` into a response.
"""

import inspect
import logging
from typing import Any

from funcroute._internal.invoke import invoke
from funcroute._internal.types import TerminalHandler
from funcroute.errors import HTTPError
from funcroute.http.request import Request
from funcroute.http.response import Response
from funcroute.server.negotiation import negotiate

logger = logging.getLogger("funcroute.server")


def default_not_found(request: Request) -> Response:
    return Response.json({"error": "Not Found"}, status_code=404)


def default_method_not_allowed(request: Request) -> Response:
    return Response.json({"error": "Method Not Allowed"}, status_code=405)


def default_panic(request: Request) -> Response:
    return Response.json({"error": "Internal Server Error"}, status_code=500)


def error_response(exc: HTTPError) -> Response:
    """Map a handler-reported HTTPError to a JSON error response."""
    response = Response.json({"error": exc.detail or f"Error {exc.status}"}, status_code=exc.status)
    for name, value in exc.headers:
        response.headers[name] = value
    return response


async def call_terminal_handler(
    handler: TerminalHandler,
    request: Request,
    exc: BaseException | None = None,
) -> Response:
    """Invoke a terminal handler with introspected arguments.

    Terminal handlers may accept zero, one (request), or two
    (request, exc) args, and may be sync or async.
    """
    args: tuple[Any, ...]
    try:
        params = list(inspect.signature(handler).parameters.values())
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); assume (request)
        args = (request,)
    else:
        if len(params) >= 2:
            args = (request, exc)
        elif len(params) == 1:
            args = (request,)
        else:
            args = ()

    return negotiate(await invoke(handler, *args))


async def recover(handler: TerminalHandler, request: Request, exc: Exception) -> Response:
    """Build the panic response for *exc*.

    A panic handler that fails itself falls back to the built-in 500.
    """
    try:
        return await call_terminal_handler(handler, request, exc)
    except Exception:
        logger.exception("Panic handler failed for %s %s", request.method, request.path)
        return default_panic(request)
