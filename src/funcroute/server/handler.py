"""Dispatch pipeline — one request through lookup, middleware, and recovery.

Every dispatch runs inside a single containment region: a handler-
reported ``HTTPError`` becomes its error response, any other exception
becomes the panic response, and both paths converge on one completion
log record.
"""

import logging
import time
from collections.abc import Iterable
from contextvars import Token
from dataclasses import dataclass

from funcroute._internal.invoke import invoke
from funcroute._internal.types import Handler, TerminalHandler
from funcroute.context import request_var
from funcroute.errors import HTTPError
from funcroute.http.request import Request
from funcroute.http.response import Response
from funcroute.middleware.config import MiddlewareEntry
from funcroute.middleware.protocol import Next
from funcroute.routing.table import RouteTable
from funcroute.server.errors import call_terminal_handler, error_response, recover
from funcroute.server.negotiation import negotiate


@dataclass(frozen=True, slots=True)
class Outcome:
    """The result of one dispatch.

    ``error`` is the handler-reported HTTPError, passed through to the
    caller. ``fault`` describes an unrecoverable exception; its detail
    only ever reaches the log, never the response body.
    """

    response: Response
    error: HTTPError | None = None
    fault: str | None = None
    duration: float = 0.0


def normalize_path(path: str) -> str:
    """Strip a single trailing slash. The root path stays ``/``."""
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


def describe_fault(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


def build_chain(
    handler: Handler,
    middleware: Iterable[MiddlewareEntry],
    request: Request,
    path: str,
) -> Next:
    """Wrap *handler* in every middleware not excluded for *request*.

    The first entry ends up outermost. Excluded entries are left out of
    the chain entirely.
    """

    async def endpoint(req: Request) -> Response:
        return negotiate(await invoke(handler, req))

    chain: Next = endpoint
    active = [entry for entry in middleware if not entry.config.excludes(request, path)]
    for entry in reversed(active):

        async def link(req: Request, _mw: Handler = entry.func, _next: Next = chain) -> Response:
            return negotiate(await invoke(_mw, req, _next))

        chain = link
    return chain


def log_completion(
    logger: logging.Logger,
    request: Request,
    outcome: Outcome,
    fault: BaseException | None = None,
) -> None:
    """Emit the single completion record for a dispatch."""
    message = "Request completed: method=%s path=%s status=%d duration=%.3fms"
    args: list[object] = [
        request.method,
        request.path,
        outcome.response.status_code,
        outcome.duration * 1000,
    ]
    level = logging.INFO
    if outcome.fault is not None:
        message += " error=%s"
        args.append(outcome.fault)
        level = logging.ERROR
    elif outcome.error is not None:
        message += " error=%s"
        args.append(outcome.error)
        level = logging.WARNING
    logger.log(level, message, *args, exc_info=fault)


async def dispatch_request(
    request: Request,
    *,
    routes: RouteTable,
    middleware: tuple[MiddlewareEntry, ...],
    not_found: TerminalHandler,
    method_not_allowed: TerminalHandler,
    panic: TerminalHandler,
    strip_trailing_slash: bool,
    logger: logging.Logger,
) -> Outcome:
    """Process a single request through the full pipeline.

    Never raises for failures inside the chain; cancellation and other
    non-``Exception`` errors propagate.
    """
    start = time.perf_counter()
    error: HTTPError | None = None
    fault: Exception | None = None
    token: Token[Request] = request_var.set(request)

    try:
        path = normalize_path(request.path) if strip_trailing_slash else request.path
        match = routes.match(request.method, path)

        if match.route is None:
            terminal = method_not_allowed if match.path_known else not_found
            response = await call_terminal_handler(terminal, request)
        else:
            chain = build_chain(match.route.handler, middleware, request, path)
            response = await chain(request)

    except HTTPError as exc:
        error = exc
        response = error_response(exc)
    except Exception as exc:
        fault = exc
        response = await recover(panic, request, exc)
    finally:
        request_var.reset(token)

    outcome = Outcome(
        response=response,
        error=error,
        fault=describe_fault(fault) if fault is not None else None,
        duration=time.perf_counter() - start,
    )
    log_completion(logger, request, outcome, fault)
    return outcome
