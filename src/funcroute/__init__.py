"""Funcroute — an exact-match router for function-URL invocation events.

The same Router serves the serverless runtime and a local HTTP
listener. Routes match by ``(method, path)``; ordered pre- and post-
middleware wrap the matched handler; every dispatch returns a
well-formed Response, even when a handler raises.

Basic usage::

    from funcroute import Router

    router = Router()

    @router.route("/hello")
    def hello(request):
        return {"message": "hello"}

Serverless entry point::

    from funcroute import lambda_handler

    handler = lambda_handler(router)

Local server (``pip install funcroute[server]``)::

    funcroute serve myapp:router --port 8080
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "FuncrouteError",
    "HTTPError",
    "Invocation",
    "LocalBridge",
    "Middleware",
    "MiddlewareConfig",
    "Next",
    "Outcome",
    "Request",
    "Response",
    "Router",
    "RouterConfig",
    "ServerConfig",
    "get_request",
    "lambda_handler",
    "run_local_server",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import funcroute`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from funcroute.routing.router import Router

        return Router

    if name in ("RouterConfig", "ServerConfig"):
        from funcroute import config as _config

        return getattr(_config, name)

    if name in ("Request", "Invocation"):
        from funcroute.http import request as _req

        return getattr(_req, name)

    if name == "Response":
        from funcroute.http.response import Response

        return Response

    if name in ("Middleware", "Next"):
        from funcroute.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "MiddlewareConfig":
        from funcroute.middleware.config import MiddlewareConfig

        return MiddlewareConfig

    if name == "Outcome":
        from funcroute.server.handler import Outcome

        return Outcome

    if name == "LocalBridge":
        from funcroute.server.bridge import LocalBridge

        return LocalBridge

    if name == "run_local_server":
        from funcroute.server.local import run_local_server

        return run_local_server

    if name == "lambda_handler":
        from funcroute.server.lambda_runtime import lambda_handler

        return lambda_handler

    if name == "get_request":
        from funcroute.context import get_request

        return get_request

    if name in ("FuncrouteError", "ConfigurationError", "HTTPError"):
        from funcroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
