"""The Router — route table, middleware lists, and terminal handlers.

Mutable during setup (route and middleware registration).
Frozen on the first dispatch or an explicit ``freeze()``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from funcroute._internal.types import Handler, TerminalHandler
from funcroute.config import RouterConfig
from funcroute.errors import ConfigurationError
from funcroute.http.request import Request
from funcroute.http.response import Response
from funcroute.middleware.config import MiddlewareConfig, MiddlewareEntry
from funcroute.middleware.protocol import Middleware
from funcroute.routing.route import Route
from funcroute.routing.table import RouteTable
from funcroute.server.errors import (
    default_method_not_allowed,
    default_not_found,
    default_panic,
)
from funcroute.server.handler import Outcome, dispatch_request


class Router:
    """An explicitly owned request router.

    Usage::

        router = Router()

        @router.route("/hello")
        async def hello(request):
            return {"message": "hello"}

        router.use_pre(auth, MiddlewareConfig(excluded_routes=("/health",)))
        response = await router.handle_request(Request.build("GET", "/hello"))

    Thread safety:
        Registration is single-threaded setup work. The freeze transition
        uses a Lock + double-check so exactly one caller freezes, even
        when the local bridge starts several dispatches at once. After
        that, routes and middleware are only read. Terminal handlers may
        still be swapped; each dispatch reads them once at its start.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_logger",
        "_method_not_allowed_handler",
        "_not_found_handler",
        "_panic_handler",
        "_post_middleware",
        "_pre_middleware",
        "_routes",
        "_strip_trailing_slash",
        "config",
    )

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._logger: logging.Logger = logger or logging.getLogger(self.config.logger_name)
        self._routes: RouteTable = RouteTable()
        self._pre_middleware: list[MiddlewareEntry] = []
        self._post_middleware: list[MiddlewareEntry] = []
        self._not_found_handler: TerminalHandler = default_not_found
        self._method_not_allowed_handler: TerminalHandler = default_method_not_allowed
        self._panic_handler: TerminalHandler = default_panic
        self._strip_trailing_slash: bool = self.config.strip_trailing_slash
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Route registration --

    def add_route(self, method: str, path: str, handler: Handler) -> None:
        """Register *handler* for ``(method, path)``.

        Registering the same pair again replaces the earlier handler.
        """
        self._check_not_frozen()
        if not method or not isinstance(method, str):
            msg = f"Route method must be a non-empty string, got {method!r}"
            raise ConfigurationError(msg)
        if not path.startswith("/"):
            msg = f"Route path must start with '/', got {path!r}"
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = f"Handler for {method.upper()} {path} is not callable: {handler!r}"
            raise ConfigurationError(msg)
        self._routes.add(Route(method=method.upper(), path=path, handler=handler))

    def route(
        self,
        path: str,
        *,
        methods: Iterable[str] = ("GET",),
    ) -> Callable[[Handler], Handler]:
        """Decorator form of ``add_route`` for one or more methods."""

        def decorator(func: Handler) -> Handler:
            for method in methods:
                self.add_route(method, path, func)
            return func

        return decorator

    @property
    def routes(self) -> list[Route]:
        """Registered routes, grouped by path in registration order."""
        return list(self._routes)

    # -- Middleware --

    def use_pre(self, middleware: Middleware, config: MiddlewareConfig | None = None) -> None:
        """Append *middleware* to the pre-dispatch list (outer layers)."""
        self._pre_middleware.append(self._entry(middleware, config))

    def use_post(self, middleware: Middleware, config: MiddlewareConfig | None = None) -> None:
        """Append *middleware* to the post-dispatch list (inner layers)."""
        self._post_middleware.append(self._entry(middleware, config))

    def _entry(self, middleware: Any, config: MiddlewareConfig | None) -> MiddlewareEntry:
        self._check_not_frozen()
        if not callable(middleware):
            msg = f"Middleware is not callable: {middleware!r}"
            raise ConfigurationError(msg)
        return MiddlewareEntry(func=middleware, config=config or MiddlewareConfig())

    # -- Terminal handlers --

    def set_not_found_handler(self, handler: TerminalHandler) -> None:
        self._not_found_handler = self._terminal(handler)

    def set_method_not_allowed_handler(self, handler: TerminalHandler) -> None:
        self._method_not_allowed_handler = self._terminal(handler)

    def set_panic_handler(self, handler: TerminalHandler) -> None:
        """Replace the 500 handler. It may accept ``(request, exc)``."""
        self._panic_handler = self._terminal(handler)

    @staticmethod
    def _terminal(handler: Any) -> TerminalHandler:
        if not callable(handler):
            msg = f"Terminal handler is not callable: {handler!r}"
            raise ConfigurationError(msg)
        return handler

    def set_strip_trailing_slash(self, strip: bool) -> None:
        self._check_not_frozen()
        self._strip_trailing_slash = strip

    @property
    def strip_trailing_slash(self) -> bool:
        return self._strip_trailing_slash

    # -- Dispatch --

    async def dispatch(self, request: Request) -> Outcome:
        """Dispatch *request* and return the full Outcome.

        The Outcome carries the handler-reported error, if any, next to
        the response.
        """
        self.freeze()
        return await dispatch_request(
            request,
            routes=self._routes,
            middleware=(*self._pre_middleware, *self._post_middleware),
            not_found=self._not_found_handler,
            method_not_allowed=self._method_not_allowed_handler,
            panic=self._panic_handler,
            strip_trailing_slash=self._strip_trailing_slash,
            logger=self._logger,
        )

    async def handle_request(self, request: Request) -> Response:
        """Dispatch *request*. Always returns a well-formed Response."""
        outcome = await self.dispatch(request)
        return outcome.response

    async def handle_event(self, event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
        """Dispatch a native function-URL event and return the wire-shaped dict."""
        response = await self.handle_request(Request.from_event(event, context))
        return response.to_dict()

    # -- Lifecycle --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make routes and middleware read-only.

        Called automatically on the first dispatch. Safe to call more
        than once.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            if self._strip_trailing_slash:
                for route in self._routes:
                    if route.path != "/" and route.path.endswith("/"):
                        self._logger.warning(
                            "Route %s %s ends with '/'; requests for it are looked up "
                            "as %s while trailing-slash stripping is enabled",
                            route.method,
                            route.path,
                            route.path[:-1],
                        )
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has started dispatching. "
                "Register routes and middleware during setup."
            )
            raise ConfigurationError(msg)
