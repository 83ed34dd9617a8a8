"""Exact-match route table.

Paths are compared by string equality, no parameters or wildcards.
Each path maps to its handlers keyed by method; registering the same
``(method, path)`` twice keeps the last handler.
"""

import logging
from collections.abc import Iterator

from funcroute.routing.route import Route, RouteMatch

logger = logging.getLogger("funcroute.router")


class RouteTable:
    """Routes keyed by path, then method.

    Usage::

        table = RouteTable()
        table.add(Route("GET", "/users", list_users))
        match = table.match("GET", "/users")
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: dict[str, dict[str, Route]] = {}

    def add(self, route: Route) -> Route | None:
        """Store *route*, returning the route it replaced, if any."""
        by_method = self._routes.setdefault(route.path, {})
        previous = by_method.get(route.method)
        by_method[route.method] = route
        if previous is not None:
            logger.debug("Replacing handler for %s %s", route.method, route.path)
        return previous

    def match(self, method: str, path: str) -> RouteMatch:
        """Look up *path*, then *method* among that path's routes."""
        by_method = self._routes.get(path)
        if by_method is None:
            return RouteMatch(route=None)
        route = by_method.get(method)
        if route is None:
            return RouteMatch(route=None, allowed=frozenset(by_method))
        return RouteMatch(route=route, allowed=frozenset(by_method))

    def __iter__(self) -> Iterator[Route]:
        for by_method in self._routes.values():
            yield from by_method.values()

    def __len__(self) -> int:
        return sum(len(by_method) for by_method in self._routes.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        method, path = key
        return method in self._routes.get(path, {})
