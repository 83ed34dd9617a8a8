"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from funcroute._internal.types import Handler


@dataclass(frozen=True, slots=True)
class Route:
    """A registered ``(method, path)`` -> handler entry."""

    method: str
    path: str
    handler: Handler


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a route lookup.

    ``route`` is ``None`` on a miss. ``allowed`` lists the methods
    registered for the path, so an empty set means the path itself is
    unknown (404) and a non-empty one means the method is (405).
    """

    route: Route | None
    allowed: frozenset[str] = frozenset()

    @property
    def path_known(self) -> bool:
        return bool(self.allowed)
