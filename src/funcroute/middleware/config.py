"""Per-middleware exclusion rules.

Every registered middleware carries a ``MiddlewareConfig``. It is
checked against each request, independently per middleware, before the
middleware is spliced into that request's chain.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from funcroute.errors import ConfigurationError
from funcroute.http.request import Request


@dataclass(frozen=True, slots=True)
class MiddlewareConfig:
    """When to skip a middleware.

    Checked in order: excluded path, excluded method, excluded header
    name/value pair. Any match skips the middleware for that request::

        MiddlewareConfig(
            excluded_routes=("/health",),
            excluded_methods=("OPTIONS",),
            excluded_headers={"X-Internal": "true"},
        )
    """

    excluded_routes: tuple[str, ...] = ()
    excluded_methods: tuple[str, ...] = ()
    excluded_headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("excluded_routes", "excluded_methods"):
            if isinstance(getattr(self, name), str):
                msg = f"MiddlewareConfig.{name} must be a sequence of strings, not a str"
                raise ConfigurationError(msg)
        object.__setattr__(self, "excluded_routes", tuple(self.excluded_routes))
        object.__setattr__(
            self, "excluded_methods", tuple(m.upper() for m in self.excluded_methods)
        )
        object.__setattr__(
            self,
            "excluded_headers",
            {name.lower(): value for name, value in self.excluded_headers.items()},
        )

    def excludes(self, request: Request, path: str | None = None) -> bool:
        """True if the middleware must not run for *request*.

        *path* is the normalized lookup path; defaults to ``request.path``.
        """
        if (path if path is not None else request.path) in self.excluded_routes:
            return True
        if request.method in self.excluded_methods:
            return True
        return any(
            request.headers.get(name) == value
            for name, value in self.excluded_headers.items()
        )


@dataclass(frozen=True, slots=True)
class MiddlewareEntry:
    """A registered middleware and its exclusion rules."""

    func: Callable[..., Any]
    config: MiddlewareConfig = field(default_factory=MiddlewareConfig)
