"""Funcroute exception hierarchy.

Shared across Router, dispatch pipeline, handlers, and middleware so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class FuncrouteError(Exception):
    """Base for all funcroute-specific errors."""


class ConfigurationError(FuncrouteError):
    """Raised when router registration is invalid.

    Typically raised at setup time, before the first dispatch.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(FuncrouteError):
    """An error reported by a handler or middleware.

    Raising it is the explicit, non-fault way to fail a request: the
    pipeline turns it into a JSON error response with ``status`` and
    hands the exception back to the caller on ``Outcome.error``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)
