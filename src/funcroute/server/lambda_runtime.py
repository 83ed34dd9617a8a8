"""Serverless entry — adapt a Router to the runtime's handler signature.

The function runtime calls a synchronous ``handler(event, context)``
and expects the wire-shaped response dict back::

    router = build_router()
    handler = lambda_handler(router)
"""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

import anyio

from funcroute.routing.router import Router

EventHandler: TypeAlias = Callable[[Mapping[str, Any], Any], dict[str, Any]]


def lambda_handler(router: Router) -> EventHandler:
    """Return a synchronous ``(event, context) -> dict`` entry point for *router*."""
    router.freeze()

    def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
        return anyio.run(router.handle_event, event, context)

    return handler
