"""Shared type aliases used across funcroute modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: called with the Request, returns a Response or plain value
Handler: TypeAlias = Callable[..., Any]

# Terminal handler: receives nothing, (request), or (request, exc)
TerminalHandler: TypeAlias = Callable[..., Any]
