"""Invoke helpers — call sync or async handlers uniformly.

Handlers, middleware, and terminal handlers can be ``def`` or
``async def``. This module keeps the sync/async check in one place.

Usage::

    from funcroute._internal.invoke import invoke

    result = await invoke(handler, request)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both sync and async callables::

        def health(request):
            return {"ok": True}

        async def orders(request):
            return await fetch_orders()
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
