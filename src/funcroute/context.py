"""Request-scoped context via ContextVar.

``request_var`` holds the Request being dispatched in the current
task. The dispatch pipeline sets it before running the chain and
resets it afterwards, so concurrent dispatches never see each other's
request.
"""

from contextvars import ContextVar

from funcroute.http.request import Request

request_var: ContextVar[Request] = ContextVar("funcroute_request")
"""The current request. Set by the dispatch pipeline."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a dispatch.
    """
    return request_var.get()
