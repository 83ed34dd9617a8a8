"""Return-value negotiation — maps handler return values to Responses.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from funcroute.http.response import Response


def negotiate(value: Any) -> Response:
    """Convert a handler's return value to a Response.

    Dispatch order:
        Response     -> returned as-is
        dict / list  -> JSON 200
        str          -> text/plain 200
        None         -> empty 204

    Raises:
        TypeError: For any other type. Inside a dispatch this becomes a fault.
    """
    if isinstance(value, Response):
        return value
    if isinstance(value, (dict, list)):
        return Response.json(value)
    if isinstance(value, str):
        return Response(headers={"Content-Type": "text/plain; charset=utf-8"}, body=value)
    if value is None:
        return Response(status_code=204)
    msg = (
        f"Handler returned {type(value).__name__}; expected Response, dict, list, str, or None."
    )
    raise TypeError(msg)
