"""Cookie helpers.

The request carries cookies as raw ``name=value`` strings, the way the
function-URL event delivers them. These helpers split a ``Cookie``
header into that form and look values up by name.
"""

from collections.abc import Iterable


def split_cookie_header(header: str) -> tuple[str, ...]:
    """Split a ``Cookie`` header value into raw ``name=value`` strings.

    Returns an empty tuple for empty or missing headers.
    """
    if not header:
        return ()
    return tuple(part.strip() for part in header.split(";") if part.strip())


def parse_cookies(raw_cookies: Iterable[str]) -> dict[str, str]:
    """Parse raw ``name=value`` strings into a name-value dict.

    Later duplicates win. Strings without ``=`` are ignored.
    """
    cookies: dict[str, str] = {}
    for raw in raw_cookies:
        if "=" in raw:
            key, _, value = raw.partition("=")
            cookies[key.strip()] = value.strip()
    return cookies
