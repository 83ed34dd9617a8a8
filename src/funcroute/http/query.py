"""Immutable query string parameters.

Implements ``Mapping[str, str]``. Repeated keys arrive already joined
with ``,`` (the function-URL event does the same).
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Field name -> value.
        _raw: Raw query string, without the leading ``?``.
    """

    _data: dict[str, str]
    _raw: str

    __slots__ = ("_data", "_raw")

    def __init__(self, params: Mapping[str, str] | None = None, raw: str = "") -> None:
        object.__setattr__(self, "_data", dict(params or {}))
        object.__setattr__(self, "_raw", raw)

    @classmethod
    def parse(cls, query_string: str) -> "QueryParams":
        """Parse a raw query string, joining repeated values with ``,``."""
        parsed = parse_qs(query_string, keep_blank_values=True)
        return cls({key: ",".join(values) for key, values in parsed.items()}, raw=query_string)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"QueryParams({self._data!r})"

    @property
    def raw(self) -> str:
        """The query string as received."""
        return self._raw
