"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]``. Keys are stored lower-cased; a name
that appears more than once has its values joined with ``,``.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    Accepts a mapping or an iterable of ``(name, value)`` pairs::

        Headers({"Content-Type": "application/json"})
        Headers([("Accept", "text/html"), ("Accept", "application/json")])
    """

    __slots__ = ("_data",)

    def __init__(self, source: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        pairs = source.items() if isinstance(source, Mapping) else source
        data: dict[str, str] = {}
        for name, value in pairs:
            key = name.lower()
            if key in data:
                data[key] = f"{data[key]},{value}"
            else:
                data[key] = value
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key.lower() in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Headers({self._data!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the value for *key*, or *default* if missing."""
        return self._data.get(key.lower(), default)
