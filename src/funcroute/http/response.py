"""Response with a chainable .with_*() API.

Unlike the request, a Response stays mutable until it leaves the
router: outer middleware may adjust the one an inner layer produced,
either in place or through the copy-returning ``.with_*()`` helpers.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

JSON_CONTENT_TYPE = "application/json"


@dataclass(slots=True)
class Response:
    """A response in the invoking runtime's wire shape.

    ``body`` is opaque: a raw string, bytes, or a structured value the
    transport serializes.
    """

    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = ""

    @classmethod
    def json(
        cls,
        data: Any,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """A response with a structured body and ``Content-Type: application/json``."""
        return cls(
            status_code=status_code,
            headers={"Content-Type": JSON_CONTENT_TYPE, **(headers or {})},
            body=data,
        )

    # -- Chainable transformations --

    def with_status(self, status_code: int) -> Response:
        """Return a copy with a different status code."""
        return replace(self, status_code=status_code, headers=dict(self.headers))

    def with_header(self, name: str, value: str) -> Response:
        """Return a copy with *name* set to *value*."""
        return replace(self, headers={**self.headers, name: value})

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a copy with all of *headers* set."""
        return replace(self, headers={**self.headers, **headers})

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    # -- Serialization --

    @property
    def is_structured(self) -> bool:
        """True if the body needs JSON encoding for a byte transport."""
        return not isinstance(self.body, (str, bytes))

    def to_dict(self) -> dict[str, Any]:
        """The wire shape: ``statusCode``, ``headers`` and ``body``, nothing else."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }

    def encode_body(self) -> bytes:
        """Serialize the body for a byte transport.

        Bytes pass through, strings are UTF-8 encoded, anything else is
        written as compact JSON.
        """
        if isinstance(self.body, bytes):
            return self.body
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return json_module.dumps(self.body, separators=(",", ":")).encode("utf-8")
