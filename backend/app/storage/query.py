"""Query predicates understood by the document stores.

A query is an immutable ``Query`` value. The list of queries passed to
``DocumentStore.list_documents`` is applied in order. ``to_json`` emits the
wire form used by the remote REST API (one JSON string per query).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Query:
    method: str
    attribute: str | None = None
    values: tuple[Any, ...] = field(default_factory=tuple)

    # --- constructors -----------------------------------------------------

    @classmethod
    def equal(cls, attribute: str, values: list[Any] | Any) -> Query:
        """Attribute equals any of ``values``."""
        return cls("equal", attribute, _as_tuple(values))

    @classmethod
    def contains(cls, attribute: str, values: list[Any] | Any) -> Query:
        """String attribute contains a substring, or array attribute contains an element."""
        return cls("contains", attribute, _as_tuple(values))

    @classmethod
    def or_(cls, queries: list[Query]) -> Query:
        return cls("or", None, tuple(queries))

    @classmethod
    def order_asc(cls, attribute: str) -> Query:
        return cls("orderAsc", attribute)

    @classmethod
    def order_desc(cls, attribute: str) -> Query:
        return cls("orderDesc", attribute)

    @classmethod
    def limit(cls, limit: int) -> Query:
        return cls("limit", None, (int(limit),))

    @classmethod
    def offset(cls, offset: int) -> Query:
        return cls("offset", None, (int(offset),))

    # --- serialization ----------------------------------------------------

    @property
    def is_filter(self) -> bool:
        return self.method in ("equal", "contains", "or")

    @property
    def is_order(self) -> bool:
        return self.method in ("orderAsc", "orderDesc")

    def to_dict(self, attribute_map: dict[str, str] | None = None) -> dict[str, Any]:
        """Wire dict; ``attribute_map`` renames attributes (e.g. createdAt -> $createdAt)."""
        attribute_map = attribute_map or {}
        data: dict[str, Any] = {"method": self.method}
        if self.attribute is not None:
            data["attribute"] = attribute_map.get(self.attribute, self.attribute)
        if self.method == "or":
            data["values"] = [q.to_dict(attribute_map) for q in self.values]
        elif self.values:
            data["values"] = list(self.values)
        return data

    def to_json(self, attribute_map: dict[str, str] | None = None) -> str:
        return json.dumps(self.to_dict(attribute_map), separators=(",", ":"))


def _as_tuple(values: list[Any] | Any) -> tuple[Any, ...]:
    if isinstance(values, (list, tuple, set, frozenset)):
        return tuple(values)
    return (values,)
