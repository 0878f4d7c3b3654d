"""Translate file-listing filters into document store queries."""

from __future__ import annotations

from collections.abc import Sequence

from app.constants import DEFAULT_SORT
from app.schemas.auth import CurrentUser
from app.storage.query import Query


def parse_sort(sort: str) -> Query:
    """``"<field>-<direction>"`` -> order query; only ``asc`` sorts ascending."""
    field, _, direction = (sort or DEFAULT_SORT).rpartition("-")
    if not field:
        # no separator: the whole string is the field
        field, direction = direction, ""
    return Query.order_asc(field) if direction == "asc" else Query.order_desc(field)


def build_file_queries(
    current_user: CurrentUser,
    types: Sequence[str] = (),
    search_text: str = "",
    sort: str = DEFAULT_SORT,
    limit: int | None = None,
) -> list[Query]:
    """Build the ordered query list for a file listing.

    The owner-or-shared predicate always comes first; absent filters add
    nothing. The sort query is always last.
    """
    queries = [
        Query.or_([
            Query.equal("owner", [current_user.id]),
            Query.contains("users", [current_user.email]),
        ]),
    ]

    if types:
        queries.append(Query.equal("type", list(types)))
    if search_text:
        queries.append(Query.contains("name", search_text))
    if limit:
        queries.append(Query.limit(limit))

    queries.append(parse_sort(sort))
    return queries
