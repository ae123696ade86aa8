# backend/catalog/query_builder.py
"""Translate list-request parameters into a bounded Mongo query.

``build_query`` never raises: the track list is a public, best-effort
search surface, so anything it does not understand falls back to a safe
default instead of producing an error.

    >>> q = build_query({"artist": "queen", "sortBy": "title", "limit": "1000"})
    >>> q.limit
    50
"""
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50
# skip = (page - 1) * limit is sent to the server as a BSON int64.
MAX_PAGE = (2 ** 63 - 1) // MAX_LIMIT

SUBSTRING_FILTERS = ("artist", "title")
EXACT_FILTERS = ("genre",)

SORTS: Dict[str, List[Tuple[str, int]]] = {
    "title": [("title", ASCENDING)],
    "date": [("createdAt", DESCENDING)],
    "artist": [("artist", ASCENDING)],
}
# Ties on the sort key are broken by id so repeated queries keep their order.
TIEBREAKER = ("_id", ASCENDING)

ALWAYS_PROJECTED = ("_id", "createdBy")


@dataclass(frozen=True)
class QueryDescriptor:
    filters: Dict[str, Any] = field(default_factory=dict)
    sort: List[Tuple[str, int]] = field(default_factory=list)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    projection: Optional[Dict[str, int]] = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def pagination(self, total: int) -> dict:
        total_pages = math.ceil(total / self.limit) if total else 0
        return {
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "totalPages": total_pages,
            "hasNext": self.page < total_pages,
            "hasPrev": self.page > 1,
        }


def _to_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def build_filters(params: Mapping[str, Any]) -> Dict[str, Any]:
    filters: Dict[str, Any] = {}
    for name in SUBSTRING_FILTERS:
        value = _text(params.get(name))
        if value:
            filters[name] = {"$regex": re.escape(value), "$options": "i"}
    for name in EXACT_FILTERS:
        value = _text(params.get(name))
        if value:
            filters[name] = value
    return filters


def build_sort(sort_by: Any) -> List[Tuple[str, int]]:
    keys = SORTS.get(_text(sort_by))
    if not keys:
        return []
    return keys + [TIEBREAKER]


def _is_field_path(name: str) -> bool:
    return all(part and not part.startswith("$") for part in name.split("."))


def _collides(name: str, taken) -> bool:
    return any(name.startswith(other + ".") or other.startswith(name + ".") for other in taken)


def build_projection(fields: Any) -> Optional[Dict[str, int]]:
    """Inclusion projection for ``fields``; names Mongo would refuse are skipped."""
    names = [name.strip() for name in _text(fields).split(",")]
    names = [name for name in names if name]
    if not names:
        return None
    projection = {name: 1 for name in ALWAYS_PROJECTED}
    for name in names:
        name = "_id" if name == "id" else name
        if _is_field_path(name) and not _collides(name, projection):
            projection[name] = 1
    return projection


def build_query(params: Mapping[str, Any]) -> QueryDescriptor:
    page = min(max(_to_int(params.get("page"), DEFAULT_PAGE), 1), MAX_PAGE)
    limit = min(max(_to_int(params.get("limit"), DEFAULT_LIMIT), 1), MAX_LIMIT)
    return QueryDescriptor(
        filters=build_filters(params),
        sort=build_sort(params.get("sortBy")),
        page=page,
        limit=limit,
        projection=build_projection(params.get("fields")),
    )
