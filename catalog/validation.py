# backend/catalog/validation.py
from datetime import datetime
from typing import Any, Callable, Dict, Mapping

from bson import ObjectId

from errors import ValidationError

TITLE_MAX = 200
ARTIST_MAX = 100

# Fields a client may set; ownership and timestamps are never writable.
UPDATABLE_FIELDS = ("title", "artist", "album", "genre", "durationSeconds", "releaseYear", "coverUrl")


def current_year() -> int:
    return datetime.utcnow().year


# Defaults applied when the value is missing, blank or unparseable.
TEXT_DEFAULTS: Dict[str, str] = {
    "album": "",
    "genre": "Other",
    "coverUrl": "",
}
NUMERIC_DEFAULTS: Dict[str, Callable[[], int]] = {
    "durationSeconds": lambda: 0,
    "releaseYear": current_year,
}


# ============================================================
# 🔹 Ids
# ============================================================
def parse_track_id(track_id: str) -> ObjectId:
    if not ObjectId.is_valid(track_id):
        raise ValidationError("Invalid ID")
    return ObjectId(track_id)


# ============================================================
# 🔹 Scalars
# ============================================================
def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_int_or_default(value: Any, default: int) -> int:
    """Integer value of ``value``; ``default`` when it is not a number."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return default


def _numeric(name: str, value: Any) -> int:
    number = parse_int_or_default(value, NUMERIC_DEFAULTS[name]())
    if name == "durationSeconds":
        return max(number, 0)
    return number


def _bounded_text(name: str, value: Any, maximum: int) -> str:
    text = clean_text(value)
    if not 1 <= len(text) <= maximum:
        raise ValidationError(f"{name.capitalize()} must be between 1 and {maximum} characters")
    return text


def _normalize_field(name: str, value: Any) -> Any:
    if name == "title":
        return _bounded_text("title", value, TITLE_MAX)
    if name == "artist":
        return _bounded_text("artist", value, ARTIST_MAX)
    if name in NUMERIC_DEFAULTS:
        return _numeric(name, value)
    return clean_text(value) or TEXT_DEFAULTS[name]


# ============================================================
# 🔹 Payloads
# ============================================================
def _require_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return payload


def normalize_new_track(payload: Any) -> Dict[str, Any]:
    """Validated document for a new track, every optional field defaulted."""
    payload = _require_object(payload)
    if not clean_text(payload.get("title")) or not clean_text(payload.get("artist")):
        raise ValidationError("Title and artist are required")
    return {name: _normalize_field(name, payload.get(name)) for name in UPDATABLE_FIELDS}


def normalize_track_changes(payload: Any) -> Dict[str, Any]:
    """Validated ``$set`` for a partial update; absent fields stay untouched."""
    payload = _require_object(payload)
    return {
        name: _normalize_field(name, payload[name])
        for name in UPDATABLE_FIELDS
        if name in payload
    }
