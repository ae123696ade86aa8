# backend/catalog/controllers.py
"""Track operations: list, get, create, update and delete.

Reads are public. Mutations go through the authorization guard after
the target track has been fetched, so the order of failures is always
invalid id (400), missing track (404), then unauthenticated (401) or
not the owner (403).

Update and delete read the owner first and write in a second call. The
write matches on id and on that owner, so a track removed in between
turns into a late 404; it is not a transaction.
"""
import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from bson import ObjectId
from pymongo.database import Database

from auth.guard import Action, authorize, enforce, same_account
from auth.session_store import Session
from catalog.query_builder import build_query
from catalog.validation import normalize_new_track, normalize_track_changes, parse_track_id
from errors import NotFoundError
from repositories.track_repository import (
    count_tracks, delete_track, find_track, find_tracks, insert_track,
    serialize_track, update_track,
)

logger = logging.getLogger("catalog.controllers")

TRACK_NOT_FOUND = "Track not found"


def _owner_as_stored(user_id: str) -> Any:
    return ObjectId(user_id) if ObjectId.is_valid(user_id) else user_id


def _existing_track(db: Database, track_id: str):
    obj_id = parse_track_id(track_id)
    track = find_track(db, obj_id)
    if not track:
        raise NotFoundError(TRACK_NOT_FOUND)
    return obj_id, track


# ============================================================
# 🔹 List
# ============================================================
def list_tracks(db: Database, params: Mapping[str, Any]) -> dict:
    query = build_query(params)
    enforce(authorize(None, Action.READ_PUBLIC))
    items = find_tracks(db, query.filters, query.sort, query.projection, query.skip, query.limit)
    total = count_tracks(db, query.filters)
    logger.debug(f"📜 {len(items)}/{total} tracks for filters={query.filters} page={query.page}")
    return {"items": items, "pagination": query.pagination(total)}


# ============================================================
# 🔹 Get by id
# ============================================================
def get_track(db: Database, track_id: str) -> dict:
    _, track = _existing_track(db, track_id)
    return serialize_track(track)


# ============================================================
# 🔹 Create
# ============================================================
def create_track(db: Database, session: Optional[Session], payload: Any) -> dict:
    enforce(authorize(session, Action.CREATE))
    track_doc = normalize_new_track(payload)
    now = datetime.utcnow()
    track_doc.update({
        "createdBy": _owner_as_stored(session.user_id),
        "createdAt": now,
        "updatedAt": now,
    })
    track_doc["_id"] = insert_track(db, track_doc)
    return serialize_track(track_doc)


# ============================================================
# 🔹 Update
# ============================================================
def update_track_by_id(db: Database, session: Optional[Session], track_id: str, payload: Any) -> dict:
    obj_id, existing = _existing_track(db, track_id)
    owner_id = existing.get("createdBy")
    enforce(authorize(session, Action.UPDATE, owner_id))

    changes = normalize_track_changes(payload)
    changes["updatedAt"] = datetime.utcnow()
    if not update_track(db, obj_id, owner_id, changes):
        raise NotFoundError(TRACK_NOT_FOUND)
    return {"message": "Track updated successfully"}


# ============================================================
# 🔹 Delete
# ============================================================
def delete_track_by_id(db: Database, session: Optional[Session], track_id: str) -> dict:
    obj_id, existing = _existing_track(db, track_id)
    owner_id = existing.get("createdBy")
    enforce(authorize(session, Action.DELETE, owner_id))

    if not delete_track(db, obj_id, owner_id):
        raise NotFoundError(TRACK_NOT_FOUND)
    if session.is_admin and not same_account(session.user_id, owner_id):
        logger.info(f"🛡️ Admin {session.username} deleted track {obj_id} owned by {owner_id}")
    return {"message": "Track deleted successfully"}
