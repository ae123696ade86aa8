# backend/repositories/track_repository.py
from bson import ObjectId
from pymongo.database import Database
from typing import Any, Dict, List, Optional
import logging

from database.connection import TRACKS

logger = logging.getLogger("repositories.tracks")


# ============================================================
# 🔹 Track serializer
# ============================================================
def serialize_track(doc: dict) -> Optional[Dict]:
    """Turn a Mongo document into a JSON-serializable dict."""
    if not doc:
        return None
    track = dict(doc)
    if "_id" in track:
        track["id"] = str(track.pop("_id"))
    if isinstance(track.get("createdBy"), ObjectId):
        track["createdBy"] = str(track["createdBy"])
    return track


# ============================================================
# 🔹 Reads
# ============================================================
def find_track(db: Database, track_id: ObjectId) -> Optional[dict]:
    """Raw document by id; ``None`` when absent."""
    return db[TRACKS].find_one({"_id": track_id})


def find_tracks(
    db: Database,
    filters: Dict[str, Any],
    sort: List[tuple],
    projection: Optional[Dict[str, int]],
    skip: int,
    limit: int,
) -> List[Dict]:
    cursor = db[TRACKS].find(filters, projection)
    if sort:
        cursor = cursor.sort(sort)
    cursor = cursor.skip(skip).limit(limit)
    return [serialize_track(doc) for doc in cursor]


def count_tracks(db: Database, filters: Dict[str, Any]) -> int:
    return db[TRACKS].count_documents(filters)


# ============================================================
# 🔹 Writes
# ============================================================
def insert_track(db: Database, track_doc: dict) -> ObjectId:
    result = db[TRACKS].insert_one(track_doc)
    logger.info(f"✅ Track created: {track_doc.get('title')} ({result.inserted_id})")
    return result.inserted_id


def update_track(db: Database, track_id: ObjectId, owner_id: Any, changes: Dict[str, Any]) -> int:
    """Apply ``changes`` only if the track still has the owner read before.

    Returns the matched count (0 when the track vanished in between).
    """
    result = db[TRACKS].update_one(
        {"_id": track_id, "createdBy": owner_id},
        {"$set": changes},
    )
    if result.matched_count:
        logger.info(f"📝 Track updated: {track_id} ({', '.join(sorted(changes))})")
    else:
        logger.warning(f"⚠️ Track not updated, no longer present: {track_id}")
    return result.matched_count


def delete_track(db: Database, track_id: ObjectId, owner_id: Any) -> int:
    result = db[TRACKS].delete_one({"_id": track_id, "createdBy": owner_id})
    if result.deleted_count:
        logger.info(f"🗑️ Track deleted: {track_id}")
    else:
        logger.warning(f"⚠️ Track not deleted, no longer present: {track_id}")
    return result.deleted_count
