# backend/catalog/routes.py
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from pymongo.database import Database

from auth.dependencies import get_optional_session
from auth.session_store import Session
from catalog.controllers import (
    create_track, delete_track_by_id, get_track, list_tracks, update_track_by_id,
)
from database.connection import get_db
from models.track import Message, Track, TrackPage

router = APIRouter()


# ============================================================
# 🔹 List tracks (public)
# ============================================================
@router.get("", response_model=TrackPage, summary="Search, sort and paginate tracks")
def list_tracks_route(
    artist: Optional[str] = Query(None, description="Case-insensitive substring"),
    title: Optional[str] = Query(None, description="Case-insensitive substring"),
    genre: Optional[str] = Query(None, description="Exact genre"),
    sortBy: Optional[str] = Query(None, description="title | date | artist"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None, description="1..50"),
    fields: Optional[str] = Query(None, description="Comma-separated projection"),
    db: Database = Depends(get_db),
):
    # page/limit stay strings: bad values fall back to defaults instead of a 4xx
    params = {
        "artist": artist, "title": title, "genre": genre, "sortBy": sortBy,
        "page": page, "limit": limit, "fields": fields,
    }
    return list_tracks(db, params)


# ============================================================
# 🔹 Get track by id (public)
# ============================================================
@router.get("/{track_id}", response_model=Track, summary="Get track by id")
def get_track_route(track_id: str, db: Database = Depends(get_db)):
    return get_track(db, track_id)


# ============================================================
# 🔹 Create track
# ============================================================
@router.post("", response_model=Track, status_code=status.HTTP_201_CREATED, summary="Add a track")
def create_track_route(
    payload: Any = Body(None),
    session: Optional[Session] = Depends(get_optional_session),
    db: Database = Depends(get_db),
):
    return create_track(db, session, payload)


# ============================================================
# 🔹 Update track (owner or admin)
# ============================================================
@router.put("/{track_id}", response_model=Message, summary="Partially update a track")
def update_track_route(
    track_id: str,
    payload: Any = Body(None),
    session: Optional[Session] = Depends(get_optional_session),
    db: Database = Depends(get_db),
):
    return update_track_by_id(db, session, track_id, payload)


# ============================================================
# 🔹 Delete track (owner or admin)
# ============================================================
@router.delete("/{track_id}", response_model=Message, summary="Delete a track")
def delete_track_route(
    track_id: str,
    session: Optional[Session] = Depends(get_optional_session),
    db: Database = Depends(get_db),
):
    return delete_track_by_id(db, session, track_id)
