# backend/models/track.py
from datetime import datetime
from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class Track(BaseModel):
    id: str
    title: str
    artist: str
    album: Optional[str] = ""
    genre: Optional[str] = "Other"
    durationSeconds: Optional[int] = 0  # seconds
    releaseYear: Optional[int] = None
    coverUrl: Optional[str] = ""
    createdBy: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool


class TrackPage(BaseModel):
    # Items may be projected down to a subset of Track fields.
    items: List[Dict[str, Any]]
    pagination: Pagination


class Message(BaseModel):
    message: str
