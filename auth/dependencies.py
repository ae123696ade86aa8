# backend/auth/dependencies.py
from typing import Optional

from fastapi import Depends, Request
from pymongo.database import Database

from auth.session_store import Session, SessionStore
from config import settings
from database.connection import get_db


def get_session_token(request: Request) -> Optional[str]:
    """Session token from the cookie, or from an ``Authorization: Bearer`` header."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def get_session_store(db: Database = Depends(get_db)) -> SessionStore:
    return SessionStore(db)


def get_optional_session(
    token: Optional[str] = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
) -> Optional[Session]:
    return store.read(token)
