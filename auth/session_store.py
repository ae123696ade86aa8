# backend/auth/session_store.py
"""Server-side sessions kept in the ``sessions`` collection.

A session document holds the identity of the logged-in account
(``userId``, ``username``, ``role``) and an ``expiresAt`` timestamp. The
client only receives a signed token with the session id, so logging out
or letting the TTL pass invalidates the token even before its own
expiry claim is reached.
"""
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from pymongo.database import Database

from auth.utils import create_session_token, decode_session_token
from config import settings
from database.connection import SESSIONS

logger = logging.getLogger("auth.sessions")


@dataclass(frozen=True)
class Session:
    session_id: str
    user_id: str
    username: str
    role: str = "user"
    expires_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class SessionStore:
    def __init__(self, db: Database, ttl_hours: int = None):
        self.collection = db[SESSIONS]
        self.ttl = timedelta(hours=ttl_hours or settings.SESSION_TTL_HOURS)

    def create(self, user_id: str, username: str, role: str = "user") -> str:
        """Persist a new session and return the client token for it."""
        now = datetime.utcnow()
        session_id = secrets.token_urlsafe(32)
        expires_at = now + self.ttl
        self.collection.insert_one({
            "_id": session_id,
            "userId": str(user_id),
            "username": username,
            "role": role or "user",
            "createdAt": now,
            "expiresAt": expires_at,
        })
        logger.info(f"🔑 Session opened for {username}")
        return create_session_token(session_id, expires_at)

    def read(self, token: str) -> Optional[Session]:
        if not token:
            return None
        session_id = decode_session_token(token)
        if not session_id:
            return None
        # The TTL monitor runs periodically, so expiry is also checked here.
        doc = self.collection.find_one({"_id": session_id, "expiresAt": {"$gt": datetime.utcnow()}})
        if not doc:
            return None
        return Session(
            session_id=doc["_id"],
            user_id=doc["userId"],
            username=doc.get("username", ""),
            role=doc.get("role", "user"),
            expires_at=doc.get("expiresAt"),
        )

    def destroy(self, token: str) -> None:
        session_id = decode_session_token(token, verify_exp=False) if token else None
        if not session_id:
            return
        result = self.collection.delete_one({"_id": session_id})
        if result.deleted_count:
            logger.info("🚪 Session closed")
