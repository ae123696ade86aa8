# backend/repositories/user_repository.py
from bson import ObjectId
from datetime import datetime
from pymongo.database import Database
from typing import Optional
import logging

from database.connection import USERS

logger = logging.getLogger("repositories.users")


# ------------------------------------------------------------
# 🔹 Safe user serialization
# ------------------------------------------------------------
def serialize_user(user: dict) -> Optional[dict]:
    """Stringify the ObjectId and drop the password hash."""
    if not user:
        return None
    user_copy = dict(user)
    user_copy["id"] = str(user_copy.pop("_id"))
    user_copy.pop("password", None)  # never expose the hash
    return user_copy


# ------------------------------------------------------------
# 🔹 Lookups
# ------------------------------------------------------------
def get_user_by_email(db: Database, email: str) -> Optional[dict]:
    """Raw account document, hash included (for credential checks)."""
    return db[USERS].find_one({"email": email})


def find_by_username_or_email(db: Database, username: str, email: str) -> Optional[dict]:
    return db[USERS].find_one({"$or": [{"email": email}, {"username": username}]})


# ------------------------------------------------------------
# 🔹 Create user
# ------------------------------------------------------------
def create_user(db: Database, username: str, email: str, password_hash: str, role: str = "user") -> ObjectId:
    user_doc = {
        "username": username,
        "email": email,
        "password": password_hash,
        "role": role,
        "createdAt": datetime.utcnow(),
    }
    result = db[USERS].insert_one(user_doc)
    logger.info(f"✅ User created: {username} ({result.inserted_id})")
    return result.inserted_id
