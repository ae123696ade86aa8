# backend/database/connection.py
import logging
from typing import Tuple
from urllib.parse import quote_plus

from fastapi import Request
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from config import settings

logger = logging.getLogger("database.connection")

TRACKS = "tracks"
USERS = "users"
SESSIONS = "sessions"
CONTACTS = "contacts"


# ============================================================
# 🔧 URI BUILDER
# ============================================================
def build_mongo_uri() -> str:
    if settings.MONGO_URI:
        return settings.MONGO_URI
    host = f"{settings.MONGO_HOST}:{settings.MONGO_PORT}"
    if settings.MONGO_USER:
        user = quote_plus(settings.MONGO_USER)
        password = quote_plus(settings.MONGO_PASSWORD or "")
        return f"mongodb://{user}:{password}@{host}"
    return f"mongodb://{host}"


# ============================================================
# 🚀 LIFECYCLE
# ============================================================
def connect_db(uri: str = None, db_name: str = None) -> Tuple[MongoClient, Database]:
    """Open the client and return it together with the catalog database."""
    try:
        client = MongoClient(uri or build_mongo_uri())
        db = client[db_name or settings.MONGO_DB]
        logger.info(f"✅ Connected to MongoDB database: {db.name}")
        return client, db
    except Exception as e:
        logger.error(f"❌ Error connecting to MongoDB: {e}")
        raise


def close_db(client: MongoClient) -> None:
    client.close()
    logger.info("🔌 MongoDB connection closed.")


def ensure_indexes(db: Database) -> None:
    """Create the indexes the service relies on (idempotent)."""
    db[USERS].create_index("username", unique=True)
    db[USERS].create_index("email", unique=True)
    # Sessions expire server-side once expiresAt is reached.
    db[SESSIONS].create_index("expiresAt", expireAfterSeconds=0)
    db[TRACKS].create_index([("artist", ASCENDING)])
    db[TRACKS].create_index([("genre", ASCENDING)])
    db[TRACKS].create_index([("createdAt", DESCENDING)])
    logger.info("📇 Indexes ensured on users, sessions and tracks.")


# ============================================================
# 🧩 FASTAPI DEPENDENCY
# ============================================================
def get_db(request: Request) -> Database:
    return request.app.state.db
