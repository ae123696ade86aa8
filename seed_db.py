"""
seed_db.py — Fill the catalog with sample accounts and tracks
--------------------------------------------------------------
Wipes the ``tracks`` and ``users`` collections, creates one admin and
one regular account, and inserts the sample catalog. The first half of
the tracks belongs to the admin, the rest to the regular user, so both
ownership paths can be tried right away.

    python seed_db.py [--mongo-uri URI] [--db NAME]
"""

import argparse
import logging
import math
from datetime import datetime

from pymongo.database import Database

from auth.utils import hash_password
from config import settings
from database.connection import TRACKS, USERS, close_db, connect_db, ensure_indexes

logger = logging.getLogger("seed")

SAMPLE_TRACKS = [
    {"title": "Blinding Lights", "artist": "The Weeknd", "album": "After Hours", "genre": "Pop", "durationSeconds": 200, "releaseYear": 2020},
    {"title": "Bohemian Rhapsody", "artist": "Queen", "album": "A Night at the Opera", "genre": "Rock", "durationSeconds": 354, "releaseYear": 1975},
    {"title": "Hotel California", "artist": "Eagles", "album": "Hotel California", "genre": "Rock", "durationSeconds": 391, "releaseYear": 1977},
    {"title": "Billie Jean", "artist": "Michael Jackson", "album": "Thriller", "genre": "Pop", "durationSeconds": 294, "releaseYear": 1982},
    {"title": "Smells Like Teen Spirit", "artist": "Nirvana", "album": "Nevermind", "genre": "Rock", "durationSeconds": 301, "releaseYear": 1991},
    {"title": "Lose Yourself", "artist": "Eminem", "album": "8 Mile OST", "genre": "Hip-Hop", "durationSeconds": 326, "releaseYear": 2002},
    {"title": "Take On Me", "artist": "a-ha", "album": "Hunting High and Low", "genre": "Pop", "durationSeconds": 225, "releaseYear": 1985},
    {"title": "Starboy", "artist": "The Weeknd ft. Daft Punk", "album": "Starboy", "genre": "R&B", "durationSeconds": 230, "releaseYear": 2016},
    {"title": "Get Lucky", "artist": "Daft Punk ft. Pharrell", "album": "Random Access Memories", "genre": "Electronic", "durationSeconds": 369, "releaseYear": 2013},
    {"title": "Stairway to Heaven", "artist": "Led Zeppelin", "album": "Led Zeppelin IV", "genre": "Rock", "durationSeconds": 482, "releaseYear": 1971},
    {"title": "Purple Rain", "artist": "Prince", "album": "Purple Rain", "genre": "R&B", "durationSeconds": 520, "releaseYear": 1984},
    {"title": "Old Town Road", "artist": "Lil Nas X", "album": "7", "genre": "Hip-Hop", "durationSeconds": 157, "releaseYear": 2019},
]

SAMPLE_USERS = [
    {"username": "admin", "email": "admin@tynda.kz", "password": "admin123", "role": "admin"},
    {"username": "testuser", "email": "test@tynda.kz", "password": "test123", "role": "user"},
]


def seed(db: Database) -> dict:
    """Reset and populate ``db``. Returns the created account ids by username."""
    db[TRACKS].delete_many({})
    db[USERS].delete_many({})
    logger.info("🧹 Cleared tracks and users")

    user_ids = {}
    for user in SAMPLE_USERS:
        result = db[USERS].insert_one({
            "username": user["username"],
            "email": user["email"],
            "password": hash_password(user["password"]),
            "role": user["role"],
            "createdAt": datetime.utcnow(),
        })
        user_ids[user["username"]] = result.inserted_id
        logger.info(f"  ✓ {user['role']}: {user['username']} ({user['email']})")

    half = math.ceil(len(SAMPLE_TRACKS) / 2)
    now = datetime.utcnow()
    tracks = [
        {
            **track,
            "coverUrl": "",
            "createdBy": user_ids["admin"] if index < half else user_ids["testuser"],
            "createdAt": now,
            "updatedAt": now,
        }
        for index, track in enumerate(SAMPLE_TRACKS)
    ]
    inserted = db[TRACKS].insert_many(tracks)
    logger.info(f"🎵 Inserted {len(inserted.inserted_ids)} tracks ({half} admin, {len(tracks) - half} testuser)")
    return user_ids


def main():
    parser = argparse.ArgumentParser(description="Seed the Tynda Music catalog")
    parser.add_argument("--mongo-uri", default=None)
    parser.add_argument("--db", default=settings.MONGO_DB)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    client, db = connect_db(args.mongo_uri, args.db)
    try:
        ensure_indexes(db)
        seed(db)
        logger.info("✅ Database seeded. Accounts: admin@tynda.kz / admin123 (admin), test@tynda.kz / test123")
    finally:
        close_db(client)


if __name__ == "__main__":
    main()
