# backend/repositories/contact_repository.py
from datetime import datetime
import logging
from pymongo.database import Database

from database.connection import CONTACTS

LOG = logging.getLogger("repositories.contacts")


def insert_contact_message(db: Database, name: str, email: str, message: str) -> str:
    doc = {
        "name": name,
        "email": email,
        "message": message,
        "createdAt": datetime.utcnow(),
    }
    res = db[CONTACTS].insert_one(doc)
    LOG.info("Stored contact message %s from %s", str(res.inserted_id), email)
    return str(res.inserted_id)
