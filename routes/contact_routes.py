# backend/routes/contact_routes.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from pymongo.database import Database
from typing import Optional
import logging

from database.connection import get_db
from errors import ValidationError
from repositories.contact_repository import insert_contact_message

router = APIRouter()
LOG = logging.getLogger("routes.contact")


class ContactMessage(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None


# ------------------------------------------------------------
# 🔹 Contact form
# ------------------------------------------------------------
@router.post("", summary="Leave a message for the team")
def submit_contact(data: ContactMessage, db: Database = Depends(get_db)):
    name = (data.name or "").strip()
    email = (data.email or "").strip()
    message = (data.message or "").strip()
    if not name or not email or not message:
        raise ValidationError("All fields are required")

    insert_contact_message(db, name, email, message)
    LOG.info(f"✉️ Contact message from {name} <{email}>")
    return {"message": f"Thank you, {name}! Your message has been saved successfully."}
