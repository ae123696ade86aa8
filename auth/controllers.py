# backend/auth/controllers.py
import logging
import re
from typing import Optional, Tuple

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from auth.models import UserLogin, UserRegister
from auth.session_store import Session, SessionStore
from auth.utils import hash_password, verify_password
from errors import InvalidCredentialsError, ServerError, ValidationError
from repositories.user_repository import (
    create_user, find_by_username_or_email, get_user_by_email, serialize_user
)

logger = logging.getLogger("auth.controllers")

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
DUPLICATE_ACCOUNT = "User with this email or username already exists"


def _profile(user: dict) -> dict:
    safe = serialize_user(user)
    return {
        "id": safe["id"],
        "username": safe["username"],
        "email": safe["email"],
        "role": safe.get("role", "user"),
    }


# =====================================================
# 🔹 Register
# =====================================================
def register_user(db: Database, data: UserRegister) -> Tuple[dict, str]:
    """Create an account and open a session for it.

    Returns the public profile and the session token.
    """
    username = (data.username or "").strip()
    email = (data.email or "").strip()
    password = data.password or ""

    if not username or not email or not password:
        raise ValidationError("All fields are required")
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")

    if find_by_username_or_email(db, username, email):
        raise ValidationError(DUPLICATE_ACCOUNT)

    try:
        user_id = create_user(db, username, email, hash_password(password))
    except DuplicateKeyError:
        # Lost a race against a concurrent registration.
        raise ValidationError(DUPLICATE_ACCOUNT)

    token = SessionStore(db).create(str(user_id), username, "user")
    profile = {"id": str(user_id), "username": username, "email": email, "role": "user"}
    logger.info(f"🆕 Registered {username} <{email}>")
    return profile, token


# =====================================================
# 🔹 Login with password
# =====================================================
def login_with_password(db: Database, data: UserLogin) -> Tuple[dict, str]:
    email = (data.email or "").strip()
    password = data.password or ""
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.get("password")):
        logger.info(f"🔒 Failed login for {email}")
        raise InvalidCredentialsError()

    profile = _profile(user)
    token = SessionStore(db).create(profile["id"], profile["username"], profile["role"])
    logger.info(f"✅ Login for {profile['username']}")
    return profile, token


# =====================================================
# 🔹 Logout
# =====================================================
def logout_user(db: Database, token: Optional[str]) -> dict:
    try:
        SessionStore(db).destroy(token)
    except PyMongoError:
        logger.exception("❌ Could not destroy session")
        raise ServerError("Could not logout")
    return {"message": "Logout successful"}


# =====================================================
# 🔹 Current identity
# =====================================================
def whoami(session: Optional[Session]) -> dict:
    if session is None:
        return {"isAuthenticated": False}
    return {
        "isAuthenticated": True,
        "user": {"id": session.user_id, "username": session.username, "role": session.role},
    }
