# backend/auth/utils.py
import jwt
import bcrypt
from datetime import datetime
from typing import Optional
from config import settings

ALGORITHM = "HS256"


# =====================================================
# 🔹 Password hashing
# =====================================================
def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


# =====================================================
# 🔹 Session tokens
# =====================================================
def create_session_token(session_id: str, expires_at: datetime) -> str:
    """Sign the session id so clients cannot forge or alter it."""
    return jwt.encode({"sid": session_id, "exp": expires_at}, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str, verify_exp: bool = True) -> Optional[str]:
    """Return the session id carried by ``token``, or None if it is unusable."""
    try:
        claims = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[ALGORITHM],
            options={"verify_exp": verify_exp},
        )
    except jwt.InvalidTokenError:
        return None
    return claims.get("sid")
