# backend/auth/routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pymongo.database import Database

from auth.controllers import login_with_password, logout_user, register_user, whoami
from auth.dependencies import get_optional_session, get_session_token
from auth.models import UserLogin, UserRegister
from auth.session_store import Session
from config import settings
from database.connection import get_db
from models.user import AuthResponse, WhoAmI

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


# ------------------------------------------------------------
# 🔹 Register
# ------------------------------------------------------------
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, response: Response, db: Database = Depends(get_db)):
    profile, token = register_user(db, data)
    _set_session_cookie(response, token)
    return {"message": "Registration successful", "user": profile}


# ------------------------------------------------------------
# 🔹 Login
# ------------------------------------------------------------
@router.post("/login", response_model=AuthResponse)
def login(data: UserLogin, response: Response, db: Database = Depends(get_db)):
    profile, token = login_with_password(db, data)
    _set_session_cookie(response, token)
    return {"message": "Login successful", "user": profile}


# ------------------------------------------------------------
# 🔹 Logout
# ------------------------------------------------------------
@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    db: Database = Depends(get_db),
):
    result = logout_user(db, token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return result


# ------------------------------------------------------------
# 🔹 Current user
# ------------------------------------------------------------
@router.get("/me", response_model=WhoAmI, response_model_exclude_none=True)
def me(session: Optional[Session] = Depends(get_optional_session)):
    return whoami(session)
