# backend/models/user.py
from pydantic import BaseModel
from typing import Optional


class UserProfile(BaseModel):
    id: str
    username: str
    email: str
    role: str = "user"


class AuthResponse(BaseModel):
    message: str
    user: UserProfile


class SessionUser(BaseModel):
    id: str
    username: str
    role: str = "user"


class WhoAmI(BaseModel):
    isAuthenticated: bool
    user: Optional[SessionUser] = None
