# backend/auth/models.py
from pydantic import BaseModel
from typing import Optional


# Field checks (presence, length, email shape) happen in the controller
# so every failure is reported with its own 400 message.
class UserRegister(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
