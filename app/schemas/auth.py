# app/schemas/auth.py
from pydantic import BaseModel, EmailStr

from app.schemas.common import CamelModel


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class SystemAuthStatus(CamelModel):
    is_authenticated: bool
    email: EmailStr | None = None
    role: str | None = None
    message: str | None = None
