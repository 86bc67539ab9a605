# app/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.config import settings

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ADMIN_ROLE = "ADMIN"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(plain_password, password_hash)


# JWT helpers
# - "type" claim distinguishes the session "access" token from the "system" bypass token
def create_token(user_id: int, expires_delta: timedelta, token_type: str = "access") -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGO)


def decode_token(token: str, token_type: Optional[str] = None) -> dict:
    """
    Decode and validate a session JWT. If token_type is provided, also checks the 'type' claim.
    Raises ValueError on any validation problem.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGO])
    except JWTError as e:
        raise ValueError("Invalid token") from e

    if token_type is not None and payload.get("type") != token_type:
        raise ValueError("Wrong token type")

    if "sub" not in payload:
        raise ValueError("Invalid token payload (missing 'sub')")

    return payload


def create_system_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Signed bypass token asserting the ADMIN role for `email`."""
    now = datetime.now(timezone.utc)
    expires_delta = expires_delta or timedelta(hours=settings.SYSTEM_AUTH_EXPIRE_HOURS)
    payload = {
        "sub": email,
        "email": email,
        "role": ADMIN_ROLE,
        "system_auth": True,
        "type": "system",
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.system_auth_secret, algorithm=settings.JWT_ALGO)


def decode_system_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.system_auth_secret, algorithms=[settings.JWT_ALGO])
    except JWTError as e:
        raise ValueError("Invalid token") from e

    if payload.get("type") != "system" or payload.get("system_auth") is not True:
        raise ValueError("Not a system auth token")
    if payload.get("role") != ADMIN_ROLE or not payload.get("email"):
        raise ValueError("System auth token does not assert an admin")
    return payload
