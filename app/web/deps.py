# app/web/deps.py
import secrets
import hmac
from typing import Optional

from fastapi import Request
from fastapi.responses import Response

from app.core.config import settings
from app.core.errors import ValidationError
from app.web.auth import COOKIE_NAME, SYSTEM_COOKIE_NAME


# ---- Flash messages (for Jinja templates) ----
def flash(request: Request, text: str, type_: str = "info") -> None:
    request.session.setdefault("flashes", []).append({"text": text, "type": type_})

def pop_flashes(request: Request):
    return request.session.pop("flashes", [])

# ---- CSRF helpers ----
# One token per session; templates post it as <input name="csrf_token" ...>
_CSRF_SESSION_KEY = "csrf_token"

def get_csrf_token(request: Request) -> str:
    """
    Return the existing CSRF token from session, or create one and store it.
    Render this value into forms as a hidden field named 'csrf_token'.
    """
    token = request.session.get(_CSRF_SESSION_KEY)
    if not token:
        token = secrets.token_urlsafe(32)
        request.session[_CSRF_SESSION_KEY] = token
    return token

def require_csrf(request: Request, token_from_form: Optional[str]) -> None:
    """
    Compare the posted token with the one stored in the session.
    Raise ValidationError (400) if missing or mismatch.
    """
    if not token_from_form:
        raise ValidationError("Missing CSRF token")

    expected = request.session.get(_CSRF_SESSION_KEY)
    if not expected:
        raise ValidationError("CSRF token not in session")

    if not hmac.compare_digest(expected, token_from_form):
        raise ValidationError("Invalid CSRF token")

# ---- Cookies ----
def set_access_cookie(resp: Response, token: str) -> None:
    resp.set_cookie(
        key=COOKIE_NAME,
        value=f"Bearer {token}",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )

def clear_access_cookie(resp: Response) -> None:
    resp.delete_cookie(COOKIE_NAME, path="/")

def set_system_cookie(resp: Response, token: str) -> None:
    resp.set_cookie(
        key=SYSTEM_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.SYSTEM_AUTH_EXPIRE_HOURS * 3600,
        path="/",
    )

def clear_system_cookie(resp: Response) -> None:
    resp.delete_cookie(SYSTEM_COOKIE_NAME, path="/")
