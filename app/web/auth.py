# app/web/auth.py
"""
Admin authentication gate.

A request is admin when either credential check succeeds:

- the regular login session (``access_token`` cookie holding a user JWT)
  belongs to an active user whose role is ADMIN, or
- a signed system bypass token (``system-auth-token`` cookie or
  ``X-System-Auth`` header) asserts role ADMIN.

The gate is a router-level dependency, so it runs before any handler reads
the request body.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.errors import Unauthorized
from app.core.security import ADMIN_ROLE, decode_system_token, decode_token
from app.db.models.user import User

log = logging.getLogger(__name__)

COOKIE_NAME = "access_token"
SYSTEM_COOKIE_NAME = "system-auth-token"
SYSTEM_HEADER_NAME = "X-System-Auth"


@dataclass(frozen=True)
class Principal:
    email: str
    role: str
    source: str  # "session" | "system"
    user_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


class CredentialCheck(Protocol):
    def __call__(self, request: Request, db: Session) -> Optional[Principal]: ...


def session_user(request: Request, db: Session) -> Optional[User]:
    """User behind the login cookie, or None when the cookie is missing or invalid."""
    raw = request.cookies.get(COOKIE_NAME)
    if not raw or not raw.startswith("Bearer "):
        return None

    try:
        payload = decode_token(raw.split(" ", 1)[1], token_type="access")
        user_id = int(payload["sub"])
    except (ValueError, KeyError):
        return None

    user = db.get(User, user_id)
    if not user or not user.is_active:
        return None
    return user


def session_principal(request: Request, db: Session) -> Optional[Principal]:
    user = session_user(request, db)
    if not user:
        return None
    return Principal(email=user.email, role=user.role, source="session", user_id=user.id)


def system_principal(request: Request, db: Session) -> Optional[Principal]:
    token = request.cookies.get(SYSTEM_COOKIE_NAME) or request.headers.get(SYSTEM_HEADER_NAME)
    if not token:
        return None
    try:
        payload = decode_system_token(token)
    except ValueError as e:
        log.debug("rejected system auth token: %s", e)
        return None
    return Principal(email=payload["email"], role=payload["role"], source="system")


class Authenticator:
    """Runs credential checks in order; the first admin principal wins."""

    def __init__(self, *checks: CredentialCheck):
        self.checks = checks

    def principal(self, request: Request, db: Session) -> Optional[Principal]:
        found = None
        for check in self.checks:
            p = check(request, db)
            if p and p.is_admin:
                return p
            found = found or p
        return found

    def admin(self, request: Request, db: Session) -> Optional[Principal]:
        p = self.principal(request, db)
        return p if p and p.is_admin else None

    def is_admin(self, request: Request, db: Session) -> bool:
        return self.admin(request, db) is not None


authenticator = Authenticator(session_principal, system_principal)


def require_admin(request: Request, db: Session = Depends(get_db)) -> Principal:
    principal = authenticator.admin(request, db)
    if principal is None:
        log.info("unauthorized admin request: %s %s", request.method, request.url.path)
        raise Unauthorized("Unauthorized")
    request.state.principal = principal
    return principal
