# app/api/system_auth.py
"""
JSON login for the system bypass token.

Scripts and the admin UI can obtain a ``system-auth-token`` cookie here
instead of going through the HTML login form. Only active ADMIN users can
log in.
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.deps import get_db, read_payload
from app.core.errors import Unauthorized
from app.core.security import ADMIN_ROLE, create_system_token, verify_password
from app.db.models.user import User
from app.schemas.auth import LoginIn, SystemAuthStatus
from app.web.auth import system_principal
from app.web.deps import clear_system_cookie, set_system_cookie

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/system-auth", tags=["system auth"])


def _status(**fields) -> dict:
    return SystemAuthStatus(**fields).model_dump(by_alias=True, exclude_none=True)


@router.post("/login")
async def login(request: Request, db: Session = Depends(get_db)):
    data = await read_payload(request, LoginIn)

    user = db.query(User).filter(User.email == data.email).first()
    if (
        not user
        or not user.is_active
        or user.role != ADMIN_ROLE
        or not verify_password(data.password, user.password_hash)
    ):
        log.info("system auth login rejected for %s", data.email)
        raise Unauthorized("Invalid credentials")

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()

    token = create_system_token(user.email)
    resp = JSONResponse(_status(is_authenticated=True, email=user.email, role=ADMIN_ROLE))
    set_system_cookie(resp, token)
    log.info("system auth login for %s", user.email)
    return resp


@router.get("/verify")
def verify(request: Request, db: Session = Depends(get_db)):
    principal = system_principal(request, db)
    if principal is None:
        return JSONResponse(
            _status(is_authenticated=False, message="No valid system auth token"),
            status_code=401,
        )
    return _status(is_authenticated=True, email=principal.email, role=principal.role)


@router.post("/logout")
def logout():
    resp = JSONResponse(_status(is_authenticated=False, message="Logged out"))
    clear_system_cookie(resp)
    return resp
