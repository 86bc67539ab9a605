# app/web/context.py
from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.core.config import settings
from app.web.auth import authenticator
from app.web.deps import get_csrf_token, pop_flashes

WEB_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(WEB_DIR / "templates"))
templates.env.globals["site_name"] = settings.SITE_NAME
templates.env.globals["site_url"] = settings.SITE_URL.rstrip("/")


def ctx(request: Request, db: Session, **extra):
    """
    Shared template context: flashes, csrf_token, principal, is_admin.
    Import and use this across all route modules to avoid circular imports.
    """
    principal = authenticator.principal(request, db)
    context = {
        "flashes": pop_flashes(request),
        "csrf_token": get_csrf_token(request),
        "principal": principal,
        "is_admin": bool(principal and principal.is_admin),
    }
    context.update(extra or {})
    return context
