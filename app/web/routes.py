from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import get_db
from app.core.errors import NotFoundError, ValidationError
from app.core.security import ADMIN_ROLE, create_token, verify_password
from app.db.models.route import Route
from app.db.models.user import User
from app.services import catalog, search, seo
from app.web.auth import authenticator
from app.web.context import ctx as _ctx, templates
from app.web.deps import (
    clear_access_cookie,
    clear_system_cookie,
    flash,
    require_csrf,
    set_access_cookie,
)

log = logging.getLogger(__name__)

router = APIRouter()


def render(template_name: str, request: Request, db: Session, status_code: int = 200, **extra):
    return templates.TemplateResponse(
        request, template_name, _ctx(request, db, **extra), status_code=status_code
    )


def not_found(request: Request, db: Session, message: str = "Page not found"):
    return render("not_found.html", request, db, status_code=404, message=message)


def _to_int(raw: Optional[str]) -> Optional[int]:
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


# ----------------- Public pages -----------------

@router.get("/", response_class=HTMLResponse)
def home(request: Request, db: Session = Depends(get_db)):
    return render("home.html", request, db, locations=search.departure_locations(db))


@router.post("/search-redirect")
def search_redirect(
    request: Request,
    departureCityId: str = Form(""),
    destinationCityId: str = Form(""),
    db: Session = Depends(get_db),
):
    departure_id = _to_int(departureCityId)
    destination_id = _to_int(destinationCityId)
    if departure_id is None or destination_id is None:
        raise ValidationError("Both departureCityId and destinationCityId are required")

    slug = search.find_route_slug(db, departure_id, destination_id)
    return RedirectResponse(url=f"/routes/{slug}", status_code=302)


@router.get("/routes/{route_slug}", response_class=HTMLResponse)
def route_page(route_slug: str, request: Request, db: Session = Depends(get_db)):
    route = db.query(Route).filter(Route.route_slug == route_slug).first()
    if not route:
        return not_found(request, db, "We could not find that shuttle route.")

    return render(
        "route_detail.html",
        request,
        db,
        route=route,
        meta=seo.route_meta(route),
        viator_partner_id=settings.VIATOR_PARTNER_ID,
    )


@router.get("/countries", response_class=HTMLResponse)
def countries_page(request: Request, db: Session = Depends(get_db)):
    return render("countries_list.html", request, db, countries=catalog.list_countries(db))


@router.get("/countries/{country_slug}", response_class=HTMLResponse)
def country_page(country_slug: str, request: Request, db: Session = Depends(get_db)):
    country = search.get_country_by_slug(db, country_slug)
    if not country:
        return not_found(request, db, "We could not find that country.")
    return render(
        "country_detail.html",
        request,
        db,
        country=country,
        routes=search.country_routes(db, country),
    )


# ----------------- SEO -----------------

@router.get("/sitemap.xml")
def sitemap(request: Request, db: Session = Depends(get_db)):
    entries = seo.sitemap_entries(db)
    body = templates.get_template("sitemap.xml").render(entries=entries)
    return Response(content=body, media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots():
    base = settings.SITE_URL.rstrip("/")
    return "\n".join(
        [
            "User-agent: *",
            "Allow: /",
            "Disallow: /admin",
            "Disallow: /api/",
            f"Sitemap: {base}/sitemap.xml",
            "",
        ]
    )


@router.get("/social-preview/{route_slug}", response_class=HTMLResponse)
def social_preview(route_slug: str, request: Request, db: Session = Depends(get_db)):
    """Minimal page for link unfurlers: only meta tags and a link to the real page."""
    route = db.query(Route).filter(Route.route_slug == route_slug).first()
    if not route:
        raise NotFoundError("Route not found")
    return templates.TemplateResponse(
        request, "social_preview.html", {"route": route, "meta": seo.route_meta(route)}
    )


# ----------------- Auth -----------------

@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, db: Session = Depends(get_db)):
    if authenticator.is_admin(request, db):
        return RedirectResponse(url="/admin", status_code=303)
    return render("auth/login.html", request, db)


@router.post("/login")
def login_submit(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    csrf_token: str = Form(...),
    db: Session = Depends(get_db),
):
    require_csrf(request, csrf_token)

    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user or not user.is_active or not verify_password(password, user.password_hash):
        flash(request, "Email not found or incorrect password", "error")
        return RedirectResponse(url="/login", status_code=303)

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()

    access = create_token(user.id, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES), "access")

    target = "/admin" if user.role == ADMIN_ROLE else "/"
    resp = RedirectResponse(url=target, status_code=303)
    set_access_cookie(resp, access)
    flash(request, "Login successful. Welcome back!", "success")
    log.info("login for %s", user.email)
    return resp


@router.post("/logout")
def logout(request: Request, csrf_token: str = Form(...)):
    require_csrf(request, csrf_token)
    resp = RedirectResponse(url="/", status_code=303)
    clear_access_cookie(resp)
    clear_system_cookie(resp)
    return resp
