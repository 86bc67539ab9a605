# app/web/routes_admin.py
from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.db.models.amenity import Amenity
from app.db.models.city import City
from app.db.models.country import Country
from app.db.models.hotel import Hotel
from app.db.models.route import Route
from app.services import catalog
from app.web.auth import Principal, authenticator
from app.web.context import ctx as _ctx, templates

router = APIRouter()


# ---------------------------
# Helpers
# ---------------------------

def _admin_guard(request: Request, db: Session) -> Union[Principal, RedirectResponse]:
    """
    Return the admin principal on success,
    otherwise a RedirectResponse to /login.
    """
    principal = authenticator.admin(request, db)
    if principal is None:
        return RedirectResponse("/login", status_code=303)
    return principal


# ---------------------------
# Admin: Dashboard
# ---------------------------
@router.get("/admin", response_class=HTMLResponse)
def admin_dashboard(request: Request, db: Session = Depends(get_db)):
    principal_or_redirect = _admin_guard(request, db)
    if isinstance(principal_or_redirect, RedirectResponse):
        return principal_or_redirect

    stats = {
        "countries": db.query(Country).count(),
        "cities": db.query(City).count(),
        "routes": db.query(Route).count(),
        "amenities": db.query(Amenity).count(),
        "hotels": db.query(Hotel).count(),
    }
    return templates.TemplateResponse(
        request,
        "admin/dashboard.html",
        _ctx(request, db, title="Admin • Dashboard", stats=stats),
    )


# ---------------------------
# Admin: Countries
# ---------------------------
@router.get("/admin/countries", response_class=HTMLResponse)
def admin_countries(
    request: Request,
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None),
):
    principal_or_redirect = _admin_guard(request, db)
    if isinstance(principal_or_redirect, RedirectResponse):
        return principal_or_redirect

    return templates.TemplateResponse(
        request,
        "admin/countries_list.html",
        _ctx(
            request,
            db,
            title="Admin • Countries",
            items=catalog.list_countries(db, search),
            search=search or "",
        ),
    )


# ---------------------------
# Admin: Cities
# ---------------------------
@router.get("/admin/cities", response_class=HTMLResponse)
def admin_cities(
    request: Request,
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None),
    country_id: Optional[int] = Query(None, alias="countryId"),
):
    principal_or_redirect = _admin_guard(request, db)
    if isinstance(principal_or_redirect, RedirectResponse):
        return principal_or_redirect

    return templates.TemplateResponse(
        request,
        "admin/cities_list.html",
        _ctx(
            request,
            db,
            title="Admin • Cities",
            items=catalog.list_cities(db, search, country_id),
            countries=catalog.list_countries(db),
            country_id=country_id,
            search=search or "",
        ),
    )


# ---------------------------
# Admin: Routes
# ---------------------------
@router.get("/admin/routes", response_class=HTMLResponse)
def admin_routes(
    request: Request,
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None),
):
    principal_or_redirect = _admin_guard(request, db)
    if isinstance(principal_or_redirect, RedirectResponse):
        return principal_or_redirect

    return templates.TemplateResponse(
        request,
        "admin/routes_list.html",
        _ctx(
            request,
            db,
            title="Admin • Routes",
            items=catalog.list_routes(db, search),
            cities=catalog.list_cities(db),
            amenities=catalog.list_amenities(db),
            search=search or "",
        ),
    )
