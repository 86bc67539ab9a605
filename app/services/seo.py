# app/services/seo.py
"""
Read-only SEO helpers: sitemap entries, Open Graph image URLs and the
title/description used in route page meta tags.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.models.country import Country
from app.db.models.route import Route


@dataclass(frozen=True)
class SitemapEntry:
    loc: str
    lastmod: str
    changefreq: str
    priority: str


def _site_url() -> str:
    return settings.SITE_URL.rstrip("/")


def _w3c_date(value: Optional[datetime]) -> str:
    value = value or datetime.now(timezone.utc)
    return value.date().isoformat()


def sitemap_entries(db: Session) -> list[SitemapEntry]:
    base = _site_url()
    entries = [SitemapEntry(f"{base}/", _w3c_date(None), "daily", "1.0")]

    for country in db.query(Country).order_by(Country.name.asc()).all():
        entries.append(
            SitemapEntry(f"{base}/countries/{country.slug}", _w3c_date(country.updated_at), "weekly", "0.8")
        )

    for route in db.query(Route).order_by(Route.route_slug.asc()).all():
        entries.append(
            SitemapEntry(f"{base}/routes/{route.route_slug}", _w3c_date(route.updated_at), "weekly", "0.9")
        )
    return entries


def scale_font(text: str, largest: int, smallest: int) -> int:
    """Linear font size between 20 chars (largest) and 40 chars (smallest)."""
    short, long_ = 20, 40
    length = len(text)
    if length <= short:
        return largest
    if length >= long_:
        return smallest
    return int(largest - ((length - short) * (largest - smallest)) / (long_ - short))


def _cloudinary_text(text: str) -> str:
    # commas and slashes separate Cloudinary transformation params
    return quote(text, safe="").replace("%2C", "%252C").replace("%2F", "%252F")


def og_image_url(departure: str, destination: str) -> str:
    clean_from = (departure or "").replace("(", "").replace(")", "").strip() or "Location"
    clean_to = (destination or "").replace("(", "").replace(")", "").strip() or "Destination"
    route_text = f"{clean_from} → {clean_to}"
    tagline = f"Shuttle Service · {settings.SITE_NAME}"
    size = scale_font(route_text, 64, 40)

    overlays = [
        f"l_text:Arial_{size}_bold:{_cloudinary_text(route_text)},co_rgb:004d3b,g_center,y_40",
        f"l_text:Arial_32:{_cloudinary_text(tagline)},co_rgb:004d3b,g_south,y_60",
    ]
    return (
        f"https://res.cloudinary.com/{settings.CLOUDINARY_CLOUD_NAME}/image/upload/"
        f"w_1200,h_630,c_fill/{'/'.join(overlays)}/{settings.OG_BASE_IMAGE}"
    )


def page_title(route: Route) -> str:
    title = route.meta_title or route.display_name or (
        f"Shuttles from {route.departure_city.name} to {route.destination_city.name}"
    )
    if settings.SITE_NAME not in title:
        title = f"{title} | {settings.SITE_NAME}"
    return title


def page_description(route: Route) -> str:
    return (
        route.meta_description
        or route.seo_description
        or f"Book shuttle transportation from {route.departure_city.name} "
        f"to {route.destination_city.name}"
    )


def route_meta(route: Route) -> dict:
    """Template context shared by the route page and the social preview page."""
    return {
        "title": page_title(route),
        "description": page_description(route),
        "canonical_url": f"{_site_url()}/routes/{route.route_slug}",
        "og_image": og_image_url(route.departure_city.name, route.destination_city.name),
        "keywords": route.meta_keywords,
    }
