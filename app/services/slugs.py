# app/services/slugs.py
"""
Canonical slug generation.

One function for every entity-writing path (admin forms, the find-or-create
resolver, scripts), so the same name always yields the same slug.
"""
from __future__ import annotations

import re
import unicodedata

from app.core.errors import ValidationError

_SEPARATORS = re.compile(r"[\s_-]+")
_INVALID = re.compile(r"[^\w-]")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def generate_slug(name: str) -> str:
    """
    "San José" -> "san-jose", "  Costa   Rica " -> "costa-rica", "!!!" -> "".

    Never raises; callers decide whether an empty slug is an error.
    """
    if not name:
        return ""
    text = _strip_accents(str(name)).lower().strip()
    text = _SEPARATORS.sub("-", text)
    # \w is unicode-aware: keep only ASCII word chars so slugs stay URL-safe
    text = _INVALID.sub("", text.encode("ascii", "ignore").decode("ascii"))
    text = _SEPARATORS.sub("-", text)
    return _EDGE_HYPHENS.sub("", text)


def require_slug(name: str, field: str = "name") -> str:
    slug = generate_slug(name)
    if not slug:
        raise ValidationError(f"Could not generate a valid slug from {field} {name!r}")
    return slug


def city_slug(city_name: str, country_name: str) -> str:
    # city slugs carry the country so "san-jose-costa-rica" and "san-jose-usa" never collide
    return require_slug(f"{city_name} {country_name}", "city name")


def route_slug(departure_slug: str, destination_slug: str) -> str:
    return f"{departure_slug}-to-{destination_slug}"
