# app/services/route_copies.py
from __future__ import annotations

import copy
import logging
import re

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.models.route import Route
from app.services.catalog import COPY_SUFFIX
from app.services.persist import commit_or_raise

log = logging.getLogger(__name__)

_COPY_MARKER = re.compile(r"\s*\(Copy(?: \d+)?\)$")

# everything except identity, slug, display name and bookkeeping timestamps
COPIED_FIELDS = (
    "departure_city_id",
    "destination_city_id",
    "departure_country_id",
    "destination_country_id",
    "viator_widget_code",
    "meta_title",
    "meta_description",
    "meta_keywords",
    "seo_description",
    "is_airport_pickup",
    "is_airport_dropoff",
    "is_city_to_city",
    "is_private_driver",
    "is_sightseeing_shuttle",
    "other_stops",
    "travel_time",
    "additional_instructions",
    "map_waypoints",
    "possible_nearby_stops",
    "viator_destination_link",
)


def base_slug(slug: str) -> str:
    """'sanjose-to-jacocopy2' -> 'sanjose-to-jaco'; also drops a '-copyN' suffix."""
    return COPY_SUFFIX.sub("", slug)


def next_copy_number(db: Session, base: str) -> int:
    """Lowest positive N such that `base + "copy" + N` is not taken."""
    pattern = re.compile(rf"^{re.escape(base)}copy(\d+)$")
    prefix = f"{base}copy"
    rows = (
        db.query(Route.route_slug)
        .filter(Route.route_slug.startswith(prefix, autoescape=True))
        .all()
    )
    used = set()
    for (slug,) in rows:
        m = pattern.match(slug)
        if m:
            used.add(int(m.group(1)))
    n = 1
    while n in used:
        n += 1
    return n


def duplicate_route(db: Session, route_id: int) -> Route:
    """
    Clone a route under the next free "<base>copyN" slug.

    Amenities and hotels are linked to the same rows, not cloned. The new
    route and its links are written in one commit.
    """
    source = db.get(Route, route_id)
    if not source:
        raise NotFoundError("Route not found")

    base = base_slug(source.route_slug)
    n = next_copy_number(db, base)
    new_slug = f"{base}copy{n}"
    display_base = _COPY_MARKER.sub("", source.display_name)

    clone = Route(route_slug=new_slug, display_name=f"{display_base} (Copy {n})")
    for field in COPIED_FIELDS:
        setattr(clone, field, copy.deepcopy(getattr(source, field)))
    clone.amenities = list(source.amenities)
    clone.hotels_served = list(source.hotels_served)

    db.add(clone)
    commit_or_raise(
        db, Route, "route", {"route_slug": new_slug},
        context=f"duplicate {route_id} as {new_slug!r}",
    )
    log.info("duplicated route %s (%s) as %s (%s)", source.route_slug, route_id, clone.route_slug, clone.id)
    return clone
