# app/services/search.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import exists, or_
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.models.city import City
from app.db.models.country import Country
from app.db.models.route import Route
from app.services.slugs import route_slug


def valid_destinations(db: Session, departure_city_id: int) -> list[City]:
    """Unique destination cities of routes leaving `departure_city_id`, by name."""
    served = (
        db.query(Route.destination_city_id)
        .filter(Route.departure_city_id == departure_city_id)
        .distinct()
    )
    return (
        db.query(City)
        .filter(City.id.in_(served))
        .order_by(City.name.asc())
        .all()
    )


def departure_locations(db: Session) -> list[dict]:
    """Countries (by name) with their cities that have at least one departing route."""
    has_routes = exists().where(Route.departure_city_id == City.id)
    cities = (
        db.query(City)
        .join(City.country)
        .filter(has_routes)
        .order_by(Country.name.asc(), City.name.asc())
        .all()
    )
    grouped: dict[int, dict] = {}
    for city in cities:
        entry = grouped.setdefault(
            city.country_id,
            {"id": city.country.id, "name": city.country.name, "slug": city.country.slug, "cities": []},
        )
        entry["cities"].append({"id": city.id, "name": city.name, "slug": city.slug})
    return list(grouped.values())


def find_route_slug(db: Session, departure_city_id: int, destination_city_id: int) -> str:
    """
    Slug of the route serving the pair; falls back to the conventional slug
    so the visitor lands on the route page (or its 404) either way.
    """
    existing = (
        db.query(Route.route_slug)
        .filter(
            Route.departure_city_id == departure_city_id,
            Route.destination_city_id == destination_city_id,
        )
        .order_by(Route.id.asc())
        .first()
    )
    if existing:
        return existing[0]

    departure = db.get(City, departure_city_id)
    destination = db.get(City, destination_city_id)
    if not departure or not destination:
        raise NotFoundError("One or both cities not found")
    return route_slug(departure.slug, destination.slug)


def country_routes(db: Session, country: Country) -> list[Route]:
    return (
        db.query(Route)
        .filter(
            or_(
                Route.departure_country_id == country.id,
                Route.destination_country_id == country.id,
            )
        )
        .order_by(Route.display_name.asc())
        .all()
    )


def get_country_by_slug(db: Session, slug: str) -> Optional[Country]:
    return db.query(Country).filter(Country.slug == slug).first()
