# app/services/catalog.py
"""
Admin CRUD for countries, cities and routes.

Handlers in app.api.admin stay thin: they parse the payload and call into
here. Every write derives the slug from the submitted names, so renaming an
entity always changes its public URL.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from sqlalchemy import func, or_, update
from sqlalchemy.orm import Session, aliased

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.db.models.amenity import Amenity
from app.db.models.city import City
from app.db.models.country import Country
from app.db.models.hotel import Hotel
from app.db.models.route import Route
from app.schemas.city import CityIn
from app.schemas.country import CountryIn
from app.schemas.lookups import AmenityIn, HotelIn
from app.schemas.route import RouteIn
from app.services.persist import commit_or_raise, flush_or_raise
from app.services.slugs import city_slug, require_slug, route_slug

log = logging.getLogger(__name__)

COPY_SUFFIX = re.compile(r"-?copy\d+$")


def _required(value: Optional[str], field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"Missing or invalid required field: {field}")
    return value


def _optional(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def _like(q: str) -> str:
    return f"%{q.strip().lower()}%"


# ---------------------------
# Countries
# ---------------------------
def list_countries(db: Session, search: Optional[str] = None) -> list[Country]:
    qs = db.query(Country)
    if search and search.strip():
        ilike = _like(search)
        qs = qs.filter(or_(Country.name.ilike(ilike), Country.slug.ilike(ilike)))
    return qs.order_by(Country.name.asc()).all()


def get_country(db: Session, country_id: int) -> Country:
    country = db.get(Country, country_id)
    if not country:
        raise NotFoundError("Country not found")
    return country


def create_country(db: Session, data: CountryIn) -> Country:
    name = _required(data.name, "name")
    slug = require_slug(name)

    country = Country(name=name, slug=slug)
    db.add(country)
    commit_or_raise(db, Country, "country", {"name": name, "slug": slug}, context=f"create {slug!r}")
    log.info("created country %s (%s)", country.slug, country.id)
    return country


def update_country(db: Session, country_id: int, data: CountryIn) -> Country:
    name = _required(data.name, "name")
    slug = require_slug(name)
    country = get_country(db, country_id)

    country.name = name
    country.slug = slug
    commit_or_raise(
        db, Country, "country", {"name": name, "slug": slug},
        exclude_id=country_id, context=f"update {country_id}",
    )
    db.refresh(country)
    log.info("updated country %s (%s)", country.slug, country.id)
    return country


def delete_country(db: Session, country_id: int) -> None:
    country = get_country(db, country_id)
    city_count = db.query(func.count(City.id)).filter(City.country_id == country_id).scalar()
    if city_count:
        raise ConflictError(
            f'Cannot delete country "{country.name}" because it has {city_count} '
            "associated cities; remove them first."
        )
    db.delete(country)
    commit_or_raise(db, Country, "country", context=f"delete {country_id}")
    log.info("deleted country %s (%s)", country.slug, country_id)


# ---------------------------
# Cities
# ---------------------------
def list_cities(
    db: Session,
    search: Optional[str] = None,
    country_id: Optional[int] = None,
) -> list[City]:
    qs = db.query(City).join(City.country)
    if country_id is not None:
        qs = qs.filter(City.country_id == country_id)
    if search and search.strip():
        ilike = _like(search)
        qs = qs.filter(
            or_(City.name.ilike(ilike), City.slug.ilike(ilike), Country.name.ilike(ilike))
        )
    return qs.order_by(City.name.asc(), Country.name.asc()).all()


def get_city(db: Session, city_id: int) -> City:
    city = db.get(City, city_id)
    if not city:
        raise NotFoundError("City not found")
    return city


def _country_for_city(db: Session, country_id: int) -> Country:
    country = db.get(Country, country_id)
    if not country:
        raise ValidationError("Specified countryId not found")
    return country


def create_city(db: Session, data: CityIn) -> City:
    name = _required(data.name, "name")
    country = _country_for_city(db, data.country_id)
    slug = city_slug(name, country.name)

    city = City(
        name=name,
        slug=slug,
        country_id=country.id,
        latitude=data.latitude,
        longitude=data.longitude,
    )
    db.add(city)
    commit_or_raise(
        db, City, "city", {"name": name, "country_id": country.id, "slug": slug},
        context=f"create {slug!r}",
    )
    log.info("created city %s (%s)", city.slug, city.id)
    return city


def sync_route_countries(db: Session, city: City) -> int:
    """Rewrite the denormalized country ids of every route touching `city`."""
    changed = db.execute(
        update(Route)
        .where(Route.departure_city_id == city.id)
        .values(departure_country_id=city.country_id)
    ).rowcount
    changed += db.execute(
        update(Route)
        .where(Route.destination_city_id == city.id)
        .values(destination_country_id=city.country_id)
    ).rowcount
    return changed


def update_city(db: Session, city_id: int, data: CityIn) -> City:
    name = _required(data.name, "name")
    city = get_city(db, city_id)
    country = _country_for_city(db, data.country_id)
    slug = city_slug(name, country.name)
    reparented = city.country_id != country.id

    city.name = name
    city.slug = slug
    city.country_id = country.id
    city.latitude = data.latitude
    city.longitude = data.longitude

    values = {"name": name, "country_id": country.id, "slug": slug}
    if reparented:
        flush_or_raise(db, City, "city", values, exclude_id=city_id, context=f"move {city_id}")
        # same transaction as the city write: routes never see the old country
        synced = sync_route_countries(db, city)
        log.info("city %s moved to country %s, %s route refs synced", city_id, country.id, synced)

    commit_or_raise(db, City, "city", values, exclude_id=city_id, context=f"update {city_id}")
    db.refresh(city)
    log.info("updated city %s (%s)", city.slug, city.id)
    return city


def delete_city(db: Session, city_id: int) -> None:
    city = get_city(db, city_id)
    route_count = (
        db.query(func.count(Route.id))
        .filter(or_(Route.departure_city_id == city_id, Route.destination_city_id == city_id))
        .scalar()
    )
    if route_count:
        raise ConflictError(
            f'Cannot delete city "{city.name}" because it is used in {route_count} routes; '
            "remove them first."
        )
    hotel_count = db.query(func.count(Hotel.id)).filter(Hotel.city_id == city_id).scalar()
    if hotel_count:
        raise ConflictError(
            f'Cannot delete city "{city.name}" because it has {hotel_count} hotels; '
            "remove them first."
        )
    db.delete(city)
    commit_or_raise(db, City, "city", context=f"delete {city_id}")
    log.info("deleted city %s (%s)", city.slug, city_id)


# ---------------------------
# Routes
# ---------------------------
def list_routes(db: Session, search: Optional[str] = None) -> list[Route]:
    qs = db.query(Route)
    if search and search.strip():
        ilike = _like(search)
        dep = aliased(City)
        dest = aliased(City)
        qs = (
            qs.join(dep, Route.departure_city_id == dep.id)
            .join(dest, Route.destination_city_id == dest.id)
            .filter(
                or_(
                    Route.display_name.ilike(ilike),
                    Route.route_slug.ilike(ilike),
                    dep.name.ilike(ilike),
                    dest.name.ilike(ilike),
                )
            )
        )
    return qs.order_by(Route.display_name.asc()).all()


def get_route(db: Session, route_id: int) -> Route:
    route = db.get(Route, route_id)
    if not route:
        raise NotFoundError("Route not found")
    return route


def get_route_by_slug(db: Session, slug: str) -> Route:
    route = db.query(Route).filter(Route.route_slug == slug).first()
    if not route:
        raise NotFoundError("Route not found")
    return route


def default_display_name(departure: City, destination: City) -> str:
    if departure.country_id == destination.country_id:
        return f"Shuttles from {departure.name} to {destination.name}, {departure.country.name}"
    return (
        f"Shuttles from {departure.name}, {departure.country.name} "
        f"to {destination.name}, {destination.country.name}"
    )


def _route_cities(db: Session, data: RouteIn) -> tuple[City, City]:
    if data.departure_city_id == data.destination_city_id:
        raise ValidationError("Departure and destination cities cannot be the same.")
    departure = db.get(City, data.departure_city_id)
    destination = db.get(City, data.destination_city_id)
    if not departure or not destination:
        raise ValidationError("Invalid departure or destination city ID")
    return departure, destination


def _load_all(db: Session, model, ids: list[int], field: str) -> list:
    wanted = sorted(set(ids))
    if not wanted:
        return []
    rows = db.query(model).filter(model.id.in_(wanted)).all()
    missing = sorted(set(wanted) - {r.id for r in rows})
    if missing:
        raise ValidationError(f"Unknown {field}: {', '.join(str(i) for i in missing)}")
    return rows


def _apply_route_fields(
    db: Session,
    route: Route,
    data: RouteIn,
    departure: City,
    destination: City,
) -> None:
    route.departure_city_id = departure.id
    route.destination_city_id = destination.id
    route.departure_country_id = departure.country_id
    route.destination_country_id = destination.country_id

    route.display_name = _optional(data.display_name) or default_display_name(departure, destination)
    route.viator_widget_code = _required(data.viator_widget_code, "viatorWidgetCode")

    route.meta_title = _optional(data.meta_title)
    route.meta_description = _optional(data.meta_description)
    route.meta_keywords = _optional(data.meta_keywords)
    route.seo_description = _optional(data.seo_description)

    route.is_airport_pickup = data.is_airport_pickup
    route.is_airport_dropoff = data.is_airport_dropoff
    route.is_city_to_city = data.is_city_to_city
    route.is_private_driver = data.is_private_driver
    route.is_sightseeing_shuttle = data.is_sightseeing_shuttle

    route.other_stops = _optional(data.other_stops)
    route.travel_time = _optional(data.travel_time)
    route.additional_instructions = _optional(data.additional_instructions)
    route.map_waypoints = data.map_waypoints
    route.possible_nearby_stops = data.possible_nearby_stops
    route.viator_destination_link = _optional(data.viator_destination_link)

    route.amenities = _load_all(db, Amenity, data.amenity_ids, "amenityIds")
    route.hotels_served = _load_all(db, Hotel, data.hotel_ids, "hotelIds")


def create_route(db: Session, data: RouteIn) -> Route:
    _required(data.viator_widget_code, "viatorWidgetCode")
    departure, destination = _route_cities(db, data)
    slug = route_slug(departure.slug, destination.slug)

    route = Route(route_slug=slug)
    _apply_route_fields(db, route, data, departure, destination)
    db.add(route)
    commit_or_raise(db, Route, "route", {"route_slug": slug}, context=f"create {slug!r}")
    log.info("created route %s (%s)", route.route_slug, route.id)
    return route


def update_route(db: Session, route_id: int, data: RouteIn) -> Route:
    _required(data.viator_widget_code, "viatorWidgetCode")
    route = get_route(db, route_id)
    departure, destination = _route_cities(db, data)

    slug = route_slug(departure.slug, destination.slug)
    same_pair = (route.departure_city_id, route.destination_city_id) == (departure.id, destination.id)
    if same_pair and COPY_SUFFIX.sub("", route.route_slug) == slug:
        # a duplicate keeps its copyN slug while it still serves the same pair
        slug = route.route_slug

    route.route_slug = slug
    _apply_route_fields(db, route, data, departure, destination)
    commit_or_raise(
        db, Route, "route", {"route_slug": slug},
        exclude_id=route_id, context=f"update {route_id}",
    )
    db.refresh(route)
    log.info("updated route %s (%s)", route.route_slug, route.id)
    return route


def delete_route(db: Session, route_id: int) -> None:
    route = get_route(db, route_id)
    slug = route.route_slug
    # link rows in route_amenities / route_hotels go with it
    db.delete(route)
    commit_or_raise(db, Route, "route", context=f"delete {route_id}")
    log.info("deleted route %s (%s)", slug, route_id)


# ---------------------------
# Lookups used by the route form
# ---------------------------
def list_amenities(db: Session) -> list[Amenity]:
    return db.query(Amenity).order_by(Amenity.name.asc()).all()


def create_amenity(db: Session, data: AmenityIn) -> Amenity:
    name = _required(data.name, "name")
    amenity = Amenity(name=name)
    db.add(amenity)
    commit_or_raise(db, Amenity, "amenity", {"name": name}, context=f"create {name!r}")
    return amenity


def list_hotels(db: Session, city_id: Optional[int] = None) -> list[Hotel]:
    qs = db.query(Hotel)
    if city_id is not None:
        qs = qs.filter(Hotel.city_id == city_id)
    return qs.order_by(Hotel.name.asc()).all()


def create_hotel(db: Session, data: HotelIn) -> Hotel:
    name = _required(data.name, "name")
    if not db.get(City, data.city_id):
        raise ValidationError("Specified cityId not found")
    hotel = Hotel(name=name, city_id=data.city_id, link=_optional(data.link))
    db.add(hotel)
    commit_or_raise(
        db, Hotel, "hotel", {"name": name, "city_id": data.city_id}, context=f"create {name!r}"
    )
    return hotel
