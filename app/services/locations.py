# app/services/locations.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, StorageError, ValidationError
from app.db.models.city import City
from app.db.models.country import Country
from app.services.slugs import city_slug, require_slug

log = logging.getLogger(__name__)


def _clean(value: str | None, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"Missing required field: {field}")
    return value


def resolve_location(db: Session, city_name: str | None, country_name: str | None) -> City:
    """
    Find or create the (city, country) pair and return the City.

    - the Country is matched by slug and reused unchanged when present
    - the City is matched by (name, country), then by slug within the country
      (so "San José" finds "San Jose"), and reused unchanged when present;
      a new City starts without coordinates
    - both writes share one transaction, so a failure leaves neither row behind

    Calling it twice with the same names returns the same City.
    """
    city_name = _clean(city_name, "cityName")
    country_name = _clean(country_name, "countryName")

    country_slug = require_slug(country_name, "countryName")
    new_city_slug = city_slug(city_name, country_name)

    try:
        country = db.query(Country).filter(Country.slug == country_slug).first()
        if country is None:
            country = Country(name=country_name, slug=country_slug)
            db.add(country)
            db.flush()
            log.info("find-or-create: created country %s (%s)", country.slug, country.id)

        city = (
            db.query(City)
            .filter(City.name == city_name, City.country_id == country.id)
            .first()
        )
        if city is None:
            # accent/case variants of an existing name share its slug
            city = db.query(City).filter(City.slug == new_city_slug).first()
            if city is not None and city.country_id != country.id:
                taken_by = city.name
                db.rollback()
                raise ConflictError(
                    f"City slug {new_city_slug!r} is already used by {taken_by} "
                    "in another country."
                )
        if city is None:
            city = City(
                name=city_name,
                slug=new_city_slug,
                country_id=country.id,
                latitude=None,
                longitude=None,
            )
            db.add(city)
            db.flush()
            log.info("find-or-create: created city %s (%s)", city.slug, city.id)

        db.commit()
    except IntegrityError as e:
        db.rollback()
        log.warning("find-or-create race for %r/%r: %s", city_name, country_name, e.orig)
        raise ConflictError(
            f"Location {city_name}, {country_name} was created concurrently. Please retry."
        ) from e
    except SQLAlchemyError as e:
        db.rollback()
        log.exception("find-or-create failed for %r/%r", city_name, country_name)
        raise StorageError("Failed to find or create location in database") from e

    return city
