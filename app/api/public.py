# app/api/public.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.errors import ValidationError
from app.schemas.city import CityRef
from app.schemas.location import DepartureCountry
from app.schemas.route import RoutePublicOut
from app.services import catalog, search

router = APIRouter(prefix="/api", tags=["public"])


@router.get("/valid-destinations", response_model=List[CityRef])
def valid_destinations(
    db: Session = Depends(get_db),
    departure_city_id: Optional[int] = Query(None, alias="departureCityId"),
):
    """Destinations reachable from the departure city, unique and sorted by name."""
    if departure_city_id is None:
        raise ValidationError("departureCityId is required")
    return search.valid_destinations(db, departure_city_id)


@router.get("/locations", response_model=List[DepartureCountry])
def departure_locations(db: Session = Depends(get_db)):
    return search.departure_locations(db)


@router.get("/routes/{route_slug}", response_model=RoutePublicOut)
def route_detail(route_slug: str, db: Session = Depends(get_db)):
    return catalog.get_route_by_slug(db, route_slug)
