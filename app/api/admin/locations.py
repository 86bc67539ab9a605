# app/api/admin/locations.py
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.deps import get_db, read_payload
from app.schemas.location import LocationIn, LocationOut
from app.services.locations import resolve_location
from app.web.auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(prefix="/locations", tags=["admin: locations"], dependencies=[Depends(require_admin)])


@router.post("/find-or-create", response_model=LocationOut)
async def find_or_create(request: Request, db: Session = Depends(get_db)):
    """
    Resolve free-text {cityName, countryName} to a City, creating the
    country and/or city when missing. Repeating the call returns the same id.
    """
    payload = await read_payload(request, LocationIn)
    city = resolve_location(db, payload.city_name, payload.country_name)
    log.info("location %r resolved to city %s for %s", payload.city_name, city.id, request.state.principal.email)
    return city
