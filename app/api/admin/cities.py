# app/api/admin/cities.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.core.deps import get_db, read_payload
from app.schemas.city import CityIn, CityOut
from app.services import catalog
from app.web.auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(prefix="/cities", tags=["admin: cities"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[CityOut])
def list_cities(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, description="Match city or country name"),
    country_id: Optional[int] = Query(None, alias="countryId"),
):
    return catalog.list_cities(db, search, country_id)


@router.post("", response_model=CityOut, status_code=status.HTTP_201_CREATED)
async def create_city(request: Request, db: Session = Depends(get_db)):
    payload = await read_payload(request, CityIn)
    city = catalog.create_city(db, payload)
    log.info("city %s created by %s", city.id, request.state.principal.email)
    return city


@router.get("/{city_id}", response_model=CityOut)
def get_city(city_id: int, db: Session = Depends(get_db)):
    return catalog.get_city(db, city_id)


@router.put("/{city_id}", response_model=CityOut)
async def update_city(city_id: int, request: Request, db: Session = Depends(get_db)):
    """
    Moving a city to another country also rewrites the country ids stored
    on its routes.
    """
    payload = await read_payload(request, CityIn)
    city = catalog.update_city(db, city_id, payload)
    log.info("city %s updated by %s", city_id, request.state.principal.email)
    return city


@router.delete("/{city_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_city(city_id: int, request: Request, db: Session = Depends(get_db)):
    catalog.delete_city(db, city_id)
    log.info("city %s deleted by %s", city_id, request.state.principal.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
