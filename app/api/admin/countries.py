# app/api/admin/countries.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.core.deps import get_db, read_payload
from app.schemas.country import CountryIn, CountryOut
from app.services import catalog
from app.web.auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(prefix="/countries", tags=["admin: countries"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[CountryOut])
def list_countries(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, description="Match name or slug"),
):
    return catalog.list_countries(db, search)


@router.post("", response_model=CountryOut, status_code=status.HTTP_201_CREATED)
async def create_country(request: Request, db: Session = Depends(get_db)):
    payload = await read_payload(request, CountryIn)
    country = catalog.create_country(db, payload)
    log.info("country %s created by %s", country.id, request.state.principal.email)
    return country


@router.get("/{country_id}", response_model=CountryOut)
def get_country(country_id: int, db: Session = Depends(get_db)):
    return catalog.get_country(db, country_id)


@router.put("/{country_id}", response_model=CountryOut)
async def update_country(country_id: int, request: Request, db: Session = Depends(get_db)):
    payload = await read_payload(request, CountryIn)
    country = catalog.update_country(db, country_id, payload)
    log.info("country %s updated by %s", country_id, request.state.principal.email)
    return country


@router.delete("/{country_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_country(country_id: int, request: Request, db: Session = Depends(get_db)):
    """Refused with 409 while the country still has cities."""
    catalog.delete_country(db, country_id)
    log.info("country %s deleted by %s", country_id, request.state.principal.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
