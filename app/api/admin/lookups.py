# app/api/admin/lookups.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.core.deps import get_db, read_payload
from app.schemas.lookups import AmenityIn, AmenityOut, HotelIn, HotelOut
from app.services import catalog
from app.web.auth import require_admin

router = APIRouter(tags=["admin: lookups"], dependencies=[Depends(require_admin)])


@router.get("/amenities", response_model=List[AmenityOut])
def list_amenities(db: Session = Depends(get_db)):
    return catalog.list_amenities(db)


@router.post("/amenities", response_model=AmenityOut, status_code=status.HTTP_201_CREATED)
async def create_amenity(request: Request, db: Session = Depends(get_db)):
    payload = await read_payload(request, AmenityIn)
    return catalog.create_amenity(db, payload)


@router.get("/hotels", response_model=List[HotelOut])
def list_hotels(
    db: Session = Depends(get_db),
    city_id: Optional[int] = Query(None, alias="cityId"),
):
    return catalog.list_hotels(db, city_id)


@router.post("/hotels", response_model=HotelOut, status_code=status.HTTP_201_CREATED)
async def create_hotel(request: Request, db: Session = Depends(get_db)):
    payload = await read_payload(request, HotelIn)
    return catalog.create_hotel(db, payload)
