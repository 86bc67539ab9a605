# app/api/admin/api.py
from fastapi import APIRouter

from app.api.admin import cities, countries, locations, lookups, routes

router = APIRouter(prefix="/api/admin")
router.include_router(countries.router)
router.include_router(cities.router)
router.include_router(routes.router)
router.include_router(locations.router)
router.include_router(lookups.router)
