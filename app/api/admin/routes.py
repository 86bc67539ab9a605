# app/api/admin/routes.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.core.deps import get_db, read_payload
from app.schemas.route import RouteDuplicateIn, RouteDuplicateOut, RouteIn, RouteOut
from app.services import catalog
from app.services.route_copies import duplicate_route
from app.web.auth import require_admin

log = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["admin: routes"], dependencies=[Depends(require_admin)])


def _duplicated(route) -> RouteDuplicateOut:
    return RouteDuplicateOut(new_route_id=route.id, new_route_slug=route.route_slug)


@router.get("", response_model=List[RouteOut])
def list_routes(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, description="Match display name, slug or city names"),
):
    return catalog.list_routes(db, search)


@router.post("", response_model=RouteOut, status_code=status.HTTP_201_CREATED)
async def create_route(request: Request, db: Session = Depends(get_db)):
    payload = await read_payload(request, RouteIn)
    route = catalog.create_route(db, payload)
    log.info("route %s created by %s", route.route_slug, request.state.principal.email)
    return route


@router.post("/duplicate", response_model=RouteDuplicateOut, status_code=status.HTTP_201_CREATED)
async def duplicate_route_from_body(request: Request, db: Session = Depends(get_db)):
    """Body form: {"routeId": 12}."""
    payload = await read_payload(request, RouteDuplicateIn)
    route = duplicate_route(db, payload.route_id)
    log.info("route %s duplicated by %s", payload.route_id, request.state.principal.email)
    return _duplicated(route)


@router.get("/{route_id}", response_model=RouteOut)
def get_route(route_id: int, db: Session = Depends(get_db)):
    return catalog.get_route(db, route_id)


@router.put("/{route_id}", response_model=RouteOut)
async def update_route(route_id: int, request: Request, db: Session = Depends(get_db)):
    payload = await read_payload(request, RouteIn)
    route = catalog.update_route(db, route_id, payload)
    log.info("route %s updated by %s", route_id, request.state.principal.email)
    return route


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_route(route_id: int, request: Request, db: Session = Depends(get_db)):
    catalog.delete_route(db, route_id)
    log.info("route %s deleted by %s", route_id, request.state.principal.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{route_id}/duplicate", response_model=RouteDuplicateOut, status_code=status.HTTP_201_CREATED)
def duplicate_route_by_id(route_id: int, request: Request, db: Session = Depends(get_db)):
    route = duplicate_route(db, route_id)
    log.info("route %s duplicated by %s", route_id, request.state.principal.email)
    return _duplicated(route)
