from datetime import datetime
from typing import Any

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.city import CityWithCountry
from app.schemas.country import CountryRef
from app.schemas.lookups import AmenityOut


class RouteIn(CamelModel):
    departure_city_id: int
    destination_city_id: int
    viator_widget_code: str
    display_name: str | None = None

    meta_title: str | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    seo_description: str | None = None

    is_airport_pickup: bool = False
    is_airport_dropoff: bool = False
    is_city_to_city: bool = False
    is_private_driver: bool = False
    is_sightseeing_shuttle: bool = False

    other_stops: str | None = None
    travel_time: str | None = None
    additional_instructions: str | None = None
    map_waypoints: list[Any] | None = None
    possible_nearby_stops: list[Any] | None = None
    viator_destination_link: str | None = None

    amenity_ids: list[int] = Field(default_factory=list)
    hotel_ids: list[int] = Field(default_factory=list)


class RouteOut(CamelModel):
    id: int
    route_slug: str
    display_name: str

    departure_city_id: int
    destination_city_id: int
    departure_country_id: int
    destination_country_id: int
    departure_city: CityWithCountry
    destination_city: CityWithCountry

    viator_widget_code: str
    meta_title: str | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    seo_description: str | None = None

    is_airport_pickup: bool
    is_airport_dropoff: bool
    is_city_to_city: bool
    is_private_driver: bool
    is_sightseeing_shuttle: bool

    other_stops: str | None = None
    travel_time: str | None = None
    additional_instructions: str | None = None
    map_waypoints: list[Any] | None = None
    possible_nearby_stops: list[Any] | None = None
    viator_destination_link: str | None = None

    amenity_ids: list[int]
    hotel_ids: list[int]

    created_at: datetime | None = None
    updated_at: datetime | None = None


class RouteDuplicateIn(CamelModel):
    route_id: int


class RouteDuplicateOut(CamelModel):
    new_route_id: int
    new_route_slug: str


class PublicCity(CamelModel):
    id: int
    name: str
    slug: str
    latitude: float | None = None
    longitude: float | None = None
    country: CountryRef


class RoutePublicOut(CamelModel):
    """Read-only shape served to the public route page."""

    route_slug: str
    display_name: str
    viator_widget_code: str
    seo_description: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    travel_time: str | None = None
    other_stops: str | None = None
    additional_instructions: str | None = None
    map_waypoints: list[Any] | None = None
    possible_nearby_stops: list[Any] | None = None
    viator_destination_link: str | None = None
    departure_city: PublicCity
    destination_city: PublicCity
    amenities: list[AmenityOut]
