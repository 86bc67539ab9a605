from datetime import datetime
from app.schemas.common import CamelModel
from app.schemas.country import CountryRef


class CityIn(CamelModel):
    name: str
    country_id: int
    latitude: float | None = None
    longitude: float | None = None


class CityRef(CamelModel):
    id: int
    name: str
    slug: str


class CityWithCountry(CityRef):
    country: CountryRef


class CityOut(CityWithCountry):
    country_id: int
    latitude: float | None = None
    longitude: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
