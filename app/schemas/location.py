from app.schemas.common import CamelModel
from app.schemas.city import CityRef


class LocationIn(CamelModel):
    # presence and blankness are checked by the resolver
    city_name: str | None = None
    country_name: str | None = None


class LocationOut(CityRef):
    """Only id/name/slug: coordinates are edited later through the city form."""


class DepartureCountry(CamelModel):
    id: int
    name: str
    slug: str
    cities: list[CityRef]
