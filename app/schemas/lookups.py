from app.schemas.common import CamelModel


class AmenityIn(CamelModel):
    name: str


class AmenityOut(CamelModel):
    id: int
    name: str


class HotelIn(CamelModel):
    name: str
    city_id: int
    link: str | None = None


class HotelOut(CamelModel):
    id: int
    name: str
    city_id: int
    link: str | None = None
