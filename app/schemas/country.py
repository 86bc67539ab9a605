from datetime import datetime
from app.schemas.common import CamelModel


class CountryIn(CamelModel):
    name: str


class CountryRef(CamelModel):
    id: int
    name: str
    slug: str


class CountryOut(CountryRef):
    created_at: datetime | None = None
    updated_at: datetime | None = None
