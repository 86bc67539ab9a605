from __future__ import annotations
from typing import List
from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.mixins import Base, CreatedUpdatedMixin


class Country(CreatedUpdatedMixin, Base):
    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), nullable=False)

    # no cascade: deleting a country with cities is refused
    cities: Mapped[List["City"]] = relationship(
        "City",
        back_populates="country",
        order_by="City.name",
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_countries_name"),
        UniqueConstraint("slug", name="uq_countries_slug"),
    )

    def __repr__(self) -> str:
        return f"<Country {self.id} {self.slug!r}>"
