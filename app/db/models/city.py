from __future__ import annotations
from typing import List, Optional
from sqlalchemy import Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.mixins import Base, CreatedUpdatedMixin


class City(CreatedUpdatedMixin, Base):
    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(240), nullable=False)

    country_id: Mapped[int] = mapped_column(
        ForeignKey("countries.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    country: Mapped["Country"] = relationship("Country", back_populates="cities", lazy="joined")

    routes_from: Mapped[List["Route"]] = relationship(
        "Route",
        foreign_keys="Route.departure_city_id",
        back_populates="departure_city",
    )
    routes_to: Mapped[List["Route"]] = relationship(
        "Route",
        foreign_keys="Route.destination_city_id",
        back_populates="destination_city",
    )
    hotels: Mapped[List["Hotel"]] = relationship("Hotel", back_populates="city")

    __table_args__ = (
        UniqueConstraint("name", "country_id", name="uq_cities_name_country"),
        UniqueConstraint("slug", name="uq_cities_slug"),
    )

    def __repr__(self) -> str:
        return f"<City {self.id} {self.slug!r}>"
