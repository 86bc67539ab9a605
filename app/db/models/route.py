from __future__ import annotations
from typing import Any, List, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.mixins import Base, CreatedUpdatedMixin
from app.db.models.associations import route_amenities, route_hotels


class Route(CreatedUpdatedMixin, Base):
    __tablename__ = "routes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    departure_city_id: Mapped[int] = mapped_column(
        ForeignKey("cities.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    destination_city_id: Mapped[int] = mapped_column(
        ForeignKey("cities.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    # denormalized from the cities; written only through services.catalog
    departure_country_id: Mapped[int] = mapped_column(
        ForeignKey("countries.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    destination_country_id: Mapped[int] = mapped_column(
        ForeignKey("countries.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    route_slug: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    viator_widget_code: Mapped[str] = mapped_column(Text, nullable=False)

    meta_title: Mapped[Optional[str]] = mapped_column(String(255))
    meta_description: Mapped[Optional[str]] = mapped_column(Text)
    meta_keywords: Mapped[Optional[str]] = mapped_column(Text)
    seo_description: Mapped[Optional[str]] = mapped_column(Text)

    is_airport_pickup: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_airport_dropoff: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_city_to_city: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_private_driver: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_sightseeing_shuttle: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    other_stops: Mapped[Optional[str]] = mapped_column(Text)
    travel_time: Mapped[Optional[str]] = mapped_column(String(100))
    additional_instructions: Mapped[Optional[str]] = mapped_column(Text)
    map_waypoints: Mapped[Optional[Any]] = mapped_column(JSON)
    possible_nearby_stops: Mapped[Optional[Any]] = mapped_column(JSON)
    viator_destination_link: Mapped[Optional[str]] = mapped_column(String(500))

    # Relationships
    departure_city = relationship(
        "City", foreign_keys=[departure_city_id], back_populates="routes_from", lazy="joined"
    )
    destination_city = relationship(
        "City", foreign_keys=[destination_city_id], back_populates="routes_to", lazy="joined"
    )
    departure_country = relationship("Country", foreign_keys=[departure_country_id])
    destination_country = relationship("Country", foreign_keys=[destination_country_id])

    amenities: Mapped[List["Amenity"]] = relationship(
        "Amenity", secondary=route_amenities, lazy="selectin", order_by="Amenity.name"
    )
    hotels_served: Mapped[List["Hotel"]] = relationship(
        "Hotel", secondary=route_hotels, lazy="selectin", order_by="Hotel.name"
    )

    __table_args__ = (
        UniqueConstraint("route_slug", name="uq_routes_route_slug"),
    )

    @property
    def amenity_ids(self) -> list[int]:
        return [a.id for a in self.amenities]

    @property
    def hotel_ids(self) -> list[int]:
        return [h.id for h in self.hotels_served]

    def __repr__(self) -> str:
        return f"<Route {self.id} {self.route_slug!r}>"
