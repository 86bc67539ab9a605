from sqlalchemy import Column, ForeignKey, Table
from app.db.mixins import Base

# Route <-> Amenity
route_amenities = Table(
    "route_amenities",
    Base.metadata,
    Column("route_id", ForeignKey("routes.id", ondelete="CASCADE"), primary_key=True),
    Column("amenity_id", ForeignKey("amenities.id", ondelete="CASCADE"), primary_key=True),
)

# Route <-> Hotel ("hotels served")
route_hotels = Table(
    "route_hotels",
    Base.metadata,
    Column("route_id", ForeignKey("routes.id", ondelete="CASCADE"), primary_key=True),
    Column("hotel_id", ForeignKey("hotels.id", ondelete="CASCADE"), primary_key=True),
)
