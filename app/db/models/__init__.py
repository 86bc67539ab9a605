# app/db/models/__init__.py
from .user import User
from .country import Country
from .city import City
from .amenity import Amenity
from .hotel import Hotel
from .associations import route_amenities, route_hotels
from .route import Route
