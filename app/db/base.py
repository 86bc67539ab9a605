from app.db.mixins import Base   # ✅ import Base from mixins

# Import all models so Alembic can detect them
from app.db.models.user import User
from app.db.models.country import Country
from app.db.models.city import City
from app.db.models.amenity import Amenity
from app.db.models.hotel import Hotel
from app.db.models.route import Route
