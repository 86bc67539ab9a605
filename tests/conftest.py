import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Import Base + all models so metadata is complete
from app.db.mixins import Base
import app.db.models  # noqa: F401

from app.main import app
from app.core.deps import get_db
from app.core.security import ADMIN_ROLE, create_system_token, hash_password
from app.db.models.amenity import Amenity
from app.db.models.country import Country
from app.db.models.user import User
from app.web.auth import COOKIE_NAME, SYSTEM_HEADER_NAME
from tests.fixtures_seed import ADMIN_EMAIL, ADMIN_PASSWORD, add_city, session_cookie


@pytest.fixture
def engine():
    # one shared in-memory connection per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """
    HTTP client that uses the test DB session via dependency override.
    """
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    # no `with`: the lifespan would run create_all against the configured DATABASE_URL
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(db_session):
    user = User(
        email=ADMIN_EMAIL,
        password_hash=hash_password(ADMIN_PASSWORD),
        role=ADMIN_ROLE,
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def regular_user(db_session):
    user = User(
        email="traveller@bookshuttles.com",
        password_hash=hash_password("traveller-pw"),
        role="USER",
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin_client(client, admin_user):
    client.cookies.set(COOKIE_NAME, session_cookie(admin_user))
    return client


@pytest.fixture
def system_headers():
    return {SYSTEM_HEADER_NAME: create_system_token("ops@bookshuttles.com")}


# ---- seed helpers ----

@pytest.fixture
def costa_rica(db_session):
    country = Country(name="Costa Rica", slug="costa-rica")
    db_session.add(country)
    db_session.commit()
    return country


@pytest.fixture
def nicaragua(db_session):
    country = Country(name="Nicaragua", slug="nicaragua")
    db_session.add(country)
    db_session.commit()
    return country


@pytest.fixture
def cities(db_session, costa_rica, nicaragua):
    return {
        "sjo": add_city(db_session, costa_rica, "San Jose", "san-jose-costa-rica", 9.93, -84.08),
        "tamarindo": add_city(db_session, costa_rica, "Tamarindo", "tamarindo-costa-rica", 10.29, -85.84),
        "liberia": add_city(db_session, costa_rica, "Liberia", "liberia-costa-rica"),
        "granada": add_city(db_session, nicaragua, "Granada", "granada-nicaragua"),
    }


@pytest.fixture
def wifi(db_session):
    amenity = Amenity(name="Wi-Fi")
    db_session.add(amenity)
    db_session.commit()
    return amenity

