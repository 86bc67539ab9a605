from app.db.models.city import City
from app.db.models.country import Country
from tests.fixtures_seed import add_city

URL = "/api/admin/locations/find-or-create"


def test_creates_country_and_city(admin_client, db_session):
    r = admin_client.post(URL, json={"cityName": "Puerto Viejo", "countryName": "Costa Rica"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert set(body) == {"id", "name", "slug"}
    assert body["name"] == "Puerto Viejo"
    assert body["slug"] == "puerto-viejo-costa-rica"

    city = db_session.get(City, body["id"])
    assert city.latitude is None and city.longitude is None
    assert city.country.slug == "costa-rica"


def test_is_idempotent(admin_client, db_session):
    payload = {"cityName": "Puerto Viejo", "countryName": "Costa Rica"}
    first = admin_client.post(URL, json=payload).json()
    second = admin_client.post(URL, json=payload).json()
    assert first == second
    assert db_session.query(Country).count() == 1
    assert db_session.query(City).count() == 1


def test_trims_and_reuses_country_by_slug(admin_client, costa_rica, db_session):
    r = admin_client.post(URL, json={"cityName": "  Nosara ", "countryName": " costa rica "})
    assert r.status_code == 200
    assert r.json()["name"] == "Nosara"

    assert db_session.query(Country).count() == 1
    db_session.refresh(costa_rica)
    assert costa_rica.name == "Costa Rica"


def test_existing_city_is_returned_unchanged(admin_client, costa_rica, db_session):
    city = add_city(db_session, costa_rica, "San Jose", "san-jose-costa-rica", 9.93, -84.08)

    r = admin_client.post(URL, json={"cityName": "San Jose", "countryName": "Costa Rica"})
    assert r.status_code == 200
    assert r.json()["id"] == city.id

    db_session.refresh(city)
    assert (city.latitude, city.longitude) == (9.93, -84.08)


def test_same_city_name_in_other_country_is_a_new_city(admin_client, cities):
    r = admin_client.post(URL, json={"cityName": "San Jose", "countryName": "Nicaragua"})
    assert r.status_code == 200
    assert r.json()["id"] != cities["sjo"].id
    assert r.json()["slug"] == "san-jose-nicaragua"


def test_accent_and_case_variants_reuse_existing_city(admin_client, cities, db_session):
    before = db_session.query(City).count()

    r = admin_client.post(URL, json={"cityName": "San José", "countryName": "Costa Rica"})
    assert r.status_code == 200, r.text
    assert r.json()["id"] == cities["sjo"].id
    assert r.json()["name"] == "San Jose"

    r = admin_client.post(URL, json={"cityName": "tamarindo", "countryName": "costa rica"})
    assert r.status_code == 200, r.text
    assert r.json()["id"] == cities["tamarindo"].id

    assert db_session.query(City).count() == before


def test_slug_owned_by_other_country_is_a_conflict(admin_client, cities, db_session):
    # "San Jose Costa" in "Rica" slugs to the San Jose, Costa Rica slug
    r = admin_client.post(URL, json={"cityName": "San Jose Costa", "countryName": "Rica"})
    assert r.status_code == 409
    assert "san-jose-costa-rica" in r.json()["error"]
    assert "concurrently" not in r.json()["error"]

    # the new country was rolled back with the city
    assert db_session.query(Country).filter(Country.slug == "rica").count() == 0


def test_missing_fields(admin_client, db_session):
    r = admin_client.post(URL, json={"countryName": "Costa Rica"})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required field: cityName"}

    r = admin_client.post(URL, json={"cityName": "Tamarindo", "countryName": "   "})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required field: countryName"}

    assert db_session.query(Country).count() == 0


def test_unsluggable_country_name(admin_client, db_session):
    r = admin_client.post(URL, json={"cityName": "Tamarindo", "countryName": "???"})
    assert r.status_code == 400
    assert db_session.query(City).count() == 0
