from tests.fixtures_seed import add_city, create_route


def test_create_city(admin_client, costa_rica):
    r = admin_client.post(
        "/api/admin/cities",
        json={"name": "Tamarindo", "countryId": costa_rica.id, "latitude": 10.29, "longitude": -85.84},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["slug"] == "tamarindo-costa-rica"
    assert body["countryId"] == costa_rica.id
    assert body["country"] == {"id": costa_rica.id, "name": "Costa Rica", "slug": "costa-rica"}
    assert body["latitude"] == 10.29


def test_create_city_unknown_country(admin_client):
    r = admin_client.post("/api/admin/cities", json={"name": "Tamarindo", "countryId": 999})
    assert r.status_code == 400
    assert r.json() == {"error": "Specified countryId not found"}


def test_create_city_missing_country_id(admin_client):
    r = admin_client.post("/api/admin/cities", json={"name": "Tamarindo"})
    assert r.status_code == 400
    assert "countryId" in r.json()["error"]


def test_duplicate_city_in_same_country(admin_client, costa_rica):
    payload = {"name": "Tamarindo", "countryId": costa_rica.id}
    assert admin_client.post("/api/admin/cities", json=payload).status_code == 201

    r = admin_client.post("/api/admin/cities", json=payload)
    assert r.status_code == 409
    assert "name" in r.json()["error"]


def test_same_name_in_different_countries(admin_client, costa_rica, nicaragua):
    a = admin_client.post("/api/admin/cities", json={"name": "San Juan", "countryId": costa_rica.id})
    b = admin_client.post("/api/admin/cities", json={"name": "San Juan", "countryId": nicaragua.id})
    assert a.status_code == b.status_code == 201
    assert a.json()["slug"] != b.json()["slug"]


def test_list_filters_by_country(admin_client, cities, nicaragua):
    names = [c["name"] for c in admin_client.get("/api/admin/cities").json()]
    assert names == ["Granada", "Liberia", "San Jose", "Tamarindo"]

    only_nic = admin_client.get("/api/admin/cities", params={"countryId": nicaragua.id}).json()
    assert [c["name"] for c in only_nic] == ["Granada"]

    found = admin_client.get("/api/admin/cities", params={"search": "tama"}).json()
    assert [c["slug"] for c in found] == ["tamarindo-costa-rica"]


def test_update_city_rederives_slug(admin_client, cities, costa_rica):
    city = cities["liberia"]
    r = admin_client.put(
        f"/api/admin/cities/{city.id}",
        json={"name": "Liberia Centro", "countryId": costa_rica.id, "latitude": 10.63, "longitude": -85.44},
    )
    assert r.status_code == 200
    assert r.json()["slug"] == "liberia-centro-costa-rica"
    assert r.json()["longitude"] == -85.44


def test_moving_city_syncs_route_countries(admin_client, cities, nicaragua):
    route = create_route(admin_client, cities["sjo"], cities["liberia"])
    assert route["destinationCountryId"] == cities["liberia"].country_id

    r = admin_client.put(
        f"/api/admin/cities/{cities['liberia'].id}",
        json={"name": "Liberia", "countryId": nicaragua.id},
    )
    assert r.status_code == 200
    assert r.json()["slug"] == "liberia-nicaragua"

    route = admin_client.get(f"/api/admin/routes/{route['id']}").json()
    assert route["destinationCountryId"] == nicaragua.id
    assert route["departureCountryId"] == cities["sjo"].country_id


def test_moving_city_onto_existing_name_is_a_conflict(admin_client, db_session, cities, costa_rica, nicaragua):
    add_city(db_session, costa_rica, "Granada", "granada-costa-rica")
    route = create_route(admin_client, cities["sjo"], cities["granada"])

    r = admin_client.put(
        f"/api/admin/cities/{cities['granada'].id}",
        json={"name": "Granada", "countryId": costa_rica.id},
    )
    assert r.status_code == 409, r.text
    assert "name" in r.json()["error"]

    # nothing from the failed move was kept
    route = admin_client.get(f"/api/admin/routes/{route['id']}").json()
    assert route["destinationCountryId"] == nicaragua.id
    city = admin_client.get(f"/api/admin/cities/{cities['granada'].id}").json()
    assert city["countryId"] == nicaragua.id
    assert city["slug"] == "granada-nicaragua"


def test_delete_city_used_by_route_is_refused(admin_client, cities):
    create_route(admin_client, cities["sjo"], cities["tamarindo"])

    r = admin_client.delete(f"/api/admin/cities/{cities['tamarindo'].id}")
    assert r.status_code == 409
    assert "routes" in r.json()["error"]


def test_delete_city_with_hotels_is_refused(admin_client, cities):
    hotel = admin_client.post(
        "/api/admin/hotels", json={"name": "Hotel Capitán Suizo", "cityId": cities["tamarindo"].id}
    )
    assert hotel.status_code == 201

    r = admin_client.delete(f"/api/admin/cities/{cities['tamarindo'].id}")
    assert r.status_code == 409
    assert "hotels" in r.json()["error"]


def test_delete_city(admin_client, cities):
    r = admin_client.delete(f"/api/admin/cities/{cities['granada'].id}")
    assert r.status_code == 204
    assert admin_client.get(f"/api/admin/cities/{cities['granada'].id}").status_code == 404
