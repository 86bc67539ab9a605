from tests.fixtures_seed import create_route, route_payload


def test_create_route_defaults(admin_client, cities):
    body = create_route(admin_client, cities["sjo"], cities["tamarindo"])
    assert body["routeSlug"] == "san-jose-costa-rica-to-tamarindo-costa-rica"
    assert body["displayName"] == "Shuttles from San Jose to Tamarindo, Costa Rica"
    assert body["departureCountryId"] == body["destinationCountryId"] == cities["sjo"].country_id
    assert body["departureCity"]["country"]["slug"] == "costa-rica"
    assert body["isAirportPickup"] is False
    assert body["amenityIds"] == [] and body["hotelIds"] == []


def test_cross_border_display_name(admin_client, cities):
    body = create_route(admin_client, cities["liberia"], cities["granada"])
    assert body["displayName"] == "Shuttles from Liberia, Costa Rica to Granada, Nicaragua"
    assert body["destinationCountryId"] == cities["granada"].country_id


def test_create_route_with_all_fields(admin_client, cities, wifi):
    hotel = admin_client.post(
        "/api/admin/hotels", json={"name": "Hotel Tamarindo Diria", "cityId": cities["tamarindo"].id}
    ).json()
    body = create_route(
        admin_client,
        cities["sjo"],
        cities["tamarindo"],
        displayName="SJO airport to Tamarindo",
        metaTitle="SJO to Tamarindo shuttle",
        isAirportPickup=True,
        travelTime="5 hours",
        mapWaypoints=[{"lat": 9.99, "lng": -84.2}],
        possibleNearbyStops=["Playa Grande", "Playa Flamingo"],
        amenityIds=[wifi.id],
        hotelIds=[hotel["id"]],
    )
    assert body["displayName"] == "SJO airport to Tamarindo"
    assert body["isAirportPickup"] is True
    assert body["mapWaypoints"] == [{"lat": 9.99, "lng": -84.2}]
    assert body["amenityIds"] == [wifi.id]
    assert body["hotelIds"] == [hotel["id"]]


def test_same_departure_and_destination(admin_client, cities):
    r = admin_client.post("/api/admin/routes", json=route_payload(cities["sjo"], cities["sjo"]))
    assert r.status_code == 400
    assert "cannot be the same" in r.json()["error"]


def test_unknown_city(admin_client, cities):
    payload = route_payload(cities["sjo"], cities["tamarindo"])
    payload["destinationCityId"] = 999
    r = admin_client.post("/api/admin/routes", json=payload)
    assert r.status_code == 400


def test_unknown_amenity(admin_client, cities):
    r = admin_client.post(
        "/api/admin/routes", json=route_payload(cities["sjo"], cities["tamarindo"], amenityIds=[42])
    )
    assert r.status_code == 400
    assert "amenityIds" in r.json()["error"]


def test_viator_widget_code_is_required(admin_client, cities):
    payload = route_payload(cities["sjo"], cities["tamarindo"])
    del payload["viatorWidgetCode"]
    r = admin_client.post("/api/admin/routes", json=payload)
    assert r.status_code == 400
    assert "viatorWidgetCode" in r.json()["error"]

    payload["viatorWidgetCode"] = "   "
    r = admin_client.post("/api/admin/routes", json=payload)
    assert r.status_code == 400


def test_duplicate_city_pair_conflicts_on_slug(admin_client, cities):
    create_route(admin_client, cities["sjo"], cities["tamarindo"])
    r = admin_client.post("/api/admin/routes", json=route_payload(cities["sjo"], cities["tamarindo"]))
    assert r.status_code == 409
    assert "routeSlug" in r.json()["error"]


def test_list_search_and_get(admin_client, cities):
    a = create_route(admin_client, cities["sjo"], cities["tamarindo"])
    create_route(admin_client, cities["liberia"], cities["granada"])

    names = [r["displayName"] for r in admin_client.get("/api/admin/routes").json()]
    assert names == sorted(names)

    found = admin_client.get("/api/admin/routes", params={"search": "granada"}).json()
    assert [r["routeSlug"] for r in found] == ["liberia-costa-rica-to-granada-nicaragua"]

    r = admin_client.get(f"/api/admin/routes/{a['id']}")
    assert r.status_code == 200
    assert r.json()["routeSlug"] == a["routeSlug"]
    assert admin_client.get("/api/admin/routes/999").status_code == 404


def test_update_rederives_slug(admin_client, cities):
    route = create_route(admin_client, cities["sjo"], cities["tamarindo"])

    r = admin_client.put(
        f"/api/admin/routes/{route['id']}",
        json=route_payload(cities["sjo"], cities["liberia"], travelTime="4 hours"),
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["routeSlug"] == "san-jose-costa-rica-to-liberia-costa-rica"
    assert body["travelTime"] == "4 hours"


def test_update_keeps_copy_slug_for_same_pair(admin_client, cities):
    route = create_route(admin_client, cities["sjo"], cities["tamarindo"])
    copy = admin_client.post(f"/api/admin/routes/{route['id']}/duplicate").json()

    r = admin_client.put(
        f"/api/admin/routes/{copy['newRouteId']}",
        json=route_payload(cities["sjo"], cities["tamarindo"], displayName="Private shuttle SJO to Tamarindo"),
    )
    assert r.status_code == 200, r.text
    assert r.json()["routeSlug"] == copy["newRouteSlug"]
    assert r.json()["displayName"] == "Private shuttle SJO to Tamarindo"


def test_update_route_amenities(admin_client, cities, wifi):
    route = create_route(admin_client, cities["sjo"], cities["tamarindo"], amenityIds=[wifi.id])

    r = admin_client.put(
        f"/api/admin/routes/{route['id']}",
        json=route_payload(cities["sjo"], cities["tamarindo"], amenityIds=[]),
    )
    assert r.status_code == 200
    assert r.json()["amenityIds"] == []


def test_delete_route(admin_client, cities, wifi):
    route = create_route(admin_client, cities["sjo"], cities["tamarindo"], amenityIds=[wifi.id])

    assert admin_client.delete(f"/api/admin/routes/{route['id']}").status_code == 204
    assert admin_client.get(f"/api/admin/routes/{route['id']}").status_code == 404
    assert admin_client.delete(f"/api/admin/routes/{route['id']}").status_code == 404
    # the amenity itself survives
    assert [a["name"] for a in admin_client.get("/api/admin/amenities").json()] == ["Wi-Fi"]


def test_amenity_and_hotel_lookups(admin_client, cities):
    assert admin_client.post("/api/admin/amenities", json={"name": "Wi-Fi"}).status_code == 201
    assert admin_client.post("/api/admin/amenities", json={"name": "Wi-Fi"}).status_code == 409

    r = admin_client.post("/api/admin/hotels", json={"name": "Casa Chameleon", "cityId": 999})
    assert r.status_code == 400

    admin_client.post("/api/admin/hotels", json={"name": "Casa Chameleon", "cityId": cities["tamarindo"].id})
    hotels = admin_client.get("/api/admin/hotels", params={"cityId": cities["tamarindo"].id}).json()
    assert [h["name"] for h in hotels] == ["Casa Chameleon"]
    assert admin_client.get("/api/admin/hotels", params={"cityId": cities["sjo"].id}).json() == []
