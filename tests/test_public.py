from app.core.config import settings
from tests.fixtures_seed import create_route


def _seed_routes(admin_client, cities):
    return [
        create_route(admin_client, cities["sjo"], cities["tamarindo"]),
        create_route(admin_client, cities["sjo"], cities["liberia"]),
        create_route(admin_client, cities["liberia"], cities["granada"]),
    ]


def test_valid_destinations_sorted_and_unique(admin_client, cities):
    routes = _seed_routes(admin_client, cities)
    admin_client.post(f"/api/admin/routes/{routes[0]['id']}/duplicate")

    r = admin_client.get("/api/valid-destinations", params={"departureCityId": cities["sjo"].id})
    assert r.status_code == 200
    assert [c["name"] for c in r.json()] == ["Liberia", "Tamarindo"]

    r = admin_client.get("/api/valid-destinations", params={"departureCityId": cities["granada"].id})
    assert r.json() == []


def test_valid_destinations_requires_departure(client):
    r = client.get("/api/valid-destinations")
    assert r.status_code == 400
    assert "departureCityId" in r.json()["error"]


def test_departure_locations(admin_client, cities):
    _seed_routes(admin_client, cities)

    r = admin_client.get("/api/locations")
    assert r.status_code == 200
    body = r.json()
    assert [c["name"] for c in body] == ["Costa Rica"]
    assert [c["name"] for c in body[0]["cities"]] == ["Liberia", "San Jose"]


def test_public_route_detail(admin_client, cities, wifi):
    route = create_route(admin_client, cities["sjo"], cities["tamarindo"], amenityIds=[wifi.id])

    r = admin_client.get(f"/api/routes/{route['routeSlug']}")
    assert r.status_code == 200
    body = r.json()
    assert body["displayName"] == route["displayName"]
    assert body["departureCity"]["latitude"] == 9.93
    assert body["destinationCity"]["country"]["name"] == "Costa Rica"
    assert body["amenities"] == [{"id": wifi.id, "name": "Wi-Fi"}]

    r = admin_client.get("/api/routes/nowhere-to-nowhere")
    assert r.status_code == 404
    assert r.json() == {"error": "Route not found"}


def test_search_redirect_to_existing_route(admin_client, cities):
    routes = _seed_routes(admin_client, cities)
    r = admin_client.post(
        "/search-redirect",
        data={"departureCityId": str(cities["sjo"].id), "destinationCityId": str(cities["tamarindo"].id)},
        follow_redirects=False,
    )
    assert r.status_code == 302
    assert r.headers["location"] == f"/routes/{routes[0]['routeSlug']}"


def test_search_redirect_constructs_slug_when_no_route(client, cities):
    r = client.post(
        "/search-redirect",
        data={"departureCityId": str(cities["granada"].id), "destinationCityId": str(cities["sjo"].id)},
        follow_redirects=False,
    )
    assert r.status_code == 302
    assert r.headers["location"] == "/routes/granada-nicaragua-to-san-jose-costa-rica"


def test_search_redirect_errors(client, cities):
    r = client.post("/search-redirect", data={"departureCityId": str(cities["sjo"].id)}, follow_redirects=False)
    assert r.status_code == 400

    r = client.post(
        "/search-redirect",
        data={"departureCityId": str(cities["sjo"].id), "destinationCityId": "999"},
        follow_redirects=False,
    )
    assert r.status_code == 404


def test_pages_render(admin_client, cities):
    route = _seed_routes(admin_client, cities)[0]

    home = admin_client.get("/")
    assert home.status_code == 200
    assert "San Jose" in home.text

    page = admin_client.get(f"/routes/{route['routeSlug']}")
    assert page.status_code == 200
    assert route["displayName"] in page.text
    assert 'property="og:image"' in page.text

    assert admin_client.get("/routes/nowhere").status_code == 404

    assert "Costa Rica" in admin_client.get("/countries").text
    country = admin_client.get("/countries/costa-rica")
    assert country.status_code == 200
    assert route["displayName"] in country.text
    assert admin_client.get("/countries/atlantis").status_code == 404


def test_sitemap(admin_client, cities):
    route = _seed_routes(admin_client, cities)[0]
    base = settings.SITE_URL.rstrip("/")

    r = admin_client.get("/sitemap.xml")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/xml")
    xml = r.text
    assert f"<loc>{base}/</loc>" in xml
    assert f"<loc>{base}/countries/costa-rica</loc>" in xml
    assert f"<loc>{base}/countries/nicaragua</loc>" in xml
    assert f"<loc>{base}/routes/{route['routeSlug']}</loc>" in xml
    assert xml.count("<url>") == 1 + 2 + 3
    assert "<priority>1.0</priority>" in xml and "<changefreq>daily</changefreq>" in xml
    assert xml.count("<priority>0.9</priority>") == 3
    assert xml.count("<priority>0.8</priority>") == 2


def test_robots_points_at_sitemap(client):
    r = client.get("/robots.txt")
    assert r.status_code == 200
    assert f"Sitemap: {settings.SITE_URL.rstrip('/')}/sitemap.xml" in r.text


def test_social_preview(admin_client, cities):
    route = create_route(admin_client, cities["sjo"], cities["tamarindo"], metaDescription="Door to door shuttle")

    r = admin_client.get(f"/social-preview/{route['routeSlug']}")
    assert r.status_code == 200
    assert 'name="twitter:card" content="summary_large_image"' in r.text
    assert f"res.cloudinary.com/{settings.CLOUDINARY_CLOUD_NAME}" in r.text
    assert "Door to door shuttle" in r.text

    r = admin_client.get("/social-preview/nowhere")
    assert r.status_code == 404
    assert r.json() == {"error": "Route not found"}


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
