"""Tests for spot (point of interest) endpoints."""


def test_list_spots_with_filters(client, make_spot):
    make_spot(name="Beaconhouse School")
    make_spot(name="Hameed Latif Hospital", category="healthcare")
    make_spot(name="Metro Station", category="transport", city="Islamabad", area="F-7")

    assert len(client.get("/api/spots/").json()) == 3
    data = client.get("/api/spots/", params={"city": "Lahore", "category": "healthcare"}).json()
    assert [s["name"] for s in data] == ["Hameed Latif Hospital"]
    assert client.get("/api/spots/", params={"category": "casino"}).status_code == 422


def test_create_spot_requires_sign_in(client):
    payload = {"name": "Emporium Mall", "category": "retail", "city": "Lahore", "area": "Johar Town"}
    assert client.post("/api/spots/", json=payload).status_code == 401

    response = client.post("/api/spots/", json=payload, headers={"X-User-Id": "admin"})
    assert response.status_code == 201
    assert response.json()["category"] == "retail"
    assert response.json()["latitude"] is None


def test_neighborhood_groups_area_spots(client, make_spot):
    make_spot(name="School A")
    make_spot(name="School B")
    make_spot(name="Clinic", category="healthcare")
    make_spot(name="Far Away", area="DHA")

    data = client.get("/api/spots/neighborhood", params={"city": "Lahore", "area": "Gulberg"}).json()
    assert data["scope"] == "area"
    assert data["total"] == 3
    assert sorted(s["name"] for s in data["spots"]["education"]) == ["School A", "School B"]
    assert [s["name"] for s in data["spots"]["healthcare"]] == ["Clinic"]


def test_neighborhood_falls_back_to_city_spots(client, make_spot):
    for i in range(10):
        make_spot(name=f"Spot {i}", area="DHA", category="retail")

    data = client.get(
        "/api/spots/neighborhood", params={"city": "Lahore", "area": "Model Town"}
    ).json()
    assert data["scope"] == "city"
    assert data["total"] == 8
    assert len(data["spots"]["retail"]) == 8
