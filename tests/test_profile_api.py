"""Tests for the caller's profile endpoints."""


def test_profile_requires_sign_in(client):
    assert client.get("/api/profile/").status_code == 401
    assert client.put("/api/profile/", json={"full_name": "Ayesha"}).status_code == 401


def test_missing_profile_returns_404(client, owner_headers):
    assert client.get("/api/profile/", headers=owner_headers).status_code == 404


def test_put_creates_then_updates_profile(client, owner_headers):
    response = client.put(
        "/api/profile/",
        json={"full_name": "Ayesha Khan", "phone": "+92 300 1234567"},
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.json()["user_id"] == "owner-1"

    response = client.put("/api/profile/", json={"city": "Lahore"}, headers=owner_headers)
    data = response.json()
    assert data["city"] == "Lahore"
    assert data["full_name"] == "Ayesha Khan"

    data = client.get("/api/profile/", headers=owner_headers).json()
    assert data["phone"] == "+92 300 1234567"


def test_profile_is_shown_on_owner_listings(client, make_listing, owner_headers):
    listing = make_listing()
    client.put(
        "/api/profile/",
        json={"full_name": "Ayesha Khan", "phone": "+92 300 1234567"},
        headers=owner_headers,
    )

    owner = client.get(f"/api/listings/{listing.id}").json()["owner"]
    assert owner == {
        "user_id": "owner-1",
        "full_name": "Ayesha Khan",
        "phone": "+92 300 1234567",
    }
