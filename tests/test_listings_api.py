"""Tests for listing browse, detail and owner CRUD endpoints."""

from database import ProfileRepository


_NEW_LISTING = {
    "title": "1 Kanal House in DHA",
    "description": "Double storey",
    "price": 85_000_000,
    "price_unit": "total",
    "property_type": "house",
    "listing_type": "sale",
    "city": "Lahore",
    "area": "DHA Phase 6",
    "size_value": 1,
    "size_unit": "kanal",
    "bedrooms": 5,
    "bathrooms": 6,
    "amenities": ["Parking", "Lawn/Garden"],
}


def test_create_listing_requires_sign_in(client):
    response = client.post("/api/listings/", json=_NEW_LISTING)
    assert response.status_code == 401


def test_create_and_get_listing(client, owner_headers):
    response = client.post("/api/listings/", json=_NEW_LISTING, headers=owner_headers)
    assert response.status_code == 201
    created = response.json()
    assert created["user_id"] == "owner-1"
    assert created["status"] == "active"
    assert created["price_label"] == "PKR 8.50 Crore"

    response = client.get(f"/api/listings/{created['id']}")
    assert response.status_code == 200
    assert response.json()["title"] == "1 Kanal House in DHA"


def test_create_listing_rejects_unknown_unit(client, owner_headers):
    payload = dict(_NEW_LISTING, size_unit="acre")
    response = client.post("/api/listings/", json=payload, headers=owner_headers)
    assert response.status_code == 400


def test_get_missing_listing_returns_404(client):
    response = client.get("/api/listings/does-not-exist")
    assert response.status_code == 404


def test_count_view_increments_views(client, make_listing):
    listing = make_listing()
    client.get(f"/api/listings/{listing.id}", params={"count_view": True})
    response = client.get(f"/api/listings/{listing.id}", params={"count_view": True})
    assert response.json()["views"] == 2


def test_listing_includes_owner_contact(client, make_listing, db_session):
    listing = make_listing()
    ProfileRepository(db_session).upsert_profile(
        "owner-1", {"full_name": "Ayesha Khan", "phone": "+92 300 1234567"}
    )
    db_session.commit()

    owner = client.get(f"/api/listings/{listing.id}").json()["owner"]
    assert owner["full_name"] == "Ayesha Khan"
    assert owner["phone"] == "+92 300 1234567"


def test_browse_filters_and_paginates(client, make_listing):
    make_listing(title="Lahore House", price=20_000_000)
    make_listing(title="Karachi Flat", city="Karachi", area="Clifton", property_type="apartment", bedrooms=2)
    make_listing(title="Rental", listing_type="rent", price=120_000, price_unit="monthly")
    make_listing(title="Sold House", status="sold")

    data = client.get("/api/listings/").json()
    assert data["total"] == 3
    assert "Sold House" not in [item["title"] for item in data["items"]]

    data = client.get("/api/listings/", params={"city": "Karachi"}).json()
    assert [item["title"] for item in data["items"]] == ["Karachi Flat"]

    data = client.get("/api/listings/", params={"city": "all", "listing_type": "rent"}).json()
    assert [item["title"] for item in data["items"]] == ["Rental"]
    assert data["items"][0]["price_label"] == "PKR 1.20 Lac/month"

    data = client.get("/api/listings/", params={"search": "clifton"}).json()
    assert data["total"] == 1

    data = client.get("/api/listings/", params={"min_price": 1_000_000, "max_price": 21_000_000}).json()
    assert [item["title"] for item in data["items"]] == ["Lahore House"]

    data = client.get("/api/listings/", params={"min_bedrooms": 3}).json()
    assert data["total"] == 2

    data = client.get("/api/listings/", params={"page": 2, "page_size": 2}).json()
    assert data["total"] == 3
    assert data["total_pages"] == 2
    assert len(data["items"]) == 1


def test_featured_listings_come_first(client, make_listing):
    make_listing(title="Plain")
    make_listing(title="Featured", featured=True)
    make_listing(title="Newest")

    titles = [item["title"] for item in client.get("/api/listings/").json()["items"]]
    assert titles[0] == "Featured"


def test_options(client):
    data = client.get("/api/listings/options").json()
    assert "Lahore" in data["cities"]
    assert {"value": "rent", "label": "For Rent"} in data["listing_types"]
    assert "Parking" in data["amenities"]


def test_mine_lists_only_callers_listings(client, make_listing, owner_headers):
    make_listing(title="Mine")
    make_listing(title="Also Mine", status="inactive")
    make_listing(user_id="someone-else", title="Theirs")

    response = client.get("/api/listings/mine", headers=owner_headers)
    assert response.status_code == 200
    assert sorted(item["title"] for item in response.json()) == ["Also Mine", "Mine"]


def test_update_listing_owner_only(client, make_listing, owner_headers):
    listing = make_listing()

    response = client.patch(
        f"/api/listings/{listing.id}",
        json={"price": 24_000_000},
        headers={"X-User-Id": "intruder"},
    )
    assert response.status_code == 403

    response = client.patch(
        f"/api/listings/{listing.id}",
        json={"price": 24_000_000, "status": "sold"},
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.json()["price"] == 24_000_000
    assert response.json()["status"] == "sold"
    assert response.json()["title"] == "3 Bed House in Gulberg"


def test_delete_listing_owner_only(client, make_listing, owner_headers):
    listing = make_listing()

    response = client.delete(f"/api/listings/{listing.id}", headers={"X-User-Id": "intruder"})
    assert response.status_code == 403

    response = client.delete(f"/api/listings/{listing.id}", headers=owner_headers)
    assert response.status_code == 204
    assert client.get(f"/api/listings/{listing.id}").status_code == 404


def test_update_listing_rejects_null_required_fields(client, make_listing, owner_headers):
    listing = make_listing()

    response = client.patch(
        f"/api/listings/{listing.id}", json={"price": None}, headers=owner_headers
    )
    assert response.status_code == 400
    assert "price" in response.json()["detail"]

    response = client.patch(
        f"/api/listings/{listing.id}",
        json={"title": None, "city": None},
        headers=owner_headers,
    )
    assert response.status_code == 400
    assert "title" in response.json()["detail"]
    assert "city" in response.json()["detail"]

    data = client.get(f"/api/listings/{listing.id}").json()
    assert data["price"] == 25_000_000
    assert data["title"] == "3 Bed House in Gulberg"


def test_update_listing_allows_clearing_optional_fields(client, make_listing, owner_headers):
    listing = make_listing(address="12 Main Boulevard")
    response = client.patch(
        f"/api/listings/{listing.id}",
        json={"address": None, "bedrooms": None},
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.json()["address"] is None
    assert response.json()["bedrooms"] is None
