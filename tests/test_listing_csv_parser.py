"""Tests for the listing CSV parser (used by scripts/import_listings.py)."""

import sys
from pathlib import Path

import pytest

_backend_root = Path(__file__).resolve().parent.parent
if str(_backend_root) not in sys.path:
    sys.path.insert(0, str(_backend_root))

from api.services.listing_csv_parser import parse_listings_csv
from models import parse_price


_LISTINGS_CSV_STR = (
    "Title, City, Area, Price, Property_Type, Listing_Type, Size_Value, Size_Unit, Bedrooms, Amenities\n"
    "10 Marla House,Lahore,DHA Phase 6,\"PKR 4,50,00,000\",House,Sale,10,Marla,4,Parking;Gas; Security\n"
    "Studio Apartment,Karachi,Clifton,85000,apartment,rent,650,sqft,,\n"
    "Broken Price,Lahore,Gulberg,call me,house,sale,5,marla,3,\n"
    "Unknown Type,Lahore,Gulberg,1000000,castle,sale,5,marla,3,\n"
)
LISTINGS_CSV = _LISTINGS_CSV_STR.encode("utf-8")


def test_parse_listings_csv_returns_valid_rows():
    listings = parse_listings_csv(LISTINGS_CSV)

    assert len(listings) == 2
    house, studio = listings
    assert house["title"] == "10 Marla House"
    assert house["price"] == 45_000_000
    assert house["property_type"] == "house"
    assert house["listing_type"] == "sale"
    assert house["size_value"] == 10.0
    assert house["size_unit"] == "marla"
    assert house["bedrooms"] == 4
    assert house["amenities"] == ["Parking", "Gas", "Security"]
    assert house["price_unit"] == "total"

    assert studio["city"] == "Karachi"
    assert studio["bedrooms"] is None
    assert studio["amenities"] == []


def test_parse_listings_csv_latin1_fallback():
    content = (
        "title,city,area,price,property_type,listing_type,size_value,size_unit\n"
        "Caf\xe9 Shop,Lahore,Mall Road,12000000,commercial,sale,2,marla\n"
    ).encode("latin-1")
    listings = parse_listings_csv(content)
    assert listings[0]["title"] == "Caf\xe9 Shop"


def test_parse_listings_csv_missing_columns_raises():
    bad_csv = b"title,city\nHouse,Lahore\n"
    with pytest.raises(ValueError, match="Missing required columns"):
        parse_listings_csv(bad_csv)


def test_parse_price():
    assert parse_price("PKR 1,20,00,000") == 12_000_000
    assert parse_price("Rs. 85000") == 85_000
    assert parse_price("") is None
    assert parse_price("on request") is None
    assert parse_price(None) is None


def test_parse_listings_csv_skips_non_positive_or_non_finite_sizes():
    content = (
        "title,city,area,price,property_type,listing_type,size_value,size_unit\n"
        "NaN Size,Lahore,Gulberg,1000000,plot,sale,nan,marla\n"
        "Inf Size,Lahore,Gulberg,1000000,plot,sale,inf,marla\n"
        "Zero Size,Lahore,Gulberg,1000000,plot,sale,0,marla\n"
        "Negative Size,Lahore,Gulberg,1000000,plot,sale,-5,marla\n"
        "Good Plot,Lahore,Gulberg,1000000,plot,sale,5,marla\n"
    ).encode("utf-8")
    listings = parse_listings_csv(content)
    assert [listing["title"] for listing in listings] == ["Good Plot"]
