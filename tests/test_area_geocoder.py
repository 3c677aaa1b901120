"""Tests for area geocoding (city anchor plus area-name hash offset)."""

import sys
from pathlib import Path

import pytest

_backend_root = Path(__file__).resolve().parent.parent
if str(_backend_root) not in sys.path:
    sys.path.insert(0, str(_backend_root))

from models import Coordinate
from api.services.area_geocoder import (
    DEFAULT_ANCHOR,
    DEFAULT_CITY_ANCHORS,
    CityAnchors,
    HashAreaGeocoder,
    LookupAreaGeocoder,
    area_name_hash,
    area_offset,
    resolve_area_coordinate,
)


AREA_NAMES = [
    "",
    "X",
    "Gulberg",
    "DHA Phase 6",
    "Bahria Town",
    "F-7/2",
    "Clifton Block 5",
    "Hayatabad",
    "ماڈل ٹاؤن",
    "z" * 200,
]


def test_area_name_hash_is_code_point_sum():
    assert area_name_hash("") == 0
    assert area_name_hash("X") == 88
    assert area_name_hash("Gulberg") == 712


def test_anagrams_collide():
    assert area_name_hash("abc") == area_name_hash("cab")
    assert area_offset("abc") == area_offset("cab")


def test_resolve_is_deterministic():
    for area in AREA_NAMES:
        first = resolve_area_coordinate("Lahore", area)
        second = resolve_area_coordinate("Lahore", area)
        assert first == second
        assert first.latitude == second.latitude
        assert first.longitude == second.longitude


@pytest.mark.parametrize("area", AREA_NAMES)
def test_offsets_stay_in_documented_range(area):
    lat_offset, lng_offset = area_offset(area)
    assert -0.25 <= lat_offset <= 0.245 + 1e-12
    assert -0.18 - 1e-12 <= lng_offset <= 0.18 + 1e-12


def test_offset_range_is_reached_at_extremes():
    lat_values = set()
    lng_values = set()
    for code in range(32, 32 + 200):
        lat, lng = area_offset(chr(code))
        lat_values.add(round(lat, 6))
        lng_values.add(round(lng, 6))
    assert min(lat_values) == pytest.approx(-0.25)
    assert max(lat_values) == pytest.approx(0.245)
    assert min(lng_values) == pytest.approx(-0.18)
    assert max(lng_values) == pytest.approx(0.18)


def test_known_city_uses_its_anchor():
    coordinate = resolve_area_coordinate("Lahore", "Gulberg")
    assert coordinate.latitude == pytest.approx(31.5204 - 0.19)
    assert coordinate.longitude == pytest.approx(74.3587 + 0.095)


def test_unknown_city_falls_back_to_national_centroid():
    coordinate = resolve_area_coordinate("UnknownVille", "X")
    # hash("X") = 88 -> lat (88 - 50) * 0.005, lng (88 % 73 - 36) * 0.005
    assert coordinate.latitude == pytest.approx(DEFAULT_ANCHOR.latitude + 0.19)
    assert coordinate.longitude == pytest.approx(DEFAULT_ANCHOR.longitude - 0.105)
    assert DEFAULT_ANCHOR == Coordinate(latitude=30.3753, longitude=69.3451)


def test_empty_area_sits_at_fixed_offset():
    coordinate = resolve_area_coordinate("Karachi", "")
    assert coordinate.latitude == pytest.approx(24.8607 - 0.25)
    assert coordinate.longitude == pytest.approx(67.0011 - 0.18)


def test_city_anchors_are_immutable():
    with pytest.raises(TypeError):
        DEFAULT_CITY_ANCHORS.anchors["Karachi"] = DEFAULT_ANCHOR
    assert "Karachi" in DEFAULT_CITY_ANCHORS.cities
    assert len(DEFAULT_CITY_ANCHORS.cities) == 8


def test_injected_anchors_replace_defaults():
    anchors = CityAnchors(
        anchors={"Gwadar": Coordinate(latitude=25.1216, longitude=62.3254)},
        default=Coordinate(latitude=0.0, longitude=0.0),
    )
    geocoder = HashAreaGeocoder(anchors)

    gwadar = geocoder.resolve_area_coordinate("Gwadar", "X")
    assert gwadar.latitude == pytest.approx(25.1216 + 0.19)

    lahore = geocoder.resolve_area_coordinate("Lahore", "X")
    assert lahore.latitude == pytest.approx(0.19)
    assert lahore.longitude == pytest.approx(-0.105)


def test_lookup_geocoder_prefers_known_coordinates():
    known = Coordinate(latitude=31.5497, longitude=74.3436)
    geocoder = LookupAreaGeocoder({("Lahore", "Mall Road"): known})

    assert geocoder.resolve_area_coordinate("Lahore", "Mall Road") == known
    assert geocoder.resolve_area_coordinate(
        "Lahore", "Gulberg"
    ) == resolve_area_coordinate("Lahore", "Gulberg")
    assert resolve_area_coordinate("Lahore", "Mall Road", geocoder) == known
