"""
Area geocoding: (city, area) -> map coordinate.

Listings and spots only carry a city and an area name, so areas are placed at a
stable pseudo-location around the city center until real geocoding data exists.
Callers depend on the AreaGeocoder protocol so a lookup table or a geocoding
service can replace the hash placement without changes on their side.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Protocol, Tuple

from models import Coordinate

# Approximate national centroid of Pakistan, used for cities without an anchor
DEFAULT_ANCHOR = Coordinate(latitude=30.3753, longitude=69.3451)

OFFSET_STEP_DEGREES = 0.005
LAT_MODULUS = 100
LAT_CENTER = 50
LNG_MODULUS = 73
LNG_CENTER = 36


def _frozen(table: Mapping) -> Mapping:
    return MappingProxyType(dict(table))


@dataclass(frozen=True)
class CityAnchors:
    """Immutable table of city-center coordinates."""

    anchors: Mapping[str, Coordinate] = field(default_factory=dict)
    default: Coordinate = DEFAULT_ANCHOR

    def __post_init__(self):
        object.__setattr__(self, "anchors", _frozen(self.anchors))

    def anchor_for(self, city: Optional[str]) -> Coordinate:
        """City center, or the default anchor for an unknown city."""
        if city is None:
            return self.default
        return self.anchors.get(city, self.default)

    @property
    def cities(self) -> Tuple[str, ...]:
        return tuple(self.anchors.keys())


DEFAULT_CITY_ANCHORS = CityAnchors(
    anchors={
        "Karachi": Coordinate(latitude=24.8607, longitude=67.0011),
        "Lahore": Coordinate(latitude=31.5204, longitude=74.3587),
        "Islamabad": Coordinate(latitude=33.6844, longitude=73.0479),
        "Rawalpindi": Coordinate(latitude=33.5651, longitude=73.0169),
        "Faisalabad": Coordinate(latitude=31.4504, longitude=73.1350),
        "Multan": Coordinate(latitude=30.1575, longitude=71.5249),
        "Peshawar": Coordinate(latitude=34.0151, longitude=71.5249),
        "Quetta": Coordinate(latitude=30.1798, longitude=66.9750),
    }
)


def area_name_hash(area: str) -> int:
    """Sum of the code points of every character in the area name.

    Anagrams collide; only stability matters here.
    """
    return sum(ord(char) for char in area)


def area_offset(area: str) -> Tuple[float, float]:
    """(lat, lng) offset in degrees for an area name.

    Latitude lies in [-0.25, 0.245], longitude in [-0.18, 0.18]. The moduli
    differ so the two axes do not move together.
    """
    h = area_name_hash(area)
    lat_offset = ((h % LAT_MODULUS) - LAT_CENTER) * OFFSET_STEP_DEGREES
    lng_offset = ((h % LNG_MODULUS) - LNG_CENTER) * OFFSET_STEP_DEGREES
    return lat_offset, lng_offset


class AreaGeocoder(Protocol):
    """Anything that can place an area on the map."""

    def resolve_area_coordinate(self, city: str, area: str) -> Coordinate:
        ...


class HashAreaGeocoder:
    """Places an area at its city anchor plus a deterministic hash offset."""

    def __init__(self, city_anchors: CityAnchors = DEFAULT_CITY_ANCHORS):
        self.city_anchors = city_anchors

    def resolve_area_coordinate(self, city: str, area: str) -> Coordinate:
        anchor = self.city_anchors.anchor_for(city)
        lat_offset, lng_offset = area_offset(area or "")
        return Coordinate(
            latitude=anchor.latitude + lat_offset,
            longitude=anchor.longitude + lng_offset,
        )


class LookupAreaGeocoder:
    """Resolves areas from a known-coordinates table, delegating misses."""

    def __init__(
        self,
        known: Mapping[Tuple[str, str], Coordinate],
        fallback: Optional[AreaGeocoder] = None,
    ):
        self.known = _frozen(known)
        self.fallback = fallback or HashAreaGeocoder()

    def resolve_area_coordinate(self, city: str, area: str) -> Coordinate:
        coordinate = self.known.get((city, area))
        if coordinate is not None:
            return coordinate
        return self.fallback.resolve_area_coordinate(city, area)


default_geocoder = HashAreaGeocoder()


def resolve_area_coordinate(
    city: str, area: str, geocoder: Optional[AreaGeocoder] = None
) -> Coordinate:
    """Resolve (city, area) with the given geocoder, or the hash placement."""
    return (geocoder or default_geocoder).resolve_area_coordinate(city, area)
