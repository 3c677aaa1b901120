"""
Map layer service: places listings, spots and per-area heat zones on the map.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from models import Coordinate, Listing, PointOfInterest, ZoneType
from api.schemas import HeatLegend, HeatOverlay, ListingMarker, MapBounds, SpotMarker
from api.services.area_geocoder import AreaGeocoder, default_geocoder
from api.services.formatting import format_price_compact
from api.services.heatmap import (
    DEFAULT_HEATMAP_CONFIG,
    PLACEHOLDER_NOTE,
    HeatmapConfig,
    estimate_heat_intensity,
    is_placeholder_zone,
    listings_in_area,
    map_intensity_to_color,
    mean_price,
)

CATEGORY_COLORS = {
    "education": "#3b82f6",
    "healthcare": "#ef4444",
    "retail": "#f59e0b",
    "transport": "#22c55e",
}
DEFAULT_SPOT_COLOR = "#6b7280"

# Overlay circle radius in pixels: base + intensity * scale
OVERLAY_BASE_RADIUS = 30
OVERLAY_RADIUS_SCALE = 20

# Markers sharing an area are nudged apart by the first character of their ID
LISTING_NUDGE_STEP = 0.002
SPOT_NUDGE_STEP = 0.001


def _id_nudge(item_id: str, modulus: int, step: float) -> float:
    if not item_id:
        return 0.0
    return (ord(item_id[0]) % modulus - modulus // 2) * step


def collect_areas(
    listings: Iterable[Listing], spots: Iterable[PointOfInterest]
) -> List[str]:
    """Unique area names in first-seen order, listings before spots."""
    seen: Dict[str, None] = {}
    for item in list(listings) + list(spots):
        seen.setdefault(item.area, None)
    return list(seen)


def area_city(
    area: str,
    listings: Sequence[Listing],
    spots: Sequence[PointOfInterest],
    selected_city: str,
) -> str:
    """City an area belongs to: first listing's, else first spot's, else the selected city."""
    for item in list(listings) + list(spots):
        if item.area == area:
            return item.city
    return selected_city


def build_heat_overlays(
    listings: Sequence[Listing],
    spots: Sequence[PointOfInterest],
    selected_city: str,
    zone: ZoneType,
    geocoder: AreaGeocoder = default_geocoder,
    config: HeatmapConfig = DEFAULT_HEATMAP_CONFIG,
) -> List[HeatOverlay]:
    """One heat zone circle per area found in listings or spots."""
    zone = ZoneType(zone)
    placeholder = is_placeholder_zone(zone)
    overlays = []

    for area in collect_areas(listings, spots):
        city = area_city(area, listings, spots, selected_city)
        intensity = estimate_heat_intensity(listings, spots, area, zone, config)
        area_listings = listings_in_area(listings, area)

        avg_price = None
        avg_price_label = None
        if zone == ZoneType.PRICE and area_listings:
            avg = mean_price(area_listings)
            avg_price = int(round(avg))
            avg_price_label = f"PKR {format_price_compact(avg)}"

        overlays.append(
            HeatOverlay(
                area=area,
                city=city,
                center=geocoder.resolve_area_coordinate(city, area),
                intensity=intensity,
                color=map_intensity_to_color(intensity, zone, config),
                radius=OVERLAY_BASE_RADIUS + intensity * OVERLAY_RADIUS_SCALE,
                listing_count=len(area_listings),
                avg_price=avg_price,
                avg_price_label=avg_price_label,
                is_placeholder=placeholder,
            )
        )

    return overlays


def place_listing_markers(
    listings: Iterable[Listing], geocoder: AreaGeocoder = default_geocoder
) -> List[ListingMarker]:
    """Listing markers at their area coordinate, nudged apart by ID."""
    markers = []
    for listing in listings:
        base = geocoder.resolve_area_coordinate(listing.city, listing.area)
        nudge = _id_nudge(listing.id, 10, LISTING_NUDGE_STEP)
        markers.append(
            ListingMarker(
                id=listing.id,
                position=Coordinate(
                    latitude=base.latitude + nudge, longitude=base.longitude + nudge
                ),
                title=listing.title,
                price=listing.price,
                price_label=f"PKR {format_price_compact(listing.price)}",
                property_type=listing.property_type,
                listing_type=listing.listing_type,
                bedrooms=listing.bedrooms,
                bathrooms=listing.bathrooms,
            )
        )
    return markers


def place_spot_markers(
    spots: Iterable[PointOfInterest],
    category: Optional[str] = None,
    geocoder: AreaGeocoder = default_geocoder,
) -> List[SpotMarker]:
    """Spot markers at their own coordinates when known, else at their area coordinate."""
    markers = []
    for spot in spots:
        spot_category = getattr(spot.category, "value", spot.category)
        if category and spot_category != category:
            continue
        if spot.latitude is not None and spot.longitude is not None:
            base = Coordinate(latitude=spot.latitude, longitude=spot.longitude)
        else:
            base = geocoder.resolve_area_coordinate(spot.city, spot.area)
        nudge = _id_nudge(spot.id, 20, SPOT_NUDGE_STEP)
        markers.append(
            SpotMarker(
                id=spot.id,
                position=Coordinate(
                    latitude=base.latitude + nudge, longitude=base.longitude + nudge
                ),
                name=spot.name,
                category=spot_category,
                color=CATEGORY_COLORS.get(spot_category, DEFAULT_SPOT_COLOR),
                area=spot.area,
                city=spot.city,
            )
        )
    return markers


def compute_bounds(coordinates: Iterable[Coordinate]) -> Optional[MapBounds]:
    """Bounding box of the coordinates, None when there are none."""
    coordinates = list(coordinates)
    if not coordinates:
        return None
    lats = [c.latitude for c in coordinates]
    lngs = [c.longitude for c in coordinates]
    return MapBounds(north=max(lats), south=min(lats), east=max(lngs), west=min(lngs))


def legend_for_zone(
    zone: ZoneType, config: HeatmapConfig = DEFAULT_HEATMAP_CONFIG
) -> HeatLegend:
    """Palette of the zone, low to high."""
    zone = ZoneType(zone)
    placeholder = is_placeholder_zone(zone)
    return HeatLegend(
        zone_type=zone,
        colors=list(config.palettes[zone]),
        is_placeholder=placeholder,
        note=PLACEHOLDER_NOTE if placeholder else None,
    )
