"""
Heat zone computation: per-area intensity in [0, 1] for a zone type, and the
discrete palette color used to fill the area overlay.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from models import Listing, PointOfInterest, SpotCategory, ZoneType
from api.services.area_geocoder import area_name_hash

PALETTE_SIZE = 5

# safety, noise and flood have no data source yet; their values are derived
# from the area name and must be shown as placeholders
PLACEHOLDER_ZONES = frozenset({ZoneType.SAFETY, ZoneType.NOISE, ZoneType.FLOOD})
PLACEHOLDER_NOTE = "Coming soon: placeholder values, not measured data"

DEFAULT_PALETTES = {
    ZoneType.PRICE: ("#22c55e", "#84cc16", "#eab308", "#f97316", "#ef4444"),
    ZoneType.SCHOOLS: ("#fef3c7", "#fde68a", "#fcd34d", "#fbbf24", "#f59e0b"),
    ZoneType.TRANSPORT: ("#dcfce7", "#bbf7d0", "#86efac", "#4ade80", "#22c55e"),
    # red = dangerous, green = safe
    ZoneType.SAFETY: ("#ef4444", "#f97316", "#eab308", "#84cc16", "#22c55e"),
    # blue = quiet, red = noisy
    ZoneType.NOISE: ("#3b82f6", "#60a5fa", "#93c5fd", "#f97316", "#ef4444"),
    # green = low risk, cyan = high risk
    ZoneType.FLOOD: ("#22c55e", "#84cc16", "#eab308", "#06b6d4", "#0891b2"),
}


class InvalidPriceError(ValueError):
    """A listing price is not a finite number."""


@dataclass(frozen=True)
class HeatmapConfig:
    """Immutable constants for intensity estimation and coloring."""

    price_ceiling: int = 100_000_000
    no_listing_price_intensity: float = 0.2
    poi_saturation: int = 5
    # (scale, invert) applied to the area-name mock value
    mock_transforms: Mapping[ZoneType, Tuple[float, bool]] = field(
        default_factory=lambda: {
            ZoneType.SAFETY: (0.6, True),
            ZoneType.NOISE: (0.7, False),
            ZoneType.FLOOD: (0.5, False),
        }
    )
    palettes: Mapping[ZoneType, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_PALETTES)
    )

    def __post_init__(self):
        for zone, palette in self.palettes.items():
            if len(palette) != PALETTE_SIZE:
                raise ValueError(
                    f"Palette for {zone} must have {PALETTE_SIZE} colors, got {len(palette)}"
                )
        object.__setattr__(self, "mock_transforms", MappingProxyType(dict(self.mock_transforms)))
        object.__setattr__(
            self,
            "palettes",
            MappingProxyType({z: tuple(p) for z, p in self.palettes.items()}),
        )


DEFAULT_HEATMAP_CONFIG = HeatmapConfig()


def clamp_intensity(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def is_placeholder_zone(zone: ZoneType) -> bool:
    """True when the zone's values are mock data rather than measurements."""
    return ZoneType(zone) in PLACEHOLDER_ZONES


def listings_in_area(listings: Iterable[Listing], area: str) -> List[Listing]:
    return [listing for listing in listings if listing.area == area]


def spots_in_area(spots: Iterable[PointOfInterest], area: str) -> List[PointOfInterest]:
    return [spot for spot in spots if spot.area == area]


def mean_price(listings: Sequence[Listing]) -> float:
    """Arithmetic mean price; raises InvalidPriceError on non-finite input."""
    prices = np.array([listing.price for listing in listings], dtype=float)
    if not np.all(np.isfinite(prices)):
        raise InvalidPriceError("Listing prices must be finite numbers")
    avg = float(np.mean(prices))
    if not math.isfinite(avg):
        raise InvalidPriceError("Mean listing price is not finite")
    return avg


def estimate_price_intensity(
    listings: Iterable[Listing],
    area: str,
    config: HeatmapConfig = DEFAULT_HEATMAP_CONFIG,
) -> float:
    """Mean price of the area's listings over the price ceiling.

    An area with no listings gets a fixed low value so "no data" stays
    distinguishable from "confirmed cheap".
    """
    area_listings = listings_in_area(listings, area)
    if not area_listings:
        return config.no_listing_price_intensity
    return clamp_intensity(mean_price(area_listings) / config.price_ceiling)


def _count_intensity(
    spots: Iterable[PointOfInterest],
    area: str,
    category: SpotCategory,
    config: HeatmapConfig,
) -> float:
    count = sum(1 for spot in spots_in_area(spots, area) if spot.category == category)
    return clamp_intensity(count / config.poi_saturation)


def estimate_school_intensity(
    spots: Iterable[PointOfInterest],
    area: str,
    config: HeatmapConfig = DEFAULT_HEATMAP_CONFIG,
) -> float:
    """Education spots in the area, saturating at config.poi_saturation."""
    return _count_intensity(spots, area, SpotCategory.EDUCATION, config)


def estimate_transport_intensity(
    spots: Iterable[PointOfInterest],
    area: str,
    config: HeatmapConfig = DEFAULT_HEATMAP_CONFIG,
) -> float:
    """Transport spots in the area, saturating at config.poi_saturation."""
    return _count_intensity(spots, area, SpotCategory.TRANSPORT, config)


def area_mock_value(area: str) -> float:
    """Deterministic value in [0, 1) derived from the area name."""
    return (area_name_hash(area) % 100) / 100


def estimate_placeholder_intensity(
    area: str,
    zone: ZoneType,
    config: HeatmapConfig = DEFAULT_HEATMAP_CONFIG,
) -> float:
    """Mock intensity for safety, noise and flood.

    safety is inverted and compressed toward "mostly safe", noise toward
    "mostly quiet" and flood toward "mostly low risk".
    """
    zone = ZoneType(zone)
    if zone not in config.mock_transforms:
        raise ValueError(f"{zone.value} is not a placeholder zone")
    scale, invert = config.mock_transforms[zone]
    value = area_mock_value(area) * scale
    if invert:
        value = 1 - value
    return clamp_intensity(value)


def estimate_heat_intensity(
    listings: Iterable[Listing],
    spots: Iterable[PointOfInterest],
    area: str,
    zone: ZoneType,
    config: HeatmapConfig = DEFAULT_HEATMAP_CONFIG,
) -> float:
    """Intensity in [0, 1] of a zone type for one area."""
    zone = ZoneType(zone)
    if zone == ZoneType.PRICE:
        return estimate_price_intensity(listings, area, config)
    if zone == ZoneType.SCHOOLS:
        return estimate_school_intensity(spots, area, config)
    if zone == ZoneType.TRANSPORT:
        return estimate_transport_intensity(spots, area, config)
    return estimate_placeholder_intensity(area, zone, config)


def color_index(intensity: float) -> int:
    """Palette bucket for an intensity: floor(intensity * 4) clamped to [0, 4]."""
    if not math.isfinite(intensity):
        raise ValueError(f"Intensity must be a finite number, got {intensity}")
    return min(max(math.floor(intensity * (PALETTE_SIZE - 1)), 0), PALETTE_SIZE - 1)


def map_intensity_to_color(
    intensity: float,
    zone: ZoneType,
    config: HeatmapConfig = DEFAULT_HEATMAP_CONFIG,
) -> str:
    """One of the zone's 5 discrete colors for an intensity."""
    return config.palettes[ZoneType(zone)][color_index(intensity)]
