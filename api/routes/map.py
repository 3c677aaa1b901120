"""
Map routes: listing and spot markers, per-area heat zones, area coordinates.
"""

from fastapi import APIRouter, HTTPException, Query, Depends
from typing import Optional, List
from sqlalchemy.orm import Session
import logging

from models import PointOfInterest, SpotCategory, ZoneType
from api.schemas import (
    AreaCoordinateResponse,
    AreaHeatResponse,
    CityAnchorResponse,
    MapOverlayResponse,
)
from api.services.area_geocoder import DEFAULT_CITY_ANCHORS, default_geocoder
from api.services.heatmap import (
    InvalidPriceError,
    estimate_heat_intensity,
    is_placeholder_zone,
    map_intensity_to_color,
)
from api.services.listing_filtering import load_map_snapshot
from api.services.map_layers import (
    build_heat_overlays,
    collect_areas,
    area_city,
    compute_bounds,
    legend_for_zone,
    place_listing_markers,
    place_spot_markers,
)
from database import SpotRepository
from dependencies import get_db

router = APIRouter()
logger = logging.getLogger(__name__)

# The map shows at most this many listings per query
MAP_LISTING_LIMIT = 100


def load_spot_snapshot(db: Session, city: Optional[str]) -> List[PointOfInterest]:
    rows = SpotRepository(db).list_spots(city=city if city != "all" else None)
    return [PointOfInterest.model_validate(row) for row in rows]


@router.get("/overlay", response_model=MapOverlayResponse)
async def get_map_overlay(
    city: str = Query("Karachi", description="City to show ('all' for every city)"),
    zone_type: ZoneType = Query(ZoneType.PRICE, description="Heat zone dimension"),
    show_heat_zones: bool = Query(True, description="Include heat zone circles"),
    category: Optional[SpotCategory] = Query(
        None, description="Only show spots of this category"
    ),
    db: Session = Depends(get_db),
):
    """Markers, heat zones, legend and bounds for the map view of a city."""
    listings = load_map_snapshot(db, city=city, limit=MAP_LISTING_LIMIT)
    spots = load_spot_snapshot(db, city)
    logger.info(
        "Map overlay for %s (%s): %d listings, %d spots",
        city,
        zone_type.value,
        len(listings),
        len(spots),
    )

    try:
        overlays = build_heat_overlays(listings, spots, city, zone_type)
    except InvalidPriceError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MapOverlayResponse(
        city=city,
        zone_type=zone_type,
        center=DEFAULT_CITY_ANCHORS.anchor_for(city),
        bounds=compute_bounds(o.center for o in overlays),
        legend=legend_for_zone(zone_type),
        heat_overlays=overlays if show_heat_zones else [],
        listings=place_listing_markers(listings),
        spots=place_spot_markers(spots, category=category.value if category else None),
    )


@router.get("/cities", response_model=List[CityAnchorResponse])
async def list_city_anchors():
    """Cities with a known map center."""
    return [
        CityAnchorResponse(city=city, center=DEFAULT_CITY_ANCHORS.anchor_for(city))
        for city in DEFAULT_CITY_ANCHORS.cities
    ]


@router.get("/area-coordinate", response_model=AreaCoordinateResponse)
async def get_area_coordinate(
    city: str = Query(..., description="City name"),
    area: str = Query(..., description="Area name"),
):
    """Map coordinate of an area."""
    return AreaCoordinateResponse(
        city=city,
        area=area,
        coordinate=default_geocoder.resolve_area_coordinate(city, area),
        known_city=city in DEFAULT_CITY_ANCHORS.anchors,
    )


@router.get("/area-heat", response_model=List[AreaHeatResponse])
async def get_area_heat(
    city: str = Query(..., description="City name"),
    zone_type: ZoneType = Query(ZoneType.PRICE, description="Heat zone dimension"),
    area: Optional[str] = Query(None, description="Single area, default all areas"),
    db: Session = Depends(get_db),
):
    """Intensity and color per area without marker placement."""
    listings = load_map_snapshot(db, city=city, limit=MAP_LISTING_LIMIT)
    spots = load_spot_snapshot(db, city)
    areas = [area] if area else collect_areas(listings, spots)

    results = []
    for name in areas:
        try:
            intensity = estimate_heat_intensity(listings, spots, name, zone_type)
        except InvalidPriceError as e:
            raise HTTPException(status_code=400, detail=str(e))
        results.append(
            AreaHeatResponse(
                city=area_city(name, listings, spots, city),
                area=name,
                zone_type=zone_type,
                intensity=intensity,
                color=map_intensity_to_color(intensity, zone_type),
                is_placeholder=is_placeholder_zone(zone_type),
            )
        )
    return results
