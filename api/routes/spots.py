"""
Spot (point of interest) routes.
"""

from collections import defaultdict
from fastapi import APIRouter, Query, Depends
from typing import Optional, List
from sqlalchemy.orm import Session
import logging

from models import SpotCategory
from api.schemas import NeighborhoodSpotsResponse, SpotCreate, SpotResponse
from database import SpotRepository
from dependencies import get_db, get_current_user_id

router = APIRouter()
logger = logging.getLogger(__name__)

# Spots shown when an area has none of its own
CITY_FALLBACK_LIMIT = 8


@router.get("/", response_model=List[SpotResponse])
async def list_spots(
    city: Optional[str] = Query(None, description="Filter by city"),
    area: Optional[str] = Query(None, description="Filter by area"),
    category: Optional[SpotCategory] = Query(None, description="Filter by category"),
    db: Session = Depends(get_db),
):
    """List points of interest."""
    rows = SpotRepository(db).list_spots(
        city=city, area=area, category=category.value if category else None
    )
    return [SpotResponse.model_validate(row) for row in rows]


@router.post("/", response_model=SpotResponse, status_code=201)
async def create_spot(
    payload: SpotCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Add a point of interest."""
    spot = SpotRepository(db).create_spot(payload.model_dump(mode="json"))
    db.commit()
    db.refresh(spot)
    logger.info("Spot %s (%s) added by %s", spot.id, spot.category, user_id)
    return SpotResponse.model_validate(spot)


@router.get("/neighborhood", response_model=NeighborhoodSpotsResponse)
async def neighborhood_spots(
    city: str = Query(..., description="City of the listing"),
    area: str = Query(..., description="Area of the listing"),
    db: Session = Depends(get_db),
):
    """Spots in the area grouped by category; city-wide spots when the area has none."""
    repo = SpotRepository(db)
    rows = repo.list_spots(city=city, area=area)
    scope = "area"
    if not rows:
        rows = repo.list_spots(city=city, limit=CITY_FALLBACK_LIMIT)
        scope = "city"

    grouped = defaultdict(list)
    for row in rows:
        grouped[row.category].append(SpotResponse.model_validate(row))

    return NeighborhoodSpotsResponse(
        city=city, area=area, scope=scope, spots=dict(grouped), total=len(rows)
    )
