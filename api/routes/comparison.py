"""
Comparison routes: a browser's basket of up to four listings.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.routes.listings import get_listing_or_404, to_listing_responses
from api.schemas import ComparisonBasketResponse, ComparisonResponse
from api.services.comparison import build_comparison
from database import ComparisonRepository, ListingRepository
from dependencies import get_db, get_client_id

router = APIRouter()


@router.get("/", response_model=ComparisonResponse)
async def get_comparison(
    client_id: str = Depends(get_client_id),
    db: Session = Depends(get_db),
):
    """Listings in the basket side by side, with an amenity matrix."""
    listing_ids = ComparisonRepository(db).get_listing_ids(client_id)
    rows = ListingRepository(db).get_listings_by_ids(listing_ids)
    return build_comparison(to_listing_responses(db, rows))


@router.post("/{listing_id}", response_model=ComparisonBasketResponse)
async def add_to_comparison(
    listing_id: str,
    client_id: str = Depends(get_client_id),
    db: Session = Depends(get_db),
):
    """Add a listing. Duplicates and a full basket are reported, not errors."""
    get_listing_or_404(db, listing_id)
    repo = ComparisonRepository(db)
    added, reason = repo.add_listing(client_id, listing_id)
    db.commit()
    return ComparisonBasketResponse(
        added=added, reason=reason, listing_ids=repo.get_listing_ids(client_id)
    )


@router.delete("/{listing_id}", response_model=ComparisonBasketResponse)
async def remove_from_comparison(
    listing_id: str,
    client_id: str = Depends(get_client_id),
    db: Session = Depends(get_db),
):
    """Remove a listing from the basket."""
    repo = ComparisonRepository(db)
    repo.remove_listing(client_id, listing_id)
    db.commit()
    return ComparisonBasketResponse(added=False, listing_ids=repo.get_listing_ids(client_id))


@router.delete("/", response_model=ComparisonBasketResponse)
async def clear_comparison(
    client_id: str = Depends(get_client_id),
    db: Session = Depends(get_db),
):
    """Empty the basket."""
    ComparisonRepository(db).clear(client_id)
    db.commit()
    return ComparisonBasketResponse(added=False, listing_ids=[])
