"""
Favorite routes: a signed-in user's saved listings.
"""

from fastapi import APIRouter, HTTPException, Header, Depends
from typing import Optional
from sqlalchemy.orm import Session

from api.routes.listings import get_listing_or_404, to_listing_responses
from api.schemas import FavoritesResponse, FavoriteStatusResponse
from database import FavoriteRepository, ListingRepository
from dependencies import get_db, get_optional_user_id

router = APIRouter()


def require_signed_in(
    x_user_id: Optional[str] = Header(None, description="Authenticated user ID"),
) -> str:
    user_id = get_optional_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Please sign in to save favorites")
    return user_id


@router.get("/", response_model=FavoritesResponse)
async def list_favorites(
    include_listings: bool = False,
    user_id: str = Depends(require_signed_in),
    db: Session = Depends(get_db),
):
    """IDs of the caller's favorites, most recent first, optionally with the listings."""
    listing_ids = FavoriteRepository(db).get_favorite_ids(user_id)
    listings = []
    if include_listings:
        rows = ListingRepository(db).get_listings_by_ids(listing_ids)
        listings = to_listing_responses(db, rows)
    return FavoritesResponse(listing_ids=listing_ids, listings=listings)


@router.get("/{listing_id}", response_model=FavoriteStatusResponse)
async def favorite_status(
    listing_id: str,
    user_id: str = Depends(require_signed_in),
    db: Session = Depends(get_db),
):
    """Whether the caller has favorited a listing."""
    favorited = FavoriteRepository(db).is_favorited(user_id, listing_id)
    return FavoriteStatusResponse(listing_id=listing_id, favorited=favorited)


@router.put("/{listing_id}", response_model=FavoriteStatusResponse)
async def add_favorite(
    listing_id: str,
    user_id: str = Depends(require_signed_in),
    db: Session = Depends(get_db),
):
    """Add a listing to favorites (idempotent)."""
    get_listing_or_404(db, listing_id)
    FavoriteRepository(db).add_favorite(user_id, listing_id)
    db.commit()
    return FavoriteStatusResponse(listing_id=listing_id, favorited=True)


@router.delete("/{listing_id}", response_model=FavoriteStatusResponse)
async def remove_favorite(
    listing_id: str,
    user_id: str = Depends(require_signed_in),
    db: Session = Depends(get_db),
):
    """Remove a listing from favorites (idempotent)."""
    FavoriteRepository(db).remove_favorite(user_id, listing_id)
    db.commit()
    return FavoriteStatusResponse(listing_id=listing_id, favorited=False)


@router.post("/{listing_id}/toggle", response_model=FavoriteStatusResponse)
async def toggle_favorite(
    listing_id: str,
    user_id: str = Depends(require_signed_in),
    db: Session = Depends(get_db),
):
    """Flip the favorite state of a listing."""
    get_listing_or_404(db, listing_id)
    favorited = FavoriteRepository(db).toggle_favorite(user_id, listing_id)
    db.commit()
    return FavoriteStatusResponse(listing_id=listing_id, favorited=favorited)
