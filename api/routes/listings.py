"""
Listing routes: browse, detail, owner CRUD and inquiries.
"""

from fastapi import APIRouter, HTTPException, Query, Depends
from typing import Optional, List
from sqlalchemy.orm import Session
import logging

from models import ListingModel
from api import constants
from api.cache import clear_cache
from api.schemas import (
    InquiryCreate,
    InquiryResponse,
    ListingCreate,
    ListingOptionsResponse,
    ListingPage,
    ListingResponse,
    ListingUpdate,
)
from api.services.listing_filtering import build_listing_query
from database import InquiryRepository, ListingRepository, ProfileRepository
from dependencies import get_db, get_current_user_id, get_optional_user_id

router = APIRouter()
logger = logging.getLogger(__name__)


def to_listing_responses(
    db: Session, listings: List[ListingModel]
) -> List[ListingResponse]:
    """Serialize listings with their owners' public contact details."""
    profiles = ProfileRepository(db).get_by_user_ids([l.user_id for l in listings])
    return [ListingResponse.from_model(l, profiles.get(l.user_id)) for l in listings]


def get_listing_or_404(db: Session, listing_id: str) -> ListingModel:
    listing = ListingRepository(db).get_listing_by_id(listing_id)
    if not listing:
        raise HTTPException(status_code=404, detail="Listing not found")
    return listing


def get_owned_listing(db: Session, listing_id: str, user_id: str) -> ListingModel:
    listing = get_listing_or_404(db, listing_id)
    if listing.user_id != user_id:
        raise HTTPException(
            status_code=403, detail="Only the owner can modify this listing"
        )
    return listing


def _check_units(price_unit: Optional[str], size_unit: Optional[str]) -> None:
    if price_unit is not None and price_unit not in constants.PRICE_UNIT_VALUES:
        raise HTTPException(status_code=400, detail=f"Unknown price unit: {price_unit}")
    if size_unit is not None and size_unit not in constants.SIZE_UNIT_VALUES:
        raise HTTPException(status_code=400, detail=f"Unknown size unit: {size_unit}")


# Columns a PATCH may change but never clear
REQUIRED_LISTING_FIELDS = (
    "title",
    "description",
    "price",
    "property_type",
    "listing_type",
    "city",
    "area",
    "size_value",
    "size_unit",
    "status",
)


def _check_required(changes: dict) -> None:
    cleared = [f for f in REQUIRED_LISTING_FIELDS if f in changes and changes[f] is None]
    if cleared:
        raise HTTPException(
            status_code=400, detail=f"Fields cannot be null: {', '.join(cleared)}"
        )


@router.get("/", response_model=ListingPage)
async def list_listings(
    search: Optional[str] = Query(None, description="Search title, area or address"),
    city: Optional[str] = Query(None, description="Filter by city ('all' for any)"),
    listing_type: Optional[str] = Query(None, description="rent, sale or land"),
    property_type: Optional[str] = Query(None, description="Filter by property type"),
    min_price: Optional[int] = Query(None, ge=0, description="Minimum price"),
    max_price: Optional[int] = Query(None, ge=0, description="Maximum price"),
    min_bedrooms: Optional[int] = Query(None, ge=0, description="Minimum bedrooms"),
    page: int = Query(1, ge=1),
    page_size: int = Query(24, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Browse active listings, featured first then newest."""
    query = build_listing_query(
        db=db,
        search=search,
        city=city,
        listing_type=listing_type,
        property_type=property_type,
        min_price=min_price,
        max_price=max_price,
        min_bedrooms=min_bedrooms,
    )
    total = query.count()
    rows = query.offset((page - 1) * page_size).limit(page_size).all()
    total_pages = (total + page_size - 1) // page_size if total > 0 else 0
    return ListingPage(
        items=to_listing_responses(db, rows),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )


@router.get("/options", response_model=ListingOptionsResponse)
async def listing_options():
    """Option tables for listing forms and filters."""
    return ListingOptionsResponse(
        cities=constants.CITIES,
        property_types=constants.PROPERTY_TYPES,
        listing_types=constants.LISTING_TYPES,
        size_units=constants.SIZE_UNITS,
        price_units=constants.PRICE_UNITS,
        amenities=constants.AMENITIES,
    )


@router.get("/mine", response_model=List[ListingResponse])
async def my_listings(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Listings owned by the caller, newest first, any status."""
    return to_listing_responses(db, ListingRepository(db).get_listings_by_owner(user_id))


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: str,
    count_view: bool = Query(False, description="Increment the view counter"),
    db: Session = Depends(get_db),
):
    """Get a listing by ID."""
    listing = get_listing_or_404(db, listing_id)
    if count_view:
        ListingRepository(db).increment_views(listing)
        db.commit()
        db.refresh(listing)
    return to_listing_responses(db, [listing])[0]


@router.post("/", response_model=ListingResponse, status_code=201)
async def create_listing(
    payload: ListingCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a listing owned by the caller."""
    _check_units(payload.price_unit, payload.size_unit)
    data = payload.model_dump(mode="json")
    listing = ListingRepository(db).create_listing(user_id, data)
    db.commit()
    db.refresh(listing)
    clear_cache()
    logger.info("Listing %s created by %s", listing.id, user_id)
    return to_listing_responses(db, [listing])[0]


@router.patch("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: str,
    payload: ListingUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Update a listing (owner only)."""
    listing = get_owned_listing(db, listing_id, user_id)
    changes = payload.model_dump(mode="json", exclude_unset=True)
    _check_required(changes)
    _check_units(changes.get("price_unit"), changes.get("size_unit"))
    ListingRepository(db).update_listing(listing, changes)
    db.commit()
    db.refresh(listing)
    clear_cache()
    return to_listing_responses(db, [listing])[0]


@router.delete("/{listing_id}", status_code=204)
async def delete_listing(
    listing_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete a listing (owner only)."""
    listing = get_owned_listing(db, listing_id, user_id)
    ListingRepository(db).delete_listing(listing)
    db.commit()
    clear_cache()
    logger.info("Listing %s deleted by %s", listing_id, user_id)


@router.post(
    "/{listing_id}/inquiries", response_model=InquiryResponse, status_code=201
)
async def send_inquiry(
    listing_id: str,
    payload: InquiryCreate,
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
):
    """Send an inquiry to the listing's owner. Signing in is optional."""
    listing = get_listing_or_404(db, listing_id)
    inquiry = InquiryRepository(db).create_inquiry(
        listing=listing,
        sender_id=user_id,
        sender_name=payload.name.strip(),
        sender_email=payload.email.strip(),
        sender_phone=payload.phone,
        message=payload.message.strip(),
    )
    db.commit()
    db.refresh(inquiry)
    response = InquiryResponse.model_validate(inquiry)
    response.listing_title = listing.title
    return response
