"""
Utility functions for filtering listings by various criteria.
"""

from typing import Optional, List
from sqlalchemy.orm import Session, Query
from sqlalchemy import or_

from models import ListingModel, ListingStatus, Listing


def build_listing_query(
    db: Session,
    search: Optional[str] = None,
    city: Optional[str] = None,
    area: Optional[str] = None,
    listing_type: Optional[str] = None,
    property_type: Optional[str] = None,
    min_price: Optional[int] = None,
    max_price: Optional[int] = None,
    min_bedrooms: Optional[int] = None,
    status: Optional[str] = ListingStatus.ACTIVE.value,
) -> Query:
    """
    Build a base query for listings with optional filters.

    Args:
        db: Database session
        search: Case-insensitive substring matched against title, area and address
        city: Optional city filter ("all" disables it)
        area: Optional exact area filter
        listing_type: Optional listing type filter (rent, sale, land)
        property_type: Optional property type filter
        min_price: Optional minimum price (inclusive)
        max_price: Optional maximum price (inclusive)
        min_bedrooms: Optional minimum number of bedrooms
        status: Listing status to keep, None for any status

    Returns:
        SQLAlchemy query for ListingModel, ordered featured first then newest
    """
    query = db.query(ListingModel)

    if status:
        query = query.filter(ListingModel.status == status)

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                ListingModel.title.ilike(pattern),
                ListingModel.area.ilike(pattern),
                ListingModel.address.ilike(pattern),
            )
        )

    if city and city != "all":
        query = query.filter(ListingModel.city == city)

    if area:
        query = query.filter(ListingModel.area == area)

    if listing_type and listing_type != "all":
        query = query.filter(ListingModel.listing_type == listing_type)

    if property_type and property_type != "all":
        query = query.filter(ListingModel.property_type == property_type)

    if min_price is not None:
        query = query.filter(ListingModel.price >= min_price)
    if max_price is not None:
        query = query.filter(ListingModel.price <= max_price)

    if min_bedrooms is not None:
        query = query.filter(ListingModel.bedrooms >= min_bedrooms)

    return query.order_by(ListingModel.featured.desc(), ListingModel.created_at.desc())


def load_map_snapshot(
    db: Session, city: Optional[str] = None, limit: int = 100
) -> List[Listing]:
    """Active listings for the map, as read-only snapshots."""
    rows = build_listing_query(db, city=city).limit(limit).all()
    return [Listing.model_validate(row) for row in rows]
