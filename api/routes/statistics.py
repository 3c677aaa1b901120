"""
Statistics routes: city price summaries and the owner dashboard.
"""

from fastapi import APIRouter, Query, Depends
from typing import Optional
from sqlalchemy.orm import Session

from models import ListingModel, ListingStatus
from api.cache import cached
from api.schemas import CityStatistics, CityStatisticsResponse, DashboardResponse
from api.services import statistics
from database import InquiryRepository, ListingRepository
from dependencies import get_db, get_current_user_id

router = APIRouter()


@router.get("/cities", response_model=CityStatisticsResponse)
@cached()
async def get_city_statistics(
    listing_type: Optional[str] = Query(None, description="Only rent, sale or land listings"),
    db: Session = Depends(get_db),
):
    """Price statistics of active listings per city."""
    query = db.query(ListingModel.city, ListingModel.price).filter(
        ListingModel.status == ListingStatus.ACTIVE.value
    )
    if listing_type and listing_type != "all":
        query = query.filter(ListingModel.listing_type == listing_type)

    listings_data = [{"city": city, "price": price} for city, price in query.all()]

    city_stats = statistics.calculate_city_statistics(listings_data)
    overall = statistics.calculate_overall(listings_data)

    return CityStatisticsResponse(
        cities=[CityStatistics(**stats) for stats in city_stats],
        **overall,
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Summary of the caller's listings and inquiries."""
    listings = ListingRepository(db).get_listings_by_owner(user_id)
    inquiry_repo = InquiryRepository(db)
    received = inquiry_repo.get_received(user_id)
    sent = inquiry_repo.get_sent(user_id)

    return DashboardResponse(
        total_listings=len(listings),
        listings_by_status=statistics.count_by([listing.status for listing in listings]),
        total_views=sum(listing.views or 0 for listing in listings),
        inquiries_received=len(received),
        inquiries_by_status=statistics.count_by([inquiry.status for inquiry in received]),
        inquiries_sent=len(sent),
    )
