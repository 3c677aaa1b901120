"""
Inquiry routes for owners and senders.
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List
from sqlalchemy.orm import Session

from models import InquiryModel
from api.schemas import InquiryResponse, InquiryStatusUpdate
from database import InquiryRepository
from dependencies import get_db, get_current_user_id

router = APIRouter()


def _to_response(inquiry: InquiryModel) -> InquiryResponse:
    response = InquiryResponse.model_validate(inquiry)
    response.listing_title = inquiry.listing.title if inquiry.listing else None
    return response


@router.get("/received", response_model=List[InquiryResponse])
async def received_inquiries(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Inquiries about the caller's listings, newest first."""
    return [_to_response(i) for i in InquiryRepository(db).get_received(user_id)]


@router.get("/sent", response_model=List[InquiryResponse])
async def sent_inquiries(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Inquiries the caller sent, newest first."""
    return [_to_response(i) for i in InquiryRepository(db).get_sent(user_id)]


@router.patch("/{inquiry_id}", response_model=InquiryResponse)
async def update_inquiry_status(
    inquiry_id: str,
    payload: InquiryStatusUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Change an inquiry's status (listing owner only)."""
    repo = InquiryRepository(db)
    inquiry = repo.get_inquiry_by_id(inquiry_id)
    if not inquiry:
        raise HTTPException(status_code=404, detail="Inquiry not found")
    if inquiry.owner_id != user_id:
        raise HTTPException(
            status_code=403, detail="Only the listing owner can update this inquiry"
        )
    repo.update_status(inquiry, payload.status.value)
    db.commit()
    db.refresh(inquiry)
    return _to_response(inquiry)
