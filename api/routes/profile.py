"""
Profile routes: the caller's public contact details.
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
import logging

from api.schemas import ProfileResponse, ProfileUpdate
from database import ProfileRepository
from dependencies import get_db, get_current_user_id

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """The caller's profile."""
    profile = ProfileRepository(db).get_by_user_ids([user_id]).get(user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return ProfileResponse.model_validate(profile)


@router.put("/", response_model=ProfileResponse)
async def update_profile(
    payload: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create or update the caller's profile; only fields in the body change."""
    profile = ProfileRepository(db).upsert_profile(
        user_id, payload.model_dump(exclude_unset=True)
    )
    db.commit()
    db.refresh(profile)
    logger.info("Profile of %s updated", user_id)
    return ProfileResponse.model_validate(profile)
