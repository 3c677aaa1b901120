"""
Pydantic models and SQLAlchemy ORM models for Listing, Spot, Favorite, Inquiry, Profile and ComparisonItem.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    ForeignKey,
    Text,
    JSON,
    Index,
    UniqueConstraint,
)
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


# ============================================================================
# Enumerations
# ============================================================================


class ZoneType(str, Enum):
    """Dimension visualized on the map heat overlay."""

    PRICE = "price"
    SCHOOLS = "schools"
    TRANSPORT = "transport"
    SAFETY = "safety"
    NOISE = "noise"
    FLOOD = "flood"


class SpotCategory(str, Enum):
    """Point-of-interest category."""

    EDUCATION = "education"
    HEALTHCARE = "healthcare"
    RETAIL = "retail"
    TRANSPORT = "transport"


class PropertyType(str, Enum):
    HOUSE = "house"
    APARTMENT = "apartment"
    PLOT = "plot"
    COMMERCIAL = "commercial"
    FARMHOUSE = "farmhouse"


class ListingType(str, Enum):
    RENT = "rent"
    SALE = "sale"
    LAND = "land"


class ListingStatus(str, Enum):
    ACTIVE = "active"
    SOLD = "sold"
    RENTED = "rented"
    INACTIVE = "inactive"


class InquiryStatus(str, Enum):
    PENDING = "pending"
    RESPONDED = "responded"
    CLOSED = "closed"


# ============================================================================
# Pydantic Models (read-only snapshots consumed by the map services)
# ============================================================================


class Coordinate(BaseModel):
    """A (latitude, longitude) pair in decimal degrees."""

    latitude: float
    longitude: float

    class Config:
        frozen = True


class Listing(BaseModel):
    """Listing snapshot used for map placement and heat aggregation."""

    id: str
    city: str
    area: str
    price: int
    property_type: str
    listing_type: str
    title: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None

    class Config:
        from_attributes = True
        frozen = True


class PointOfInterest(BaseModel):
    """Point-of-interest snapshot (a "spot")."""

    id: str
    city: str
    area: str
    category: SpotCategory
    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    class Config:
        from_attributes = True
        frozen = True


# ============================================================================
# SQLAlchemy ORM Models
# ============================================================================


class ListingModel(Base):
    """SQLAlchemy model for Listing."""

    __tablename__ = "listings"
    __table_args__ = (
        Index("idx_listings_city_area", "city", "area"),
        Index("idx_listings_status_featured", "status", "featured", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Integer, nullable=False)
    price_unit = Column(String, nullable=True, default="total")
    property_type = Column(String, nullable=False)
    listing_type = Column(String, nullable=False)
    city = Column(String, nullable=False)
    area = Column(String, nullable=False)
    address = Column(String, nullable=True)
    size_value = Column(Float, nullable=False)
    size_unit = Column(String, nullable=False)
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    amenities = Column(JSON, nullable=True)
    images = Column(JSON, nullable=True)
    status = Column(String, nullable=False, default=ListingStatus.ACTIVE.value)
    featured = Column(Boolean, nullable=False, default=False)
    verified = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Relationships
    favorites = relationship(
        "FavoriteModel", back_populates="listing", cascade="all, delete-orphan"
    )
    inquiries = relationship(
        "InquiryModel", back_populates="listing", cascade="all, delete-orphan"
    )
    comparison_items = relationship(
        "ComparisonItemModel", back_populates="listing", cascade="all, delete-orphan"
    )


class SpotModel(Base):
    """SQLAlchemy model for a point of interest."""

    __tablename__ = "spots"
    __table_args__ = (Index("idx_spots_city_area", "city", "area"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    subcategory = Column(String, nullable=True)
    city = Column(String, nullable=False)
    area = Column(String, nullable=False)
    address = Column(String, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class FavoriteModel(Base):
    """SQLAlchemy model for a user's favorite listing."""

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "listing_id", name="uq_favorites_user_listing"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    listing_id = Column(String(36), ForeignKey("listings.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    listing = relationship("ListingModel", back_populates="favorites")


class InquiryModel(Base):
    """SQLAlchemy model for an inquiry sent to a listing owner."""

    __tablename__ = "inquiries"

    id = Column(String(36), primary_key=True, default=_new_id)
    listing_id = Column(
        String(36), ForeignKey("listings.id"), nullable=False, index=True
    )
    owner_id = Column(String, nullable=False, index=True)
    sender_id = Column(String, nullable=True, index=True)
    sender_name = Column(String, nullable=False)
    sender_email = Column(String, nullable=False)
    sender_phone = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    inquiry_type = Column(String, nullable=False)
    status = Column(String, nullable=False, default=InquiryStatus.PENDING.value)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    listing = relationship("ListingModel", back_populates="inquiries")


class ProfileModel(Base):
    """SQLAlchemy model for public owner contact details."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, unique=True, index=True)
    full_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    city = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class ComparisonItemModel(Base):
    """SQLAlchemy model for a listing in a client's comparison basket."""

    __tablename__ = "comparison_items"
    __table_args__ = (
        UniqueConstraint("client_id", "listing_id", name="uq_comparison_client_listing"),
    )

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(String, nullable=False, index=True)
    listing_id = Column(String(36), ForeignKey("listings.id"), nullable=False)
    added_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    listing = relationship("ListingModel", back_populates="comparison_items")


# ============================================================================
# Utility Functions
# ============================================================================


def normalize_text(value: Optional[str]) -> str:
    """Collapse whitespace and strip a free-text value."""
    if not value:
        return ""
    return " ".join(str(value).strip().split())


def parse_price(price_str) -> Optional[int]:
    """Parse a price cell ("PKR 1,20,00,000", "12000000") to whole rupees."""
    if price_str is None:
        return None
    cleaned = (
        str(price_str).upper().replace("PKR", "").replace("RS.", "").replace(",", "")
    ).strip()
    if not cleaned:
        return None
    try:
        return int(round(float(cleaned)))
    except (ValueError, OverflowError):
        return None
