"""
Pydantic schemas for API requests and responses.
"""

from datetime import datetime
from typing import Optional, List, Dict, Literal
from pydantic import AliasChoices, BaseModel, Field

from models import (
    Coordinate,
    ListingStatus,
    ListingType,
    PropertyType,
    SpotCategory,
    ZoneType,
    InquiryStatus,
)


# ============================================================================
# Listing Schemas
# ============================================================================


class OwnerContact(BaseModel):
    """Public contact details of a listing owner."""

    user_id: str
    full_name: Optional[str] = None
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class ListingBase(BaseModel):
    """Fields an owner provides for a listing."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: int = Field(..., ge=0)
    price_unit: str = "total"
    property_type: PropertyType
    listing_type: ListingType
    city: str = Field(..., min_length=1)
    area: str = Field(..., min_length=1)
    address: Optional[str] = None
    size_value: float = Field(..., gt=0)
    size_unit: str
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    amenities: List[str] = []
    images: List[str] = []


class ListingCreate(ListingBase):
    """Listing creation request."""

    pass


class ListingUpdate(BaseModel):
    """Partial listing update request."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[int] = Field(None, ge=0)
    price_unit: Optional[str] = None
    property_type: Optional[PropertyType] = None
    listing_type: Optional[ListingType] = None
    city: Optional[str] = None
    area: Optional[str] = None
    address: Optional[str] = None
    size_value: Optional[float] = Field(None, gt=0)
    size_unit: Optional[str] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    status: Optional[ListingStatus] = None


class ListingResponse(BaseModel):
    """Listing response schema."""

    id: str
    user_id: str
    title: str
    description: str
    price: int
    price_unit: Optional[str] = None
    price_label: Optional[str] = None
    property_type: str
    listing_type: str
    city: str
    area: str
    address: Optional[str] = None
    size_value: float
    size_unit: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    amenities: List[str] = []
    images: List[str] = []
    status: str
    featured: bool = False
    verified: bool = False
    views: int = 0
    created_at: datetime
    updated_at: datetime
    owner: Optional[OwnerContact] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, obj, owner=None):
        """Build from a ListingModel; JSON columns may be NULL."""
        from api.services.formatting import format_price_with_unit

        data = {
            column: getattr(obj, column)
            for column in (
                "id",
                "user_id",
                "title",
                "description",
                "price",
                "price_unit",
                "property_type",
                "listing_type",
                "city",
                "area",
                "address",
                "size_value",
                "size_unit",
                "bedrooms",
                "bathrooms",
                "status",
                "created_at",
                "updated_at",
            )
        }
        data["description"] = obj.description or ""
        data["amenities"] = list(obj.amenities or [])
        data["images"] = list(obj.images or [])
        data["featured"] = bool(obj.featured)
        data["verified"] = bool(obj.verified)
        data["views"] = obj.views or 0
        data["price_label"] = format_price_with_unit(obj.price, obj.price_unit)
        if owner is not None:
            data["owner"] = OwnerContact.model_validate(owner)
        return cls(**data)


class ListingPage(BaseModel):
    """Paginated listing search result."""

    items: List[ListingResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class OptionItem(BaseModel):
    value: str
    label: str


class ListingOptionsResponse(BaseModel):
    """Fixed option tables for listing forms and filters."""

    cities: List[str]
    property_types: List[OptionItem]
    listing_types: List[OptionItem]
    size_units: List[OptionItem]
    price_units: List[OptionItem]
    amenities: List[str]


# ============================================================================
# Favorite and Comparison Schemas
# ============================================================================


class FavoriteStatusResponse(BaseModel):
    listing_id: str
    favorited: bool


class FavoritesResponse(BaseModel):
    listing_ids: List[str]
    listings: List[ListingResponse] = []


class ComparisonBasketResponse(BaseModel):
    """Basket contents after a change; added/reason describe an add."""

    added: bool
    reason: Optional[Literal["duplicate", "full"]] = None
    listing_ids: List[str]


class ComparisonResponse(BaseModel):
    """Side-by-side comparison of the basket."""

    listings: List[ListingResponse]
    amenities: List[str]
    amenity_matrix: Dict[str, List[bool]]
    max_items: int


# ============================================================================
# Inquiry Schemas
# ============================================================================


class InquiryCreate(BaseModel):
    """Inquiry sent to a listing owner."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: Optional[str] = Field(None, max_length=30)
    message: str = Field(..., min_length=1, max_length=2000)


class InquiryResponse(BaseModel):
    """Inquiry response schema."""

    id: str
    listing_id: str
    owner_id: str
    sender_id: Optional[str] = None
    sender_name: str
    sender_email: str
    sender_phone: Optional[str] = None
    message: str
    inquiry_type: str
    status: str
    created_at: datetime
    listing_title: Optional[str] = None

    class Config:
        from_attributes = True


class InquiryStatusUpdate(BaseModel):
    status: InquiryStatus


# ============================================================================
# Spot Schemas
# ============================================================================


class SpotCreate(BaseModel):
    """Point-of-interest creation request."""

    name: str = Field(..., min_length=1)
    category: SpotCategory
    subcategory: Optional[str] = None
    city: str = Field(..., min_length=1)
    area: str = Field(..., min_length=1)
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class SpotResponse(SpotCreate):
    """Point-of-interest response schema."""

    id: str
    category: str

    class Config:
        from_attributes = True


class NeighborhoodSpotsResponse(BaseModel):
    """Spots around an area, grouped by category."""

    city: str
    area: str
    scope: Literal["area", "city"]
    spots: Dict[str, List[SpotResponse]]
    total: int


# ============================================================================
# Map Schemas
# ============================================================================


class MapBounds(BaseModel):
    """Map bounds schema."""

    north: float
    south: float
    east: float
    west: float


class HeatOverlay(BaseModel):
    """Heat zone circle for one area."""

    area: str
    city: str
    center: Coordinate
    intensity: float
    color: str
    radius: float
    listing_count: int
    avg_price: Optional[int] = None
    avg_price_label: Optional[str] = None
    is_placeholder: bool = False


class ListingMarker(BaseModel):
    """Listing marker on the map."""

    id: str
    position: Coordinate
    title: Optional[str] = None
    price: int
    price_label: str
    property_type: str
    listing_type: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None


class SpotMarker(BaseModel):
    """Point-of-interest marker on the map."""

    id: str
    position: Coordinate
    name: Optional[str] = None
    category: str
    color: str
    area: str
    city: str


class HeatLegend(BaseModel):
    """Legend for the active heat zone."""

    zone_type: ZoneType
    colors: List[str]
    is_placeholder: bool
    note: Optional[str] = None


class MapOverlayResponse(BaseModel):
    """Everything the map view needs for one city and zone type."""

    city: str
    zone_type: ZoneType
    center: Coordinate
    bounds: Optional[MapBounds] = None
    legend: HeatLegend
    heat_overlays: List[HeatOverlay] = []
    listings: List[ListingMarker] = []
    spots: List[SpotMarker] = []


class CityAnchorResponse(BaseModel):
    city: str
    center: Coordinate


class AreaCoordinateResponse(BaseModel):
    city: str
    area: str
    coordinate: Coordinate
    known_city: bool


class AreaHeatResponse(BaseModel):
    """Intensity and color of one zone type in one area."""

    city: str
    area: str
    zone_type: ZoneType
    intensity: float
    color: str
    is_placeholder: bool


# ============================================================================
# Price Checker Schemas
# ============================================================================


class PriceCheckRequest(BaseModel):
    """Property details submitted to the price checker."""

    asking_price: int = Field(..., gt=0)
    property_type: str
    city: str
    area: str
    size: float = Field(..., gt=0)
    size_unit: str
    road_access: Optional[str] = None
    construction_quality: Optional[str] = None
    nearby_amenities: Optional[str] = None
    additional_details: Optional[str] = None


class EstimatedRange(BaseModel):
    min: int
    max: int


class PriceFactor(BaseModel):
    factor: str
    impact: Literal["positive", "negative", "neutral"]
    note: str


class PriceAssessment(BaseModel):
    """Price fairness verdict."""

    verdict: Literal["underpriced", "fair", "overpriced"]
    # LLM replies use camelCase
    estimated_range: EstimatedRange = Field(
        ..., validation_alias=AliasChoices("estimated_range", "estimatedRange")
    )
    confidence: Literal["low", "medium", "high"]
    explanation: str
    factors: List[PriceFactor] = []
    source: Literal["heuristic", "llm"] = "heuristic"


# ============================================================================
# Statistics Schemas
# ============================================================================


class CityStatistics(BaseModel):
    """City price statistics."""

    city: str
    listing_count: int
    average_price: float
    median_price: float
    min_price: float
    max_price: float


class CityStatisticsResponse(BaseModel):
    cities: List[CityStatistics]
    overall_average: float
    overall_median: float


class DashboardResponse(BaseModel):
    """Owner dashboard summary."""

    total_listings: int
    listings_by_status: Dict[str, int]
    total_views: int
    inquiries_received: int
    inquiries_by_status: Dict[str, int]
    inquiries_sent: int


# ============================================================================
# Profile Schemas
# ============================================================================


class ProfileUpdate(BaseModel):
    """Public contact details an owner shares on their listings."""

    full_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    city: Optional[str] = None
    avatar_url: Optional[str] = None


class ProfileResponse(ProfileUpdate):
    user_id: str
    updated_at: datetime

    class Config:
        from_attributes = True
