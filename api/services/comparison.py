"""
Side-by-side listing comparison.
"""

from typing import Dict, List, Sequence

from api.schemas import ComparisonResponse, ListingResponse
from database import MAX_COMPARISON_ITEMS


def collect_amenities(listings: Sequence[ListingResponse]) -> List[str]:
    """Sorted union of the amenities of all listings."""
    return sorted({amenity for listing in listings for amenity in listing.amenities})


def build_comparison(listings: Sequence[ListingResponse]) -> ComparisonResponse:
    """Comparison view: listings, all amenities, and which listing has which."""
    amenities = collect_amenities(listings)
    matrix: Dict[str, List[bool]] = {
        amenity: [amenity in listing.amenities for listing in listings]
        for amenity in amenities
    }
    return ComparisonResponse(
        listings=list(listings),
        amenities=amenities,
        amenity_matrix=matrix,
        max_items=MAX_COMPARISON_ITEMS,
    )
