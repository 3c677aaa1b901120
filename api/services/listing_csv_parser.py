"""
Listing CSV parser for bulk imports.
Parses a CSV export of listings, normalizes text and prices, and returns one
dict per valid row ready for ListingRepository.create_listing.
"""

import io
import logging
import math
from typing import Any, Dict, List, Optional

import pandas as pd

from models import ListingType, PropertyType, normalize_text, parse_price

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "title",
    "city",
    "area",
    "price",
    "property_type",
    "listing_type",
    "size_value",
    "size_unit",
]

OPTIONAL_COLUMNS = [
    "description",
    "price_unit",
    "address",
    "bedrooms",
    "bathrooms",
    "amenities",
]

AMENITY_SEPARATOR = ";"

_PROPERTY_TYPES = {t.value for t in PropertyType}
_LISTING_TYPES = {t.value for t in ListingType}


def load_csv_from_bytes(content: bytes, encoding: Optional[str] = None) -> pd.DataFrame:
    """Load CSV from bytes into a DataFrame.

    Args:
        content: Raw CSV bytes
        encoding: Optional encoding (default tries utf-8, then latin-1)

    Returns:
        DataFrame with trimmed, lower-cased column names
    """
    encodings = [encoding] if encoding else ["utf-8", "latin-1"]
    last_error = None
    for enc in encodings:
        try:
            text = content.decode(enc)
        except UnicodeDecodeError as e:
            last_error = e
            continue
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            on_bad_lines="skip",
        )
        df.columns = [str(c).strip().lower() for c in df.columns]
        return df
    raise ValueError(f"Failed to decode CSV with any encoding. Last error: {last_error}")


def _optional_int(value: str) -> Optional[int]:
    value = (value or "").strip()
    if not value:
        return None
    try:
        return int(float(value))
    except ValueError:
        return None


def _row_to_listing(row: Dict[str, str]) -> Optional[Dict[str, Any]]:
    price = parse_price(row["price"])
    if price is None or price < 0:
        return None
    try:
        size_value = float(row["size_value"])
    except ValueError:
        return None
    if not (math.isfinite(size_value) and size_value > 0):
        return None
    property_type = normalize_text(row["property_type"]).lower()
    listing_type = normalize_text(row["listing_type"]).lower()
    if property_type not in _PROPERTY_TYPES or listing_type not in _LISTING_TYPES:
        return None
    title = normalize_text(row["title"])
    city = normalize_text(row["city"])
    area = normalize_text(row["area"])
    if not (title and city and area):
        return None

    amenities_raw = row.get("amenities", "") or ""
    return {
        "title": title,
        "description": (row.get("description") or "").strip(),
        "price": price,
        "price_unit": normalize_text(row.get("price_unit")) or "total",
        "property_type": property_type,
        "listing_type": listing_type,
        "city": city,
        "area": area,
        "address": normalize_text(row.get("address")) or None,
        "size_value": size_value,
        "size_unit": normalize_text(row["size_unit"]).lower(),
        "bedrooms": _optional_int(row.get("bedrooms", "")),
        "bathrooms": _optional_int(row.get("bathrooms", "")),
        "amenities": [
            normalize_text(a) for a in amenities_raw.split(AMENITY_SEPARATOR) if a.strip()
        ],
        "images": [],
    }


def parse_listings_csv(content: bytes) -> List[Dict[str, Any]]:
    """
    Parse listing CSV bytes.

    Returns:
        One listing dict per valid row. Rows with an unparsable price or size,
        or an unknown property/listing type, are skipped.

    Raises:
        ValueError: if required columns are missing or the file cannot be decoded
    """
    df = load_csv_from_bytes(content)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    for column in OPTIONAL_COLUMNS:
        if column not in df.columns:
            df[column] = ""

    listings = []
    skipped = 0
    for record in df.to_dict(orient="records"):
        listing = _row_to_listing(record)
        if listing is None:
            skipped += 1
            continue
        listings.append(listing)

    if skipped:
        logger.warning("Skipped %d invalid listing rows", skipped)
    logger.info("Parsed %d listings from CSV", len(listings))
    return listings
