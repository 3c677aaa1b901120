"""
PKR price formatting in the Crore / Lac convention.
"""

from typing import Optional

CRORE = 10_000_000
LAC = 100_000

_UNIT_SUFFIXES = {
    "monthly": "/month",
    "yearly": "/year",
    "per_marla": "/marla",
    "per_kanal": "/kanal",
}


def format_price(price: float) -> str:
    """Format a price as Crore, Lac, thousands or a grouped integer."""
    if price >= CRORE:
        return f"{price / CRORE:.2f} Crore"
    elif price >= LAC:
        return f"{price / LAC:.2f} Lac"
    elif price >= 1000:
        return f"{price / 1000:.1f}K"
    return f"{int(round(price)):,}"


def format_price_compact(price: float) -> str:
    """Short form used on map labels: "2.0 Cr", "45.0 Lac"."""
    if price >= CRORE:
        return f"{price / CRORE:.1f} Cr"
    if price >= LAC:
        return f"{price / LAC:.1f} Lac"
    return f"{int(round(price)):,}"


def format_price_with_unit(price: float, unit: Optional[str] = None) -> str:
    """Price with currency and the listing's price unit, e.g. "PKR 45.00K/month"."""
    return f"PKR {format_price(price)}{_UNIT_SUFFIXES.get(unit or 'total', '')}"
