"""
Statistical summaries of listing prices.
"""

from typing import List, Dict, Any

import numpy as np
import pandas as pd


def calculate_city_statistics(listings_data: List[Dict[str, Any]]) -> List[Dict]:
    """
    Calculate price statistics by city.

    Args:
        listings_data: List of listing data with city and price

    Returns:
        List of city statistics, most expensive city first
    """
    if not listings_data:
        return []

    df = pd.DataFrame(listings_data)
    df = df.dropna(subset=["city", "price"])
    df = df[np.isfinite(df["price"].astype(float))]
    if df.empty:
        return []

    grouped = (
        df.groupby("city")["price"]
        .agg(["count", "mean", "median", "min", "max"])
        .reset_index()
    )

    statistics = [
        {
            "city": row["city"],
            "listing_count": int(row["count"]),
            "average_price": float(row["mean"]),
            "median_price": float(row["median"]),
            "min_price": float(row["min"]),
            "max_price": float(row["max"]),
        }
        for _, row in grouped.iterrows()
    ]
    return sorted(statistics, key=lambda x: x["average_price"], reverse=True)


def calculate_overall(listings_data: List[Dict[str, Any]]) -> Dict[str, float]:
    """Overall average and median price."""
    prices = [d["price"] for d in listings_data if d.get("price") is not None]
    if not prices:
        return {"overall_average": 0.0, "overall_median": 0.0}
    return {
        "overall_average": float(np.mean(prices)),
        "overall_median": float(np.median(prices)),
    }


def count_by(values: List[str]) -> Dict[str, int]:
    """Occurrences of each value."""
    if not values:
        return {}
    return {str(k): int(v) for k, v in pd.Series(values).value_counts().items()}
