"""
Price checker routes.
"""

from fastapi import APIRouter, HTTPException, Query
from typing import Optional
import logging

import config
from api.schemas import PriceAssessment, PriceCheckRequest
from api.services.price_checker import (
    LLMPriceChecker,
    PriceCheckerError,
    PriceCheckerNotConfigured,
    check_price,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def get_llm_checker() -> Optional[LLMPriceChecker]:
    """LLM checker built from the current configuration, None without an API key."""
    if not config.AI_GATEWAY_API_KEY:
        return None
    return LLMPriceChecker(
        api_key=config.AI_GATEWAY_API_KEY,
        base_url=config.AI_GATEWAY_URL,
        model=config.AI_MODEL,
        timeout=config.AI_TIMEOUT,
    )


@router.post("/", response_model=PriceAssessment)
def check_listing_price(
    request: PriceCheckRequest,
    mode: Optional[str] = Query(
        None, description="heuristic or llm (defaults to PRICE_CHECKER_MODE)"
    ),
):
    """Verdict on whether an asking price is fair.

    Must stay a sync handler: the LLM gateway call blocks the calling thread.
    """
    mode = (mode or config.PRICE_CHECKER_MODE).lower()
    logger.info(
        "Price check (%s) for %s in %s, %s",
        mode,
        request.property_type,
        request.area,
        request.city,
    )

    try:
        return check_price(request, mode=mode, llm_checker=get_llm_checker())
    except PriceCheckerNotConfigured as e:
        raise HTTPException(status_code=503, detail=str(e))
    except PriceCheckerError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
