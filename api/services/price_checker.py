"""
Price checker: fairness verdict for an asking price.

Two strategies share one result shape: a local rule-based heuristic, and an
LLM analyst reached through an OpenAI-compatible chat completions gateway.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError
from requests.exceptions import RequestException

from api.schemas import PriceAssessment, PriceCheckRequest

logger = logging.getLogger(__name__)

PLOT_TYPES = ("plot", "land")
GOOD_ROAD_ACCESS = ("main-boulevard", "commercial-road", "corner-plot")
GOOD_CONSTRUCTION = ("luxury", "high")

FAIR_VARIATION = 0.1
OVERPRICED_VARIATION = 0.25

_CODE_FENCE = re.compile(r"```(?:json)?\n?")


class PriceCheckerError(Exception):
    """The price checker could not produce an assessment."""


class PriceCheckerNotConfigured(PriceCheckerError):
    """LLM mode requested without gateway credentials."""


def assess_price_heuristic(request: PriceCheckRequest) -> PriceAssessment:
    """Rule-based verdict.

    Plots are judged on road access, built property on construction quality.
    Anything that does not qualify as fair is reported as overpriced.
    """
    is_plot = request.property_type in PLOT_TYPES
    if is_plot:
        qualifies = request.road_access in GOOD_ROAD_ACCESS
    else:
        qualifies = request.construction_quality in GOOD_CONSTRUCTION
    verdict = "fair" if qualifies else "overpriced"

    variation = FAIR_VARIATION if verdict == "fair" else OVERPRICED_VARIATION
    price = request.asking_price

    if verdict == "fair":
        basis = "good road access and location" if is_plot else "quality construction standards"
        explanation = f"This property appears to be fairly priced based on {basis}."
    else:
        advice = (
            "Consider negotiating based on road access and location factors."
            if is_plot
            else "The construction quality suggests room for price negotiation."
        )
        explanation = f"This property may be overpriced. {advice}"

    if is_plot:
        deciding = {
            "factor": "Road Access",
            "note": "Good road access adds value"
            if qualifies
            else "Limited road access reduces value",
        }
    else:
        deciding = {
            "factor": "Construction Quality",
            "note": "High quality construction justifies the price"
            if qualifies
            else "Standard/basic construction may not justify this price",
        }
    deciding["impact"] = "positive" if qualifies else "negative"

    return PriceAssessment(
        verdict=verdict,
        estimated_range={
            "min": round(price * (1 - variation)),
            "max": round(price * (1 + variation)),
        },
        confidence="medium",
        explanation=explanation,
        factors=[
            deciding,
            {"factor": "Location", "impact": "neutral", "note": f"{request.area}, {request.city}"},
            {
                "factor": "Property Size",
                "impact": "neutral",
                "note": f"{request.size:g} {request.size_unit}",
            },
            {
                "factor": "Market Conditions",
                "impact": "neutral",
                "note": "Based on general market assessment",
            },
        ],
        source="heuristic",
    )


def build_prompt(request: PriceCheckRequest) -> str:
    """Analyst prompt for the LLM gateway."""
    optional_lines = [
        f"- Road Access: {request.road_access}" if request.road_access else "",
        f"- Construction Quality: {request.construction_quality}"
        if request.construction_quality
        else "",
        f"- Nearby Amenities: {request.nearby_amenities}" if request.nearby_amenities else "",
        f"- Additional Details: {request.additional_details}"
        if request.additional_details
        else "",
    ]
    details = "\n".join(line for line in optional_lines if line)

    return f"""You are a real estate price analyst for Pakistan's property market. Analyze this property and provide a price assessment.

Property Details:
- Asking Price: PKR {request.asking_price:,}
- Property Type: {request.property_type}
- City: {request.city}
- Area/Locality: {request.area}
- Size: {request.size:g} {request.size_unit}
{details}

Based on your knowledge of Pakistan's real estate market (especially {request.city}), analyze whether this asking price is fair.

Consider these factors:
1. Location premium (prime areas like DHA, Bahria Town command higher prices)
2. Property type and size
3. Road access and plot position
4. Nearby amenities and development status
5. Construction quality (if applicable)
6. Current market trends in the area

Respond ONLY with a valid JSON object in this exact format (no markdown, no code blocks):
{{
  "verdict": "underpriced" | "fair" | "overpriced",
  "estimatedRange": {{
    "min": <number in PKR>,
    "max": <number in PKR>
  }},
  "confidence": "low" | "medium" | "high",
  "explanation": "<2-3 sentences in simple language explaining the assessment>",
  "factors": [
    {{
      "factor": "<factor name>",
      "impact": "positive" | "negative" | "neutral",
      "note": "<brief explanation>"
    }}
  ]
}}

Include 4-6 relevant factors. Be realistic with price estimates based on actual market rates in Pakistan."""


def parse_assessment(content: str) -> PriceAssessment:
    """Parse the model's reply, tolerating markdown code fences."""
    cleaned = _CODE_FENCE.sub("", content or "").strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse AI response: %s", content)
        raise PriceCheckerError("Failed to parse price assessment") from e
    if not isinstance(data, dict):
        raise PriceCheckerError("Failed to parse price assessment")
    data["source"] = "llm"
    try:
        return PriceAssessment.model_validate(data)
    except ValidationError as e:
        logger.error("AI response does not match assessment shape: %s", e)
        raise PriceCheckerError("Failed to parse price assessment") from e


class LLMPriceChecker:
    """Price assessment through a chat completions gateway."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        model: str,
        timeout: int = 30,
        temperature: float = 0.3,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self.temperature = temperature

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
        }

    def assess(self, request: PriceCheckRequest) -> PriceAssessment:
        if not self.api_key:
            raise PriceCheckerNotConfigured("AI gateway API key not configured")

        try:
            response = requests.post(
                self.base_url,
                json=self._payload(build_prompt(request)),
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            code = e.response.status_code if e.response is not None else None
            logger.error("AI API error %s: %s", code, e)
            raise PriceCheckerError(f"AI API error: {code}") from e
        except RequestException as e:
            logger.error("Request error calling AI gateway: %s", e)
            raise PriceCheckerError("AI gateway unreachable") from e

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("Unexpected AI gateway response: %s", e)
            raise PriceCheckerError("Unexpected AI gateway response") from e

        return parse_assessment(content)


def check_price(
    request: PriceCheckRequest,
    mode: str = "heuristic",
    llm_checker: Optional[LLMPriceChecker] = None,
) -> PriceAssessment:
    """Assess with the chosen strategy ("heuristic" or "llm")."""
    if mode == "heuristic":
        return assess_price_heuristic(request)
    if mode == "llm":
        if llm_checker is None:
            raise PriceCheckerNotConfigured("LLM price checker not configured")
        return llm_checker.assess(request)
    raise ValueError(f"Unknown price checker mode: {mode}")
