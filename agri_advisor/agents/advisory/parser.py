# agri_advisor/agents/advisory/parser.py
"""
Extraction and mapping of the model's reply onto AdvisoryOutput
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from agri_advisor.agents.advisory.models import (
    AdvisoryOutput, RecommendedCrop, FertilizerPlanEntry, PestScheduleEntry,
    CropCalendarEntry, MarketPrice
)
from agri_advisor.core.exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

# Values the model is never asked for; always filled in here.
DEFAULT_MARKET_PRICE = {"min": 1500, "max": 3000}
DEFAULT_CROP_RISK_LEVEL = "medium"
DEFAULT_FERTILIZER_TIMING = "As recommended"
DEFAULT_PEST_TIMING = "Monitor regularly"
MODEL_CONFIDENCE = 0.85


def utc_timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def extract_json_object(text: str) -> str:
    """Return the first balanced top-level ``{...}`` object in ``text``.

    Braces inside JSON string literals are not counted, so prose after the
    object (or quoted braces inside it) does not change the span.
    """
    if not text:
        raise MalformedResponseError("Model reply was empty")

    start = text.find("{")
    if start == -1:
        raise MalformedResponseError("No JSON object found in model reply")

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]

    raise MalformedResponseError("Unbalanced JSON object in model reply")


def _section(parsed: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    items = parsed.get(key)
    if not isinstance(items, list):
        raise MalformedResponseError(f"'{key}' missing or not a list")
    for item in items:
        if not isinstance(item, dict):
            raise MalformedResponseError(f"'{key}' entries must be objects")
    return items


def map_advisory(parsed: Any, now: Optional[datetime] = None) -> AdvisoryOutput:
    """Copy the model's fields into AdvisoryOutput, filling the fixed defaults"""
    if not isinstance(parsed, dict):
        raise MalformedResponseError("Model reply JSON is not an object")

    try:
        return AdvisoryOutput(
            recommended_crops=[
                RecommendedCrop(
                    name=crop.get("name"),
                    suitability_score=crop.get("suitabilityScore"),
                    expected_yield=crop.get("expectedYield"),
                    input_cost=crop.get("inputCost"),
                    time_to_harvest=crop.get("timeToHarvest"),
                    pros_cons=crop.get("prosCons"),
                    market_price=MarketPrice(**DEFAULT_MARKET_PRICE),
                    risk_level=DEFAULT_CROP_RISK_LEVEL,
                )
                for crop in _section(parsed, "recommendedCrops")
            ],
            fertilizer_plan=[
                FertilizerPlanEntry(
                    stage=plan.get("stage"),
                    inputs=plan.get("inputs"),
                    frequency=plan.get("frequency"),
                    quantity=plan.get("quantity"),
                    timing=DEFAULT_FERTILIZER_TIMING,
                )
                for plan in _section(parsed, "fertilizerPlan")
            ],
            pest_schedule=[
                PestScheduleEntry(
                    crop=pest.get("crop"),
                    risk_level=pest.get("riskLevel"),
                    symptoms=pest.get("symptoms"),
                    recommended_action=pest.get("recommendedAction"),
                    timing=DEFAULT_PEST_TIMING,
                )
                for pest in _section(parsed, "pestSchedule")
            ],
            crop_calendar=[
                CropCalendarEntry(
                    period=entry.get("period"),
                    operation=entry.get("operation"),
                    details=entry.get("details"),
                )
                for entry in _section(parsed, "cropCalendar")
            ],
            generated_at=utc_timestamp(now),
            confidence=MODEL_CONFIDENCE,
        )
    except ValidationError as e:
        raise MalformedResponseError(f"Model reply does not match advisory schema: {e}") from e


def parse_advisory(response_text: str, now: Optional[datetime] = None) -> AdvisoryOutput:
    """Parse the completion text into an AdvisoryOutput or raise MalformedResponseError"""
    json_text = extract_json_object(response_text)
    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse model reply as JSON: {e}")
        logger.debug(f"Response text: {response_text[:500]}...")
        raise MalformedResponseError("Model reply was not valid JSON") from e

    return map_advisory(parsed, now)
