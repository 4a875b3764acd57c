# agri_advisor/agents/advisory/prompt.py
"""
Prompt construction for crop advisory generation
"""
from enum import Enum
from typing import Any, Optional

from agri_advisor.agents.advisory.models import FarmerInput

UNKNOWN = "unknown"

ADVISOR_SYSTEM_MESSAGE = (
    "You are an expert agricultural advisor specializing in Indian farming conditions. "
    "Always respond with valid JSON format."
)

RESPONSE_SCHEMA = """{
  "recommendedCrops": [
    {
      "name": "Crop Name",
      "suitabilityScore": 0.85,
      "expectedYield": 3000,
      "inputCost": 15000,
      "timeToHarvest": 120,
      "prosCons": "Detailed pros and cons"
    }
  ],
  "fertilizerPlan": [
    {
      "stage": "Pre-planting",
      "inputs": "Farmyard Manure",
      "frequency": "Once",
      "quantity": 5
    }
  ],
  "pestSchedule": [
    {
      "crop": "Crop Name",
      "riskLevel": "Medium",
      "symptoms": "Common symptoms",
      "recommendedAction": "Prevention/treatment advice"
    }
  ],
  "cropCalendar": [
    {
      "period": "Week 1",
      "operation": "Land Preparation",
      "details": "Detailed operation description"
    }
  ]
}"""


def _value(value: Any) -> str:
    if value is None or value == "":
        return UNKNOWN
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _get(obj: Optional[Any], attr: str) -> Any:
    return getattr(obj, attr, None) if obj is not None else None


def _location_line(farmer_input: FarmerInput) -> str:
    loc = farmer_input.location
    parts = ", ".join(_value(_get(loc, name)) for name in ("village", "district", "state"))
    coords = _get(loc, "coordinates")
    lat, lon = _get(coords, "latitude"), _get(coords, "longitude")
    # The form sends 0, 0 until a position is picked
    if lat is not None and lon is not None and (lat, lon) != (0, 0):
        parts += f" ({_value(lat)}, {_value(lon)})"
    return parts


def _soil_lines(farmer_input: FarmerInput) -> list:
    soil = farmer_input.soil_type
    # pH 0 is the form's untouched default
    ph = _get(soil, "ph") or None
    lines = [f"- Soil Type: {_value(_get(soil, 'texture'))} (pH: {_value(ph)})"]
    npk = _get(soil, "npk")
    if _get(soil, "lab_tested") and npk is not None:
        lines.append(
            f"- Soil NPK (lab tested): N {_value(npk.n)}, P {_value(npk.p)}, K {_value(npk.k)}"
        )
    lines.append(f"- Organic Content: {_value(_get(soil, 'organic_content'))}")
    return lines


def _water_lines(farmer_input: FarmerInput) -> list:
    water = farmer_input.water_availability
    irrigation = _get(water, "irrigation_available")
    return [
        f"- Water Source: {_value(_get(water, 'type'))}",
        f"- Water Depth: {_value(_get(water, 'depth'))}",
        f"- Irrigation Frequency: {_value(_get(water, 'frequency'))}",
        f"- Irrigation Available: {'Yes' if irrigation else 'No'}",
    ]


def _history_line(farmer_input: FarmerInput) -> str:
    if not farmer_input.past_crop_history:
        return f"- Past Crops: {UNKNOWN}"
    entries = []
    for past in farmer_input.past_crop_history:
        entry = f"{past.crop} ({_value(past.season)} {_value(past.year)})"
        if past.disease:
            entry += f" with {past.disease}"
        entries.append(entry)
    return "- Past Crops: " + "; ".join(entries)


def build_advisory_prompt(farmer_input: FarmerInput) -> str:
    """Render the farmer's details into the user prompt for the completion endpoint.

    Missing values are written as ``unknown``; nothing is validated here.
    """
    land = farmer_input.land_area
    lines = [
        "You are an expert agricultural advisor for Indian farmers. Based on the following "
        "farmer information, provide detailed crop recommendations.",
        "",
        "Farmer Information:",
        f"- Location: {_location_line(farmer_input)}",
        f"- Land Area: {_value(_get(land, 'value'))} {_value(_get(land, 'unit'))}",
        *_soil_lines(farmer_input),
        *_water_lines(farmer_input),
        f"- Budget: ₹{_value(farmer_input.budget_inr)}",
        f"- Timeline: {_value(farmer_input.timeline_days)} days",
        f"- Labor Count: {_value(farmer_input.labor_count)} people",
        f"- Risk Preference: {_value(farmer_input.risk_preference)}",
        _history_line(farmer_input),
        "",
        "Please provide recommendations in the following JSON format:",
        RESPONSE_SCHEMA,
        "",
        "Focus on crops suitable for Indian climate and conditions. "
        "Provide practical, actionable advice.",
    ]
    return "\n".join(lines)
