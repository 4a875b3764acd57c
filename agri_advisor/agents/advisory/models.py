# agri_advisor/agents/advisory/models.py
"""
Pydantic models for the advisory agent

Wire names follow the web client (camelCase); attributes are snake_case.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional, Dict, Any
from enum import Enum


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class FrozenWireModel(WireModel):
    model_config = ConfigDict(frozen=True)


# Farmer input

class RiskPreference(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    # Choices offered by the web form
    HIGH_YIELD = "high_yield"
    STABLE_INCOME = "stable_income"
    LOW_RISK = "low_risk"


def _blank_to_none(value):
    # Blank number inputs arrive from the web form as ""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Coordinates(FrozenWireModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return _blank_to_none(value)


class Location(FrozenWireModel):
    village: Optional[str] = None
    state: Optional[str] = None
    district: Optional[str] = None
    coordinates: Optional[Coordinates] = None


class LandArea(FrozenWireModel):
    value: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return _blank_to_none(value)


class NPK(FrozenWireModel):
    n: Optional[float] = Field(None, alias="N")
    p: Optional[float] = Field(None, alias="P")
    k: Optional[float] = Field(None, alias="K")

    @field_validator("n", "p", "k", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return _blank_to_none(value)


class SoilType(FrozenWireModel):
    texture: Optional[str] = None
    photo_url: Optional[str] = None
    lab_tested: bool = False
    npk: Optional[NPK] = Field(None, alias="NPK")
    ph: Optional[float] = Field(None, alias="pH", ge=0, le=14)
    organic_content: Optional[str] = None

    @field_validator("ph", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return _blank_to_none(value)


class WaterAvailability(FrozenWireModel):
    type: Optional[str] = None
    depth: Optional[float] = None
    frequency: Optional[str] = None
    irrigation_available: bool = False

    @field_validator("depth", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return _blank_to_none(value)


class PastCropHistory(FrozenWireModel):
    crop: str
    season: Optional[str] = None
    year: Optional[int] = None
    disease: Optional[str] = None

    @field_validator("year", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return _blank_to_none(value)


class FarmerInput(FrozenWireModel):
    """Everything the farmer told us about their land and resources"""

    location: Optional[Location] = None
    land_area: Optional[LandArea] = None
    soil_type: Optional[SoilType] = None
    water_availability: Optional[WaterAvailability] = None
    budget_inr: Optional[float] = Field(None, alias="budgetINR", ge=0)
    timeline_days: Optional[int] = Field(None, ge=0)
    labor_count: Optional[int] = Field(None, ge=0)
    risk_preference: Optional[RiskPreference] = None
    past_crop_history: List[PastCropHistory] = Field(default_factory=list)

    @field_validator("budget_inr", "timeline_days", "labor_count", mode="before")
    @classmethod
    def _blank_numbers(cls, value):
        return _blank_to_none(value)

    @field_validator("risk_preference", mode="before")
    @classmethod
    def _normalise_risk(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value


# Advisory output

class MarketPrice(FrozenWireModel):
    min: float
    max: float


class RecommendedCrop(FrozenWireModel):
    name: str
    suitability_score: float = Field(..., ge=0, le=1)
    expected_yield: Optional[float] = None
    input_cost: float
    time_to_harvest: int
    pros_cons: str
    market_price: MarketPrice
    risk_level: str


class FertilizerPlanEntry(FrozenWireModel):
    stage: str
    inputs: str
    frequency: str
    quantity: float
    timing: str


class PestScheduleEntry(FrozenWireModel):
    crop: str
    risk_level: str
    symptoms: str
    recommended_action: str
    timing: str


class CropCalendarEntry(FrozenWireModel):
    period: str
    operation: str
    details: str


class AdvisoryOutput(FrozenWireModel):
    recommended_crops: List[RecommendedCrop]
    fertilizer_plan: List[FertilizerPlanEntry]
    pest_schedule: List[PestScheduleEntry]
    crop_calendar: List[CropCalendarEntry]
    generated_at: str
    confidence: float = Field(..., ge=0, le=1)


class AdvisorySource(str, Enum):
    MODEL = "model"
    FALLBACK = "fallback"


class AdvisoryOutcome(FrozenWireModel):
    """Advisory tagged with where it came from"""

    source: AdvisorySource
    advisory: AdvisoryOutput
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.source == AdvisorySource.FALLBACK


# Agent request / response

class AdvisoryRequest(WireModel):
    user_id: str = Field(..., min_length=1)
    farmer_inputs: FarmerInput


class AdvisoryResponse(WireModel):
    success: bool
    data: Optional[AdvisoryOutput] = None
    message: str
    timestamp: str
    metadata: Optional[Dict[str, Any]] = None
