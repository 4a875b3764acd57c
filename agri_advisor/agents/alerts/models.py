# agri_advisor/agents/alerts/models.py
"""
Pydantic models for weather and market alerts
"""
from pydantic import Field
from enum import Enum

from agri_advisor.agents.advisory.models import WireModel, Location

class AlertType(str, Enum):
    RAIN = "rain"
    DROUGHT = "drought"
    STORM = "storm"
    TEMPERATURE = "temperature"

class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class WeatherAlert(WireModel):
    location: Location
    alert_type: AlertType
    severity: Severity
    message: str
    valid_until: str = Field(..., description="ISO timestamp after which the alert lapses")

class MarketPriceAlert(WireModel):
    crop_name: str
    current_price: float
    previous_price: float
    change_percent: float
    market: str
    last_updated: str

