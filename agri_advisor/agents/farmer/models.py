# agri_advisor/agents/farmer/models.py
"""
Pydantic models for farmer-facing stub endpoints
"""
from pydantic import Field

from agri_advisor.agents.advisory.models import WireModel, FarmerInput, Location, LandArea

class FarmerRegisterRequest(WireModel):
    user_id: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1, description="Preferred UI language code")
    contact_mode: str = Field(..., min_length=1, description="e.g. sms, voice, app")

class FarmerInputRequest(FarmerInput):
    user_id: str = Field(..., min_length=1)
    location: Location
    land_area: LandArea

class SoilTestRequest(WireModel):
    user_id: str = Field(..., min_length=1)
    soil_photo: str = Field(..., min_length=1, description="Photo URL or base64 image")
    location: Location

class PestDetectionRequest(WireModel):
    user_id: str = Field(..., min_length=1)
    pest_photo: str = Field(..., min_length=1, description="Photo URL or base64 image")
    crop_name: str = Field(..., min_length=1)
    location: Location
