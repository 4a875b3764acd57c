# agri_advisor/agents/farmer/service.py
"""
Farmer registration, input intake, soil testing and pest detection

None of these persist anything yet; they acknowledge the request and return
sample analysis results.
"""
import base64
import binascii
import io
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from PIL import Image, UnidentifiedImageError

from agri_advisor.agents.farmer.models import (
    FarmerInputRequest, FarmerRegisterRequest, PestDetectionRequest, SoilTestRequest
)

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def describe_photo(photo: str) -> Optional[Dict[str, Any]]:
    """Format and size of a base64 encoded image, or None for URLs and other strings"""
    data = photo
    if data.startswith("data:image"):
        data = data.split(",", 1)[-1]

    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return None

    try:
        with Image.open(io.BytesIO(raw)) as image:
            width, height = image.size
            return {"format": image.format, "width": width, "height": height}
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        logger.debug(f"Photo is not a readable image: {e}")
        return None


class FarmerService:
    """Acknowledges farmer submissions"""

    def register(self, request: FarmerRegisterRequest) -> Dict[str, Any]:
        logger.info(f"Registering farmer {request.user_id}")
        return {
            **request.to_wire(),
            "createdAt": _now()
        }

    def submit_input(self, request: FarmerInputRequest) -> Dict[str, Any]:
        logger.info(f"Received farmer input from {request.user_id}")
        return {
            **request.to_wire(),
            "submittedAt": _now(),
            "status": "processing"
        }

    def analyze_soil(self, request: SoilTestRequest) -> Dict[str, Any]:
        logger.info(f"Soil test requested by {request.user_id}")
        result = {
            "userId": request.user_id,
            "location": request.location.to_wire(),
            "soilAnalysis": {
                "texture": "Clay loam",
                "pH": 6.8,
                "organicContent": "Medium",
                "NPK": {"N": 45, "P": 25, "K": 180},
                "recommendations": [
                    "Add organic compost to improve soil structure",
                    "Apply phosphorus fertilizer for better root development",
                    "Monitor pH levels regularly"
                ],
                "nearbyLabs": [
                    {
                        "name": "Regional Soil Testing Lab",
                        "distance": "15 km",
                        "contact": "+91-9876543210"
                    }
                ]
            },
            "analyzedAt": _now()
        }
        photo = describe_photo(request.soil_photo)
        if photo:
            result["photo"] = photo
        return result

    def detect_pest(self, request: PestDetectionRequest) -> Dict[str, Any]:
        logger.info(f"Pest detection requested by {request.user_id} for {request.crop_name}")
        result = {
            "userId": request.user_id,
            "cropName": request.crop_name,
            "location": request.location.to_wire(),
            "pestAnalysis": {
                "pestIdentified": "Aphids",
                "confidence": 0.92,
                "severity": "Medium",
                "symptoms": [
                    "Curled leaves",
                    "Sticky honeydew on leaves",
                    "Stunted growth"
                ],
                "treatment": {
                    "immediate": [
                        "Spray neem oil solution",
                        "Remove heavily infested leaves",
                        "Increase air circulation"
                    ],
                    "preventive": [
                        "Introduce beneficial insects",
                        "Use companion planting",
                        "Regular monitoring"
                    ]
                },
                "timeline": {
                    "immediate": "Apply treatment within 24 hours",
                    "followUp": "Monitor every 3 days for 2 weeks",
                    "prevention": "Weekly inspection during growing season"
                }
            },
            "detectedAt": _now()
        }
        photo = describe_photo(request.pest_photo)
        if photo:
            result["photo"] = photo
        return result
