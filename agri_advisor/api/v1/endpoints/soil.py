# agri_advisor/api/v1/endpoints/soil.py
from fastapi import APIRouter, Body, HTTPException
from typing import Any, Dict, Optional
import logging

from agri_advisor.agents.farmer.models import SoilTestRequest
from agri_advisor.api.v1.endpoints.farmer import farmer_service
from agri_advisor.api.validation import parse_body, require_fields

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/test")
async def soil_test(payload: Optional[Dict[str, Any]] = Body(None)):
    """Soil analysis from a photo"""
    try:
        payload = require_fields(payload, ["userId", "soilPhoto", "location"])
        request = parse_body(SoilTestRequest, payload)
        return {
            "success": True,
            "data": farmer_service.analyze_soil(request),
            "message": "Soil test completed successfully"
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Soil test error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
