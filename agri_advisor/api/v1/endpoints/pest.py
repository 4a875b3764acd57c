# agri_advisor/api/v1/endpoints/pest.py
from fastapi import APIRouter, Body, HTTPException
from typing import Any, Dict, Optional
import logging

from agri_advisor.agents.farmer.models import PestDetectionRequest
from agri_advisor.api.v1.endpoints.farmer import farmer_service
from agri_advisor.api.validation import parse_body, require_fields

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/detect")
async def detect_pest(payload: Optional[Dict[str, Any]] = Body(None)):
    """Pest identification from a crop photo"""
    try:
        payload = require_fields(payload, ["userId", "pestPhoto", "cropName", "location"])
        request = parse_body(PestDetectionRequest, payload)
        return {
            "success": True,
            "data": farmer_service.detect_pest(request),
            "message": "Pest detection completed successfully"
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Pest detection error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
