# agri_advisor/api/v1/endpoints/farmer.py
from fastapi import APIRouter, Body, HTTPException
from typing import Any, Dict, Optional
import logging

from agri_advisor.agents.farmer.models import FarmerInputRequest, FarmerRegisterRequest
from agri_advisor.agents.farmer.service import FarmerService
from agri_advisor.api.validation import parse_body, require_fields

logger = logging.getLogger(__name__)

router = APIRouter()
farmer_service = FarmerService()

@router.post("/register", status_code=201)
async def register_farmer(payload: Optional[Dict[str, Any]] = Body(None)):
    """Register a farmer with their language and contact preference"""
    try:
        payload = require_fields(payload, ["userId", "language", "contactMode"])
        request = parse_body(FarmerRegisterRequest, payload)
        return {
            "success": True,
            "data": farmer_service.register(request),
            "message": "Farmer registered successfully"
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Farmer registration error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

@router.post("/input")
async def submit_farmer_input(payload: Optional[Dict[str, Any]] = Body(None)):
    """Accept the multi-step form submission"""
    try:
        payload = require_fields(payload, ["userId", "location", "landArea"])
        request = parse_body(FarmerInputRequest, payload)
        return {
            "success": True,
            "data": farmer_service.submit_input(request),
            "message": "Farmer input processed successfully"
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Farmer input processing error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
