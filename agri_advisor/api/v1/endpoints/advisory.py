# agri_advisor/api/v1/endpoints/advisory.py
from fastapi import APIRouter, Body, HTTPException, Response
from typing import Any, Dict, Optional
import logging

from agri_advisor.agents.base import agent_registry
from agri_advisor.agents.advisory.models import AdvisoryRequest
from agri_advisor.api.validation import parse_body, require_fields
from agri_advisor.core.exceptions import AgentError

logger = logging.getLogger(__name__)

router = APIRouter()

SOURCE_HEADER = "X-Advisory-Source"

@router.post("/generate")
async def generate_advisory(
    response: Response,
    payload: Optional[Dict[str, Any]] = Body(None, description="{userId, farmerInputs}")
):
    """
    Generate crop recommendations, fertilizer plan, pest schedule and crop calendar

    Model failures are absorbed: the canned advisory is returned with the same
    shape and the X-Advisory-Source header set to "fallback".
    """
    try:
        payload = require_fields(payload, ["userId", "farmerInputs"])
        request = parse_body(AdvisoryRequest, payload)

        advisory_agent = agent_registry.get("advisory")
        if not advisory_agent:
            raise HTTPException(status_code=500, detail="Advisory agent not available")

        try:
            result = await advisory_agent.execute(request)
        except AgentError as e:
            logger.error(f"Advisory generation failed with fallback disabled: {e}")
            raise HTTPException(status_code=502, detail="Advisory generation failed")

        response.headers[SOURCE_HEADER] = (result.metadata or {}).get("source", "model")
        return {
            "success": True,
            "data": result.data.to_wire(),
            "message": result.message
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Advisory generation error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

@router.get("/health")
async def advisory_health():
    """Check advisory agent health"""
    try:
        advisory_agent = agent_registry.get("advisory")
        if not advisory_agent:
            return {"status": "unhealthy", "error": "Advisory agent not available"}

        health = await advisory_agent.health_check()
        health["model"] = advisory_agent.settings.llm_model
        return health

    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}
