# agri_advisor/api/v1/endpoints/alerts.py
from fastapi import APIRouter, HTTPException, Query
from typing import Optional
import logging

from agri_advisor.agents.alerts.service import AlertService

logger = logging.getLogger(__name__)

router = APIRouter()
alert_service = AlertService()

@router.get("/weather")
async def get_weather_alerts(
    location: Optional[str] = Query(None, description="Village, district or state to get alerts for")
):
    """Weather alerts (rain, drought, storm, temperature) for a location"""
    if not location or not location.strip():
        raise HTTPException(status_code=400, detail="Missing required parameter: location")

    try:
        alerts = alert_service.get_weather_alerts(location.strip())
        return {
            "success": True,
            "data": [alert.to_wire() for alert in alerts],
            "message": "Weather alerts retrieved successfully"
        }
    except Exception as e:
        logger.error(f"Weather alerts error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

@router.get("/market")
async def get_market_alerts(
    crop: Optional[str] = Query(None, description="Crop name (e.g., Rice, Wheat)"),
    location: Optional[str] = Query(None, description="Market location")
):
    """Market price movements for common crops"""
    try:
        alerts = alert_service.get_market_alerts(crop, location)
        return {
            "success": True,
            "data": [alert.to_wire() for alert in alerts],
            "message": "Market price alerts retrieved successfully"
        }
    except Exception as e:
        logger.error(f"Market price alerts error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
