# agri_advisor/api/v1/endpoints/health.py
from fastapi import APIRouter
from datetime import datetime

from agri_advisor.agents.base import agent_registry

router = APIRouter()

@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "service": "Agri Advisor Backend",
        "agents": agent_registry.list_agents()
    }
