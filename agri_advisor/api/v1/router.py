from fastapi import APIRouter
from .endpoints import health, advisory, alerts, farmer, soil, pest

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(advisory.router, prefix="/advisory", tags=["advisory"])
api_router.include_router(alerts.router, prefix="/alerts", tags=["alerts"])
api_router.include_router(farmer.router, prefix="/farmer", tags=["farmer"])
api_router.include_router(soil.router, prefix="/soil", tags=["soil"])
api_router.include_router(pest.router, prefix="/pest", tags=["pest"])
