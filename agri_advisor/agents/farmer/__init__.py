"""
Farmer registration, input submission, soil test and pest detection package
"""

from .models import (
    FarmerRegisterRequest, FarmerInputRequest, SoilTestRequest, PestDetectionRequest
)
from .service import FarmerService

__all__ = [
    "FarmerService", "FarmerRegisterRequest", "FarmerInputRequest",
    "SoilTestRequest", "PestDetectionRequest"
]
