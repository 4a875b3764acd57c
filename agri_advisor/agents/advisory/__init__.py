"""
Crop advisory agent package
"""

from .agent import AdvisoryAgent
from .models import AdvisoryRequest, AdvisoryResponse, AdvisoryOutput, FarmerInput
from .service import AdvisoryService

__all__ = [
    "AdvisoryAgent", "AdvisoryService", "AdvisoryRequest", "AdvisoryResponse",
    "AdvisoryOutput", "FarmerInput"
]
