# agri_advisor/core/logging.py
"""
Logging configuration for the backend
"""
import logging
import sys
from typing import Optional

from .config import Settings, get_settings

def setup_logging(settings: Optional[Settings] = None):
    """Setup logging configuration"""
    settings = settings or get_settings()

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, settings.log_level.value),
        format=settings.log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Set specific logger levels
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
