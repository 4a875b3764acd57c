# run.py
"""
Main entry point for the Agri Advisor backend
"""

import logging

import uvicorn

from agri_advisor.api.app import create_app
from agri_advisor.core.config import get_settings
from agri_advisor.core.logging import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

def create_application():
    """Create FastAPI application with all configurations"""
    return create_app(get_settings())

def main():
    """Main entry point"""
    settings = get_settings()

    logger.info(f"Starting server on {settings.api_host}:{settings.api_port}")
    logger.info(f"Environment: {settings.environment.value}")
    logger.info(f"Debug mode: {settings.debug}")

    if settings.debug:
        # Use import string for reload to work
        uvicorn.run(
            "run:create_application",
            factory=True,
            host=settings.api_host,
            port=settings.api_port,
            reload=True,
            log_level=settings.log_level.value.lower(),
            access_log=True
        )
    else:
        app = create_application()
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            reload=False,
            log_level=settings.log_level.value.lower(),
            access_log=True
        )

if __name__ == "__main__":
    main()
