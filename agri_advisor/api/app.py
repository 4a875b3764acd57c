# agri_advisor/api/app.py
"""
FastAPI application factory
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from agri_advisor.agents.advisory.agent import AdvisoryAgent
from agri_advisor.agents.base import agent_registry
from agri_advisor.api.v1.router import api_router
from agri_advisor.core.config import Settings, get_settings
from agri_advisor.core.rate_limit import RateLimiter

logger = logging.getLogger(__name__)

def build_lifespan(settings: Settings):
    """Lifespan that builds and registers the agents for this app"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.api_title}")

        # A missing credential stops startup here
        advisory_agent = AdvisoryAgent(settings)
        agent_registry.register(advisory_agent)

        health_results = await agent_registry.health_check_all()
        for agent_name, health in health_results.items():
            logger.info(f"{agent_name}: {health['status']}")

        yield

        logger.info(f"Shutting down {settings.api_title}")
        agent_registry.unregister(advisory_agent.agent_name)
        advisory_agent.close()

    return lifespan

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})

def create_app(settings: Optional[Settings] = None, lifespan=None) -> FastAPI:
    """Create FastAPI application"""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan or build_lifespan(settings)
    )
    app.state.settings = settings
    app.state.rate_limiter = RateLimiter(settings.rate_limit_requests, settings.rate_limit_window)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if settings.rate_limit_enabled and request.url.path.startswith("/api"):
            client_ip = request.client.host if request.client else "unknown"
            allowed, error_msg = app.state.rate_limiter.check_rate_limit(client_ip, request.url.path)
            if not allowed:
                logger.warning(f"Rate limited {client_ip} on {request.url.path}")
                return _error_response(429, error_msg)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error_response(400, "Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
        return _error_response(500, "Internal server error")

    # Include routers
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "service": settings.api_title,
            "version": settings.api_version,
            "status": "healthy"
        }

    return app
