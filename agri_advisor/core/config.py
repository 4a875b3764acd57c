# agri_advisor/core/config.py
"""
Configuration management for the advisory backend
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from functools import lru_cache
from enum import Enum
import logging
from dotenv import load_dotenv

from .exceptions import AgentConfigError

load_dotenv()

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    """Application settings with validation"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    # API Configuration
    api_title: str = "Agri Advisor Backend"
    api_version: str = "1.0.0"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # Completion endpoint
    openai_api_key: Optional[str] = None
    llm_base_url: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-3.5-turbo"
    max_tokens: int = Field(2000, gt=0)
    temperature: float = Field(0.7, ge=0, le=2)
    llm_timeout_seconds: float = Field(30.0, gt=0)

    # Serve the canned advisory when the model cannot be used
    fallback_enabled: bool = True

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_requests: int = Field(100, gt=0)
    rate_limit_window: int = Field(900, gt=0)  # seconds


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


def validate_api_keys(settings: Settings) -> None:
    """Validate that the completion endpoint credential is present"""
    if not settings.openai_api_key:
        raise AgentConfigError(
            "OPENAI_API_KEY is required. Please set it in your environment variables."
        )
    logger.debug("OPENAI_API_KEY is set")
