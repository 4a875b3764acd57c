"""
Weather and market alert package
"""

from .models import WeatherAlert, MarketPriceAlert, AlertType, Severity
from .service import AlertService

__all__ = ["AlertService", "WeatherAlert", "MarketPriceAlert", "AlertType", "Severity"]
