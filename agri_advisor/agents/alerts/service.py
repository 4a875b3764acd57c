# agri_advisor/agents/alerts/service.py
"""
Weather and market price alerts

Both feeds return sample data until a provider is wired in.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from agri_advisor.agents.advisory.models import Coordinates, Location
from agri_advisor.agents.alerts.models import (
    AlertType, MarketPriceAlert, Severity, WeatherAlert
)

logger = logging.getLogger(__name__)

SAMPLE_LOCATION = Location(
    village="Sample Village",
    state="Sample State",
    district="Sample District",
    coordinates=Coordinates(latitude=20.5937, longitude=78.9629)
)

class AlertService:
    """Serves weather and market alerts for a location"""

    def get_weather_alerts(self, location: str, now: Optional[datetime] = None) -> List[WeatherAlert]:
        now = now or datetime.now(timezone.utc)
        logger.info(f"Weather alerts requested for {location}")
        return [
            WeatherAlert(
                location=SAMPLE_LOCATION,
                alert_type=AlertType.RAIN,
                severity=Severity.MEDIUM,
                message="Heavy rainfall expected in next 24 hours. Avoid irrigation and protect crops.",
                valid_until=(now + timedelta(hours=24)).isoformat()
            ),
            WeatherAlert(
                location=SAMPLE_LOCATION,
                alert_type=AlertType.TEMPERATURE,
                severity=Severity.HIGH,
                message="High temperature warning. Ensure adequate irrigation and shade for crops.",
                valid_until=(now + timedelta(hours=12)).isoformat()
            )
        ]

    def get_market_alerts(
        self,
        crop: Optional[str] = None,
        location: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> List[MarketPriceAlert]:
        updated = (now or datetime.now(timezone.utc)).isoformat()
        logger.info(f"Market alerts requested (crop={crop}, location={location})")
        return [
            MarketPriceAlert(
                crop_name="Rice",
                current_price=2500,
                previous_price=2300,
                change_percent=8.7,
                market="Local Mandi",
                last_updated=updated
            ),
            MarketPriceAlert(
                crop_name="Wheat",
                current_price=2200,
                previous_price=2400,
                change_percent=-8.3,
                market="Regional Market",
                last_updated=updated
            ),
            MarketPriceAlert(
                crop_name="Maize",
                current_price=1800,
                previous_price=1750,
                change_percent=2.9,
                market="State Market",
                last_updated=updated
            )
        ]
