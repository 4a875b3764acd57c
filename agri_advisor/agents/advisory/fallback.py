# agri_advisor/agents/advisory/fallback.py
"""
Canned advisory served when the model cannot produce one
"""
from datetime import datetime
from typing import Optional

from agri_advisor.agents.advisory.models import (
    AdvisoryOutput, RecommendedCrop, FertilizerPlanEntry, PestScheduleEntry,
    CropCalendarEntry, MarketPrice
)
from agri_advisor.agents.advisory.parser import utc_timestamp

FALLBACK_CONFIDENCE = 0.75


def get_fallback_advisory(now: Optional[datetime] = None) -> AdvisoryOutput:
    """Build the fixed advisory; only ``generated_at`` varies between calls"""
    return AdvisoryOutput(
        recommended_crops=[
            RecommendedCrop(
                name="Rice",
                suitability_score=0.85,
                expected_yield=3000,
                input_cost=15000,
                time_to_harvest=120,
                pros_cons="High yield potential, requires good water management",
                market_price=MarketPrice(min=1800, max=2500),
                risk_level="medium"
            ),
            RecommendedCrop(
                name="Wheat",
                suitability_score=0.78,
                expected_yield=2500,
                input_cost=12000,
                time_to_harvest=90,
                pros_cons="Stable income, lower water requirement",
                market_price=MarketPrice(min=2000, max=2800),
                risk_level="low"
            )
        ],
        fertilizer_plan=[
            FertilizerPlanEntry(
                stage="Pre-planting",
                inputs="Farmyard manure",
                frequency="Once",
                quantity=5,
                timing="15 days before planting"
            ),
            FertilizerPlanEntry(
                stage="Vegetative",
                inputs="NPK 20:20:20",
                frequency="Every 15 days",
                quantity=2,
                timing="30, 60, 90 days after planting"
            )
        ],
        pest_schedule=[
            PestScheduleEntry(
                crop="Rice",
                risk_level="Medium",
                symptoms="Yellowing leaves, stunted growth",
                recommended_action="Apply neem oil spray, monitor regularly",
                timing="Around 60 days after planting"
            )
        ],
        crop_calendar=[
            CropCalendarEntry(
                period="Week 1",
                operation="Land preparation",
                details="Plow and level the field, remove weeds"
            ),
            CropCalendarEntry(
                period="Week 2",
                operation="Seedling preparation",
                details="Prepare nursery bed, sow seeds"
            ),
            CropCalendarEntry(
                period="Week 3",
                operation="Transplanting",
                details="Transplant seedlings to main field"
            )
        ],
        generated_at=utc_timestamp(now),
        confidence=FALLBACK_CONFIDENCE
    )
