# scripts/check_advisory.py
"""
Manual check that the advisory agent works against the configured endpoint
"""

import asyncio
import sys

from agri_advisor.agents.advisory.agent import AdvisoryAgent
from agri_advisor.agents.advisory.models import AdvisoryRequest
from agri_advisor.core.config import get_settings
from agri_advisor.core.exceptions import AgentConfigError
from agri_advisor.core.logging import setup_logging

SAMPLE_REQUEST = {
    "userId": "smoke-test",
    "farmerInputs": {
        "location": {"village": "Khanna", "state": "Punjab", "district": "Ludhiana"},
        "landArea": {"value": 2, "unit": "acres"},
        "soilType": {"texture": "Loamy", "labTested": False},
        "waterAvailability": {"type": "Canal", "frequency": "Weekly", "irrigationAvailable": True},
        "budgetINR": 40000,
        "timelineDays": 120,
        "laborCount": 2,
        "riskPreference": "low",
    },
}

def check_environment() -> bool:
    """Check environment setup"""
    print("Checking environment")
    print("=" * 50)

    settings = get_settings()
    if settings.openai_api_key:
        print("OPENAI_API_KEY is set")
    else:
        print("OPENAI_API_KEY is not set - the agent cannot start")
        return False

    print(f"Model: {settings.llm_model} (max_tokens={settings.max_tokens}, temperature={settings.temperature})")
    print(f"Endpoint: {settings.llm_base_url}")
    print(f"Timeout: {settings.llm_timeout_seconds}s, fallback enabled: {settings.fallback_enabled}")
    return True

async def check_advisory_agent() -> bool:
    """Run one advisory request end to end"""
    print("\nChecking advisory agent")
    print("=" * 50)

    try:
        agent = AdvisoryAgent(get_settings())
    except AgentConfigError as e:
        print(f"Agent failed to start: {e}")
        return False

    health = await agent.health_check()
    print(f"Health: {health['status']}")

    request = AdvisoryRequest.model_validate(SAMPLE_REQUEST)
    response = await agent.execute(request)
    source = (response.metadata or {}).get("source")

    print(f"Source: {source}")
    if source == "fallback":
        print(f"Fallback reason: {response.metadata.get('error')}")
    for crop in response.data.recommended_crops:
        print(f"  {crop.name}: suitability {crop.suitability_score:.2f}, harvest in {crop.time_to_harvest} days")
    print(f"Calendar entries: {len(response.data.crop_calendar)}")

    agent.close()
    return source == "model"

async def main():
    setup_logging()

    if not check_environment():
        sys.exit(1)

    if await check_advisory_agent():
        print("\nModel-backed advisory generated successfully")
    else:
        print("\nAdvisory came from the fallback - check the logs above")
        sys.exit(1)

if __name__ == "__main__":
    asyncio.run(main())
