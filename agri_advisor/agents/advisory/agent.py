# agri_advisor/agents/advisory/agent.py
"""
Crop advisory agent using an LLM chat completion endpoint
"""

import asyncio
import threading
from typing import Optional
from datetime import datetime

import requests

from agri_advisor.agents.base import BaseAgent
from agri_advisor.agents.advisory.fallback import get_fallback_advisory
from agri_advisor.agents.advisory.models import (
    AdvisoryRequest, AdvisoryResponse, AdvisoryOutcome, AdvisorySource
)
from agri_advisor.agents.advisory.service import AdvisoryService
from agri_advisor.core.config import Settings, validate_api_keys
from agri_advisor.core.exceptions import AdvisoryCancelledError

SUCCESS_MESSAGE = "Advisory generated successfully"

# Extra time on top of the HTTP timeout before the request is abandoned
DEADLINE_GRACE_SECONDS = 5.0

class AdvisoryAgent(BaseAgent[AdvisoryRequest, AdvisoryResponse]):
    """
    Crop advisory agent

    Features:
    - Crop recommendations with suitability scores
    - Fertilizer plan and pest schedule
    - Week-by-week crop calendar
    - Canned advisory whenever the model cannot be used
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        super().__init__("advisory", settings)
        self.service = AdvisoryService(self.settings, session=session)
        self.deadline_seconds = self.settings.llm_timeout_seconds + DEADLINE_GRACE_SECONDS

    def _validate_config(self) -> None:
        """Credential must be present before the agent can serve requests"""
        validate_api_keys(self.settings)

    async def process_request(self, request: AdvisoryRequest) -> AdvisoryResponse:
        """Generate an advisory for one farmer"""
        self.logger.info(f"Generating advisory for user {request.user_id}")

        outcome = await self._generate(request)

        if outcome.is_fallback:
            self.logger.warning(f"Advisory for user {request.user_id} served from fallback: {outcome.error}")
        else:
            self.logger.info(
                f"Advisory for user {request.user_id}: "
                f"{len(outcome.advisory.recommended_crops)} crops recommended"
            )

        return AdvisoryResponse(
            success=True,
            data=outcome.advisory,
            message=SUCCESS_MESSAGE,
            timestamp=datetime.now().isoformat(),
            metadata={"source": outcome.source.value, "error": outcome.error}
        )

    async def _generate(self, request: AdvisoryRequest) -> AdvisoryOutcome:
        """Run the blocking service call in the executor under a deadline"""
        cancel_event = threading.Event()
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(None, self.service.generate, request.farmer_inputs, cancel_event),
                timeout=self.deadline_seconds
            )
        except asyncio.TimeoutError as e:
            cancel_event.set()
            raise AdvisoryCancelledError(
                f"Advisory generation exceeded {self.deadline_seconds:.0f}s deadline"
            ) from e
        except asyncio.CancelledError:
            cancel_event.set()
            raise

    def get_fallback_response(self, request: AdvisoryRequest, error: Exception) -> AdvisoryResponse:
        """Get fallback response when agent fails"""
        return AdvisoryResponse(
            success=True,
            data=get_fallback_advisory(),
            message=SUCCESS_MESSAGE,
            timestamp=datetime.now().isoformat(),
            metadata={"source": AdvisorySource.FALLBACK.value, "error": str(error)}
        )

    def close(self) -> None:
        self.service.close()
