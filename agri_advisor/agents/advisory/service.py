# agri_advisor/agents/advisory/service.py
"""
Advisory generation service backed by an OpenAI-compatible chat completion API
"""
import logging
import threading
from typing import Any, Dict, Optional

import requests

from agri_advisor.agents.advisory.fallback import get_fallback_advisory
from agri_advisor.agents.advisory.models import (
    AdvisoryOutcome, AdvisoryOutput, AdvisorySource, FarmerInput
)
from agri_advisor.agents.advisory.parser import parse_advisory
from agri_advisor.agents.advisory.prompt import ADVISOR_SYSTEM_MESSAGE, build_advisory_prompt
from agri_advisor.core.config import Settings, validate_api_keys
from agri_advisor.core.exceptions import (
    AdvisoryCancelledError, AdvisoryError, LLMTransportError, MalformedResponseError
)

logger = logging.getLogger(__name__)


class AdvisoryService:
    """Turns a FarmerInput into an AdvisoryOutput via the completion endpoint"""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        validate_api_keys(settings)
        self.settings = settings
        self.api_key = settings.openai_api_key
        self.base_url = settings.llm_base_url.rstrip("/")
        # One requests.Session per executor thread unless a session is injected
        self._session = session
        self._local = threading.local()
        self._sessions = []
        self._sessions_lock = threading.Lock()
        logger.info(f"Advisory service initialized with model {settings.llm_model}")

    @property
    def session(self):
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    @session.setter
    def session(self, session):
        self._session = session

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.settings.llm_model,
            "messages": [
                {"role": "system", "content": ADVISOR_SYSTEM_MESSAGE},
                {"role": "user", "content": prompt}
            ],
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
        }

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise AdvisoryCancelledError("Advisory request was cancelled")

    def complete(self, prompt: str, cancel_event: Optional[threading.Event] = None) -> str:
        """Send one chat completion request and return the reply text"""
        self._check_cancelled(cancel_event)

        try:
            resp = self.session.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=self._build_payload(prompt),
                timeout=self.settings.llm_timeout_seconds,
            )
        except requests.RequestException as e:
            raise LLMTransportError(f"Completion request failed: {e}") from e

        if not resp.ok:
            raise LLMTransportError(f"LLM API Error: {resp.status_code} {resp.reason}")

        self._check_cancelled(cancel_event)

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError(f"Unexpected completion response shape: {e}") from e

        if not isinstance(content, str):
            raise MalformedResponseError("Completion content is not text")
        return content

    def request_advisory(
        self,
        farmer_input: FarmerInput,
        cancel_event: Optional[threading.Event] = None
    ) -> AdvisoryOutput:
        """Model-backed advisory; raises AdvisoryError on any failure"""
        prompt = build_advisory_prompt(farmer_input)
        response_text = self.complete(prompt, cancel_event)
        self._check_cancelled(cancel_event)
        return parse_advisory(response_text)

    def generate(
        self,
        farmer_input: FarmerInput,
        cancel_event: Optional[threading.Event] = None
    ) -> AdvisoryOutcome:
        """Advisory tagged with its source.

        With fallback disabled the AdvisoryError propagates to the caller.
        """
        try:
            advisory = self.request_advisory(farmer_input, cancel_event)
            return AdvisoryOutcome(source=AdvisorySource.MODEL, advisory=advisory)
        except AdvisoryError as e:
            if not self.settings.fallback_enabled:
                raise
            logger.warning(f"Using fallback advisory: {e}")
            return AdvisoryOutcome(
                source=AdvisorySource.FALLBACK,
                advisory=get_fallback_advisory(),
                error=str(e)
            )

    def generate_advisory(self, farmer_input: FarmerInput) -> AdvisoryOutput:
        return self.generate(farmer_input).advisory

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
