import asyncio
import time
import unittest

from agri_advisor.agents.advisory.agent import AdvisoryAgent
from agri_advisor.agents.advisory.models import AdvisoryRequest
from agri_advisor.core.exceptions import AgentConfigError, AgentError

from fakes import FARMER_INPUTS, FakeSession, make_settings, model_reply


def make_request() -> AdvisoryRequest:
    return AdvisoryRequest.model_validate({"userId": "farmer-1", "farmerInputs": FARMER_INPUTS})


class AdvisoryAgentTests(unittest.TestCase):
    def test_missing_credential_is_fatal(self) -> None:
        with self.assertRaises(AgentConfigError):
            AdvisoryAgent(make_settings(openai_api_key=None))

    def test_execute_returns_model_advisory(self) -> None:
        agent = AdvisoryAgent(make_settings(), session=FakeSession.replying(model_reply()))
        response = asyncio.run(agent.execute(make_request()))

        self.assertTrue(response.success)
        self.assertEqual(response.metadata["source"], "model")
        self.assertEqual(response.data.recommended_crops[0].name, "Maize")

    def test_transport_failure_is_absorbed(self) -> None:
        agent = AdvisoryAgent(make_settings(), session=FakeSession.failing())
        response = asyncio.run(agent.execute(make_request()))

        self.assertTrue(response.success)
        self.assertEqual(response.metadata["source"], "fallback")
        self.assertEqual(response.data.confidence, 0.75)

    def test_deadline_falls_back(self) -> None:
        agent = AdvisoryAgent(make_settings(), session=FakeSession.replying(model_reply()))
        agent.deadline_seconds = 0.05

        original_generate = agent.service.generate

        def slow_generate(farmer_input, cancel_event):
            time.sleep(0.3)
            return original_generate(farmer_input, cancel_event)

        agent.service.generate = slow_generate
        response = asyncio.run(agent.execute(make_request()))

        self.assertEqual(response.metadata["source"], "fallback")
        self.assertIn("deadline", response.metadata["error"])
        # the late worker saw the cancel flag and never sent the request
        self.assertEqual(agent.service.session.calls, [])

    def test_strict_mode_raises_agent_error(self) -> None:
        agent = AdvisoryAgent(make_settings(fallback_enabled=False), session=FakeSession.failing())
        with self.assertRaises(AgentError):
            asyncio.run(agent.execute(make_request()))

    def test_health_check(self) -> None:
        agent = AdvisoryAgent(make_settings(), session=FakeSession.failing())
        health = asyncio.run(agent.health_check())
        self.assertEqual(health["status"], "healthy")
        self.assertTrue(health["fallback_enabled"])


if __name__ == "__main__":
    unittest.main()
