import base64
import io
import unittest

from fastapi.testclient import TestClient
from PIL import Image

from agri_advisor.agents.base import agent_registry
from agri_advisor.api.app import create_app
from agri_advisor.core.exceptions import AgentConfigError

from fakes import FARMER_INPUTS, FakeSession, make_settings, model_reply

LOCATION = FARMER_INPUTS["location"]


def png_base64() -> str:
    buffer = io.BytesIO()
    Image.new("RGB", (64, 48), color=(90, 140, 60)).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


class ApiTestCase(unittest.TestCase):
    settings_overrides = {}

    def setUp(self) -> None:
        self.app = create_app(make_settings(**self.settings_overrides))
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def use_session(self, session: FakeSession) -> None:
        agent_registry.get("advisory").service.session = session


class AdvisoryEndpointTests(ApiTestCase):
    def test_empty_body_is_rejected(self) -> None:
        resp = self.client.post("/api/advisory/generate", json={})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])
        self.assertIn("userId", resp.json()["error"])

    def test_missing_farmer_inputs_is_rejected(self) -> None:
        resp = self.client.post("/api/advisory/generate", json={"userId": "farmer-1"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Missing required fields: farmerInputs")

    def test_malformed_farmer_inputs_is_rejected(self) -> None:
        inputs = {**FARMER_INPUTS, "riskPreference": "reckless"}
        resp = self.client.post("/api/advisory/generate", json={"userId": "farmer-1", "farmerInputs": inputs})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])

    def test_non_object_body_is_rejected(self) -> None:
        resp = self.client.post("/api/advisory/generate", json=["not", "an", "object"])
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])

    def test_transport_failure_still_succeeds_with_fallback(self) -> None:
        self.use_session(FakeSession.failing())
        resp = self.client.post(
            "/api/advisory/generate", json={"userId": "farmer-1", "farmerInputs": FARMER_INPUTS}
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Advisory generated successfully")
        self.assertEqual(body["data"]["confidence"], 0.75)
        self.assertEqual([c["name"] for c in body["data"]["recommendedCrops"]], ["Rice", "Wheat"])
        self.assertEqual(resp.headers["X-Advisory-Source"], "fallback")

    def test_model_reply_is_returned(self) -> None:
        self.use_session(FakeSession.replying(model_reply()))
        resp = self.client.post(
            "/api/advisory/generate", json={"userId": "farmer-1", "farmerInputs": FARMER_INPUTS}
        )
        self.assertEqual(resp.status_code, 200)
        crop = resp.json()["data"]["recommendedCrops"][0]
        self.assertEqual(crop["name"], "Maize")
        self.assertEqual(crop["marketPrice"], {"min": 1500.0, "max": 3000.0})
        self.assertEqual(crop["riskLevel"], "medium")
        self.assertEqual(set(resp.json()), {"success", "data", "message"})
        self.assertEqual(resp.headers["X-Advisory-Source"], "model")

    def post_form_inputs(self, inputs: dict):
        session = FakeSession.replying(model_reply())
        self.use_session(session)
        resp = self.client.post("/api/advisory/generate", json={"userId": "farmer-1", "farmerInputs": inputs})
        prompt = session.calls[0]["json"]["messages"][1]["content"] if session.calls else ""
        return resp, prompt

    def test_form_risk_choice_is_accepted(self) -> None:
        resp, prompt = self.post_form_inputs({**FARMER_INPUTS, "riskPreference": "stable_income"})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["success"])
        self.assertIn("- Risk Preference: stable_income", prompt)

    def test_blank_water_depth_is_accepted(self) -> None:
        water = {**FARMER_INPUTS["waterAvailability"], "depth": ""}
        resp, prompt = self.post_form_inputs({**FARMER_INPUTS, "waterAvailability": water})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["X-Advisory-Source"], "model")
        self.assertIn("- Water Depth: unknown", prompt)

    def test_agent_health(self) -> None:
        resp = self.client.get("/api/advisory/health")
        self.assertEqual(resp.json()["status"], "healthy")
        self.assertEqual(resp.json()["model"], "gpt-3.5-turbo")


class StrictModeTests(ApiTestCase):
    settings_overrides = {"fallback_enabled": False}

    def test_model_failure_is_reported(self) -> None:
        self.use_session(FakeSession.failing())
        resp = self.client.post(
            "/api/advisory/generate", json={"userId": "farmer-1", "farmerInputs": FARMER_INPUTS}
        )
        self.assertEqual(resp.status_code, 502)
        self.assertEqual(resp.json(), {"success": False, "error": "Advisory generation failed"})


class AlertEndpointTests(ApiTestCase):
    def test_weather_requires_location(self) -> None:
        resp = self.client.get("/api/alerts/weather")
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])

    def test_weather_alerts(self) -> None:
        resp = self.client.get("/api/alerts/weather", params={"location": "Ludhiana"})
        self.assertEqual(resp.status_code, 200)
        alerts = resp.json()["data"]
        self.assertEqual([a["alertType"] for a in alerts], ["rain", "temperature"])
        self.assertEqual([a["severity"] for a in alerts], ["medium", "high"])
        self.assertIn("validUntil", alerts[0])

    def test_market_alerts(self) -> None:
        resp = self.client.get("/api/alerts/market", params={"crop": "Rice", "location": "Ludhiana"})
        self.assertEqual(resp.status_code, 200)
        alerts = resp.json()["data"]
        self.assertEqual(len(alerts), 3)
        self.assertEqual(
            set(alerts[0]),
            {"cropName", "currentPrice", "previousPrice", "changePercent", "market", "lastUpdated"}
        )


class FarmerEndpointTests(ApiTestCase):
    def test_register(self) -> None:
        resp = self.client.post(
            "/api/farmer/register", json={"userId": "farmer-1", "language": "hi", "contactMode": "sms"}
        )
        self.assertEqual(resp.status_code, 201)
        data = resp.json()["data"]
        self.assertEqual(data["language"], "hi")
        self.assertIn("createdAt", data)

    def test_register_requires_fields(self) -> None:
        resp = self.client.post("/api/farmer/register", json={"userId": "farmer-1"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Missing required fields: language, contactMode")

    def test_submit_input(self) -> None:
        resp = self.client.post("/api/farmer/input", json={"userId": "farmer-1", **FARMER_INPUTS})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["status"], "processing")
        self.assertEqual(data["landArea"], {"value": 2.5, "unit": "acres"})

    def test_submit_input_requires_land_area(self) -> None:
        resp = self.client.post("/api/farmer/input", json={"userId": "farmer-1", "location": LOCATION})
        self.assertEqual(resp.status_code, 400)

    def test_soil_test_reads_photo(self) -> None:
        resp = self.client.post(
            "/api/soil/test", json={"userId": "farmer-1", "soilPhoto": png_base64(), "location": LOCATION}
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["soilAnalysis"]["pH"], 6.8)
        self.assertEqual(data["photo"], {"format": "PNG", "width": 64, "height": 48})

    def test_soil_test_requires_photo(self) -> None:
        resp = self.client.post("/api/soil/test", json={"userId": "farmer-1", "location": LOCATION})
        self.assertEqual(resp.status_code, 400)

    def test_pest_detect_with_photo_url(self) -> None:
        resp = self.client.post(
            "/api/pest/detect",
            json={
                "userId": "farmer-1",
                "pestPhoto": "https://example.com/leaf.jpg",
                "cropName": "Cotton",
                "location": LOCATION,
            },
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["cropName"], "Cotton")
        self.assertEqual(data["pestAnalysis"]["pestIdentified"], "Aphids")
        self.assertNotIn("photo", data)

    def test_pest_detect_requires_crop(self) -> None:
        resp = self.client.post(
            "/api/pest/detect", json={"userId": "farmer-1", "pestPhoto": "x.jpg", "location": LOCATION}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("cropName", resp.json()["error"])


class RateLimitTests(ApiTestCase):
    settings_overrides = {"rate_limit_enabled": True, "rate_limit_requests": 2, "rate_limit_window": 60}

    def test_requests_over_budget_get_429(self) -> None:
        for _ in range(2):
            self.assertEqual(self.client.get("/api/alerts/market").status_code, 200)
        resp = self.client.get("/api/alerts/market")
        self.assertEqual(resp.status_code, 429)
        self.assertFalse(resp.json()["success"])

    def test_root_is_not_limited(self) -> None:
        for _ in range(3):
            self.assertEqual(self.client.get("/").status_code, 200)


class StartupTests(unittest.TestCase):
    def test_missing_credential_stops_startup(self) -> None:
        app = create_app(make_settings(openai_api_key=None))
        with self.assertRaises(AgentConfigError):
            with TestClient(app):
                pass

    def test_health(self) -> None:
        with TestClient(create_app(make_settings())) as client:
            resp = client.get("/api/health/")
            self.assertEqual(resp.json()["status"], "healthy")
            self.assertIn("advisory", resp.json()["agents"])


if __name__ == "__main__":
    unittest.main()
