"""Shared fixtures for the advisory tests"""
import json

import requests

from agri_advisor.core.config import Settings

FARMER_INPUTS = {
    "location": {
        "village": "Khanna",
        "state": "Punjab",
        "district": "Ludhiana",
        "coordinates": {"latitude": 30.7046, "longitude": 76.2219},
    },
    "landArea": {"value": 2.5, "unit": "acres"},
    "soilType": {
        "texture": "Loamy",
        "labTested": True,
        "NPK": {"N": 40, "P": 20, "K": 150},
        "pH": 7.2,
        "organicContent": "Low",
    },
    "waterAvailability": {
        "type": "Borewell",
        "depth": 60,
        "frequency": "Weekly",
        "irrigationAvailable": True,
    },
    "budgetINR": 50000,
    "timelineDays": 120,
    "laborCount": 3,
    "riskPreference": "Medium",
    "pastCropHistory": [{"crop": "Wheat", "season": "Rabi", "year": 2024}],
}

MODEL_ADVISORY = {
    "recommendedCrops": [
        {
            "name": "Maize",
            "suitabilityScore": 0.9,
            "expectedYield": 2800,
            "inputCost": 11000,
            "timeToHarvest": 95,
            "prosCons": "Short duration, moderate water needs",
            "marketPrice": {"min": 1, "max": 2},
            "riskLevel": "high",
        }
    ],
    "fertilizerPlan": [
        {
            "stage": "Sowing",
            "inputs": "DAP",
            "frequency": "Once",
            "quantity": 50,
            "timing": "At sowing",
        }
    ],
    "pestSchedule": [
        {
            "crop": "Maize",
            "riskLevel": "High",
            "symptoms": "Holes in whorl leaves",
            "recommendedAction": "Spray emamectin benzoate",
            "timing": "Week 3",
        }
    ],
    "cropCalendar": [
        {"period": "Week 1", "operation": "Sowing", "details": "Ridge sowing at 60 cm spacing"}
    ],
}


def make_settings(**overrides) -> Settings:
    values = {"openai_api_key": "test-key", "rate_limit_enabled": False}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def completion_body(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def model_reply(prefix: str = "Here is your plan:\n", suffix: str = "\nGood luck {farmer}!") -> str:
    return prefix + json.dumps(MODEL_ADVISORY) + suffix


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None, reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self._body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    """Stands in for requests.Session; replays one response or raises one error"""

    def __init__(self, response: FakeResponse = None, error: Exception = None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    @classmethod
    def replying(cls, content: str) -> "FakeSession":
        return cls(FakeResponse(body=completion_body(content)))

    @classmethod
    def failing(cls) -> "FakeSession":
        return cls(error=requests.ConnectionError("connection refused"))

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True
