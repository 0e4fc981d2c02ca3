import copy

import pytest


VALID_REPLY = {
    "stressLevel": "High Stress",
    "confidenceScore": 87,
    "explanation": "The writer feels overwhelmed and stressed about deadlines.",
    "stressfulKeywords": [
        {"word": "overwhelmed", "intensity": 8},
        {"word": "stressed", "intensity": 9},
        {"word": "deadlines", "intensity": 5},
    ],
    "suggestions": ["Take a short walk.", "Break the work into smaller tasks."],
    "reasoningScores": {
        "negativeWordScore": 72,
        "emotionalTone": -60,
        "cognitiveOverloadIndex": 65,
    },
}


@pytest.fixture
def valid_reply():
    return copy.deepcopy(VALID_REPLY)


class FakeClient:
    """Stands in for GeminiClient; records every prompt it is sent."""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def generate(self, prompt, **kwargs):
        self.calls.append({"prompt": prompt, **kwargs})
        return self.response


@pytest.fixture
def fake_client_factory():
    return FakeClient
