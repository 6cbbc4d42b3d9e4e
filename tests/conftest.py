import json

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from echovibe.agents.llm_config import llm_provider
from echovibe.utils.config import Settings


MOOD_REPLY = {
    "primaryMood": "Relax",
    "intensity": 0.8,
    "description": "Stanchezza e bisogno di silenzio dopo mesi intensi.",
    "suggestedColors": ["#A7C7E7", "#F5F5DC"],
}

ITINERARY_REPLY = {
    "options": [
        {
            "title": "Silenzio Egeo",
            "type": "Relax",
            "destination": "Milos, Greece",
            "description": "Baie quiete e tramonti lenti.",
            "highlights": ["Sarakiniko all'alba", "Giro in barca a Kleftiko", "Cena a Klima"],
            "estimatedCost": "1.200€",
            "flightDetails": "Volo A/R da Roma, 2h 30m",
            "accommodationDetails": "Boutique Hotel 4* vista mare",
            "foodDetails": "Colazione inclusa, cena tipica in taverna",
            "image": "White cliffs of Sarakiniko at sunset",
        },
        {
            "title": "Adrenalina Alpina",
            "type": "Energy",
            "destination": "Interlaken, Switzerland",
            "description": "Parapendio e sentieri in quota.",
            "highlights": ["Parapendio", "Canyoning", "Jungfraujoch"],
            "estimatedCost": "1.450€",
            "flightDetails": "Volo A/R da Milano, 1h",
            "accommodationDetails": "Chalet 3*",
            "foodDetails": "Mezza pensione",
            "image": "Paragliders over Lake Thun",
        },
        {
            "title": "Luce di Lisbona",
            "type": "Inspiration",
            "destination": "Lisboa, Portugal",
            "description": "Azulejos, fado e nuove prospettive.",
            "highlights": ["MAAT", "Alfama al tramonto", "Serata di fado"],
            "estimatedCost": "980€",
            "flightDetails": "Volo A/R da Roma, 3h",
            "accommodationDetails": "Guesthouse di design",
            "foodDetails": "Colazione inclusa",
            "image": "Yellow tram in Alfama",
        },
    ]
}


class FakeLLM:
    """Stands in for llm_provider.invoke_with_fallback, replaying queued replies."""

    def __init__(self):
        self.replies = []
        self.calls = []

    def queue(self, *replies):
        for reply in replies:
            if isinstance(reply, (dict, list)):
                reply = json.dumps(reply)
            self.replies.append(reply)

    def __call__(self, messages, **kwargs):
        self.calls.append(messages)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return AIMessage(content=reply)


@pytest.fixture
def fake_llm(monkeypatch):
    fake = FakeLLM()
    monkeypatch.setattr(llm_provider, "invoke_with_fallback", fake)
    return fake


@pytest.fixture
def mock_smtp_settings(monkeypatch):
    """Global mail settings without SMTP credentials."""
    config = Settings(_env_file=None, smtp_host=None, smtp_user=None, smtp_pass=None)
    monkeypatch.setattr("echovibe.tools.mailer.settings", config)
    return config


@pytest.fixture
def smtp_settings(monkeypatch):
    """Global mail settings pointing at a (patched) SMTP server."""
    config = Settings(
        _env_file=None,
        smtp_host="smtp.example.com",
        smtp_port=587,
        smtp_user="studio",
        smtp_pass="secret",
        smtp_max_attempts=1,
    )
    monkeypatch.setattr("echovibe.tools.mailer.settings", config)
    return config


@pytest.fixture
def client():
    from echovibe.main import app
    from echovibe.routes.plans import plans_store

    plans_store.clear()
    yield TestClient(app)
    plans_store.clear()
