from unittest.mock import patch

from echovibe.routes.plans import plans_store
from echovibe.utils.exceptions import ConfigurationError, LLMError

from conftest import ITINERARY_REPLY, MOOD_REPLY


SELECTED_ITINERARY = {
    "id": "opt-0",
    "title": "Silenzio Egeo",
    "type": "Relax",
    "destination": "Milos, Greece",
    "description": "Baie quiete e tramonti lenti.",
    "highlights": ["Sarakiniko all'alba"],
    "estimatedCost": "1.200€",
    "image": "https://picsum.photos/seed/Milos%2C%20Greece/800/600",
}


def test_health_endpoints(client):
    assert client.get("/").json()["service"] == "EchoVibe API"
    data = client.get("/health").json()
    assert data["status"] == "healthy"
    assert "llm_providers" in data


# ---------------------------------------------------------------- /api/mood

def test_mood_endpoint_returns_camel_case_profile(client, fake_llm):
    fake_llm.queue(MOOD_REPLY)

    response = client.post("/api/mood", json={"text": "Sono stanco"})

    assert response.status_code == 200
    data = response.json()
    assert data["primaryMood"] == "Relax"
    assert data["suggestedColors"] == ["#A7C7E7", "#F5F5DC"]


def test_mood_endpoint_requires_input(client):
    response = client.post("/api/mood", json={"text": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing mood description"}


def test_mood_endpoint_maps_llm_failures(client, fake_llm):
    fake_llm.queue(LLMError("provider down"), "not json", ConfigurationError("No LLM provider available"))

    assert client.post("/api/mood", json={"text": "a"}).status_code == 502
    assert client.post("/api/mood", json={"text": "a"}).status_code == 502
    response = client.post("/api/mood", json={"text": "a"})
    assert response.status_code == 503
    assert response.json() == {"error": "No LLM provider available"}


# ---------------------------------------------------------- /api/itineraries

def test_itineraries_endpoint(client, fake_llm):
    fake_llm.queue(ITINERARY_REPLY)

    response = client.post("/api/itineraries", json={"moodProfile": MOOD_REPLY, "budget": "custom"})

    assert response.status_code == 200
    data = response.json()
    assert [o["id"] for o in data["options"]] == ["opt-0", "opt-1", "opt-2"]
    assert data["options"][0]["image"].startswith("https://picsum.photos/seed/")
    assert data["moodProfile"]["primaryMood"] == "Relax"
    assert "Budget Range: Standard" in fake_llm.calls[0][1].content


def test_itineraries_endpoint_validates_profile(client):
    response = client.post("/api/itineraries", json={"moodProfile": {"primaryMood": "Relax"}})

    assert response.status_code == 422


# ---------------------------------------------------------------- /api/plan

def test_plan_background_workflow(client, fake_llm):
    fake_llm.queue(MOOD_REPLY, ITINERARY_REPLY)

    response = client.post("/api/plan", json={"text": "Voglio staccare", "budget": "1500 - 3000€"})

    assert response.status_code == 200
    created = response.json()
    assert created["status"] == "scanning"
    assert created["planId"].startswith("plan_")

    # TestClient runs background tasks before returning
    plan = client.get(f"/api/plan/{created['planId']}").json()
    assert plan["status"] == "results"
    assert plan["budget"] == "1500 - 3000€"
    assert plan["moodProfile"]["primaryMood"] == "Relax"
    assert len(plan["options"]) == 3


def test_plan_sync_failure(client, fake_llm):
    fake_llm.queue("garbage")

    response = client.post("/api/plan/sync", json={"text": "Voglio staccare"})

    data = response.json()
    assert data["status"] == "failed"
    assert data["errors"]
    assert data["budget"] == "500 - 1500€"


def test_unknown_plan_is_404(client):
    response = client.get("/api/plan/plan_missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Plan not found"}


def test_plan_quote_confirms_plan(client, fake_llm, mock_smtp_settings):
    fake_llm.queue(MOOD_REPLY, ITINERARY_REPLY)
    plan_id = client.post("/api/plan/sync", json={"text": "Voglio staccare"}).json()["planId"]

    response = client.post(
        f"/api/plan/{plan_id}/quote",
        json={"email": "viaggiatore@example.com", "optionId": "opt-2"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Mock email sent (SMTP not configured)"}
    plan = client.get(f"/api/plan/{plan_id}").json()
    assert plan["status"] == "confirmed"
    assert plan["selectedOptionId"] == "opt-2"


def test_plan_quote_errors(client, fake_llm, mock_smtp_settings):
    fake_llm.queue(MOOD_REPLY, ITINERARY_REPLY)
    plan_id = client.post("/api/plan/sync", json={"text": "Voglio staccare"}).json()["planId"]

    missing_option = client.post(f"/api/plan/{plan_id}/quote", json={"email": "a@example.com", "optionId": "opt-9"})
    assert missing_option.status_code == 404

    missing_email = client.post(f"/api/plan/{plan_id}/quote", json={"optionId": "opt-0"})
    assert missing_email.status_code == 400

    from echovibe.schemas import PlanResponse
    plans_store["plan_busy"] = PlanResponse(plan_id="plan_busy", status="scanning")
    busy = client.post("/api/plan/plan_busy/quote", json={"email": "a@example.com", "optionId": "opt-0"})
    assert busy.status_code == 409

    plans_store["plan_failed"] = PlanResponse(plan_id="plan_failed", status="failed")
    failed = client.post("/api/plan/plan_failed/quote", json={"email": "a@example.com", "optionId": "opt-0"})
    assert failed.status_code == 409
    assert failed.json() == {"error": "Plan generation failed"}


# ---------------------------------------------------------- /api/send-quote

def test_send_quote_requires_email_and_itinerary(client):
    response = client.post("/api/send-quote", json={"email": "a@example.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing email or itinerary data"}


def test_send_quote_without_body(client):
    response = client.post("/api/send-quote")

    assert response.status_code == 400


def test_send_quote_mocked_without_smtp(client, mock_smtp_settings):
    response = client.post("/api/send-quote", json={
        "email": "a@example.com",
        "itinerary": SELECTED_ITINERARY,
        "moodProfile": MOOD_REPLY,
    })

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Mock email sent (SMTP not configured)"}


def test_send_quote_accepts_partial_itinerary(client, mock_smtp_settings):
    response = client.post("/api/send-quote", json={
        "email": "a@example.com",
        "itinerary": {"title": "Silenzio Egeo", "destination": "Milos, Greece", "highlights": None},
        "moodProfile": {"primaryMood": "Relax"},
    })

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_send_quote_partial_itinerary_over_smtp(client, smtp_settings):
    with patch("echovibe.tools.mailer.smtplib.SMTP") as mock_smtp:
        response = client.post("/api/send-quote", json={
            "email": "a@example.com",
            "itinerary": {"destination": "Lisbon, Portugal"},
            "moodProfile": {},
        })

    assert response.status_code == 200
    sent = mock_smtp.return_value.send_message.call_args[0][0]
    assert sent["Subject"] == "Il tuo preventivo EchoVibe: Lisbon, Portugal"


def test_send_quote_over_smtp(client, smtp_settings):
    with patch("echovibe.tools.mailer.smtplib.SMTP") as mock_smtp:
        response = client.post("/api/send-quote", json={
            "email": "a@example.com",
            "itinerary": SELECTED_ITINERARY,
            "moodProfile": MOOD_REPLY,
        })

    assert response.status_code == 200
    assert response.json() == {"success": True}
    sent = mock_smtp.return_value.send_message.call_args[0][0]
    assert sent["Subject"] == "Il tuo preventivo EchoVibe: Milos, Greece"


def test_send_quote_smtp_failure(client, smtp_settings):
    with patch("echovibe.tools.mailer.smtplib.SMTP") as mock_smtp:
        mock_smtp.side_effect = OSError("connection refused")
        response = client.post("/api/send-quote", json={
            "email": "a@example.com",
            "itinerary": SELECTED_ITINERARY,
            "moodProfile": MOOD_REPLY,
        })

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to send email"}


def test_send_quote_rejects_other_methods(client):
    for method in ("get", "put", "delete"):
        response = getattr(client, method)("/api/send-quote")
        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
