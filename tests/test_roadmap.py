import asyncio
import json

import pytest
from fastapi import HTTPException

from app.constants import (
    FALLBACK_BUSY_MESSAGE,
    FALLBACK_GENERIC_MESSAGE,
    FALLBACK_QUOTA_MESSAGE,
)
from app.services.fallback_roadmaps import get_fallback_roadmap
from app.services.roadmap_service import generate_roadmap, parse_roadmap

from factories import FakeGeminiClient, make_roadmap, make_settings, roadmap_json

BODY = {"technology": "web-dev", "currentKnowledge": "none"}


def dumped(roadmap):
    return json.loads(json.dumps(roadmap))


@pytest.mark.parametrize(
    "body",
    [{}, {"technology": "web-dev"}, {"currentKnowledge": "basics"}, {"technology": " ", "currentKnowledge": "x"}],
)
def test_missing_fields_are_rejected(api, body):
    response = api(None).post("/api/roadmap", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Technology and current knowledge are required"}


def test_no_api_key_returns_fallback(api):
    response = api(None).post("/api/roadmap", json=BODY)

    assert response.status_code == 200
    data = response.json()
    assert data["fallback"] is True
    assert "message" not in data
    assert data["technology"] == "web-dev"
    assert data["currentKnowledge"] == "none"
    assert data["roadmap"] == dumped(get_fallback_roadmap("web-dev"))
    assert [step["level"] for step in data["roadmap"]] == ["Beginner", "Intermediate", "Advanced"]


def test_unknown_technology_without_key_gets_web_dev(api):
    response = api(None).post("/api/roadmap", json={"technology": "cobol", "currentKnowledge": "some"})
    assert response.json()["roadmap"] == dumped(get_fallback_roadmap("web-dev"))


def test_fenced_ai_roadmap_is_returned(api):
    gemini = FakeGeminiClient(roadmap_json(fenced=True))
    response = api(gemini).post("/api/roadmap", json={"technology": "ai-ml", "currentKnowledge": "python"})

    assert response.status_code == 200
    data = response.json()
    assert "fallback" not in data
    assert data["roadmap"] == make_roadmap()
    prompt = gemini.models.calls[0]["contents"]
    assert "AI/Machine Learning" in prompt
    assert "Current Knowledge: python" in prompt


@pytest.mark.parametrize(
    "reply",
    [
        "not json at all",
        json.dumps(make_roadmap()[:2]),
        json.dumps({"roadmap": make_roadmap()}),
        json.dumps([{"level": "Expert", "title": "x"}] * 3),
    ],
)
def test_unusable_ai_output_silently_uses_fallback(api, reply):
    response = api(FakeGeminiClient(reply)).post("/api/roadmap", json=BODY)

    assert response.status_code == 200
    data = response.json()
    assert "fallback" not in data
    assert data["roadmap"] == dumped(get_fallback_roadmap("web-dev"))


@pytest.mark.parametrize(
    "error, message",
    [
        (RuntimeError("503 Service Unavailable"), FALLBACK_BUSY_MESSAGE),
        (RuntimeError("The model is overloaded"), FALLBACK_BUSY_MESSAGE),
        (RuntimeError("quota exhausted"), FALLBACK_QUOTA_MESSAGE),
        (RuntimeError("connection reset"), FALLBACK_GENERIC_MESSAGE),
    ],
)
def test_persistent_errors_degrade_to_fallback(api, error, message):
    gemini = FakeGeminiClient(error)
    response = api(gemini).post("/api/roadmap", json=BODY)

    assert response.status_code == 200
    data = response.json()
    assert data["fallback"] is True
    assert data["message"] == message
    assert len(data["roadmap"]) == 3
    assert len(gemini.models.calls) == 3


def test_invalid_api_key_surfaces_as_401(api):
    response = api(FakeGeminiClient(RuntimeError("API_KEY_INVALID"))).post("/api/roadmap", json=BODY)
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid API key configuration"}


def test_recovers_after_transient_error(tmp_path):
    gemini = FakeGeminiClient(RuntimeError("overloaded"), roadmap_json())
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    result = asyncio.run(
        generate_roadmap(gemini, "web-dev", "none", make_settings(tmp_path), sleep=fake_sleep)
    )

    assert result.fallback is None
    assert result.model_dump(by_alias=True)["roadmap"] == make_roadmap()
    assert delays == [0.0]


def test_backoff_doubles_between_attempts(tmp_path):
    settings = make_settings(tmp_path, roadmap_base_delay_seconds=1.0, roadmap_max_retries=3)
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    result = asyncio.run(
        generate_roadmap(FakeGeminiClient(RuntimeError("boom")), "devops", "k8s", settings, sleep=fake_sleep)
    )

    assert delays == [1.0, 2.0]
    assert result.fallback is True
    assert result.message == FALLBACK_GENERIC_MESSAGE


def test_timeout_counts_as_failed_attempt(tmp_path):
    settings = make_settings(tmp_path, roadmap_timeout_seconds=0.05, roadmap_max_retries=2)
    gemini = FakeGeminiClient(roadmap_json(), delay=0.3)

    result = asyncio.run(generate_roadmap(gemini, "ui-ux", "figma", settings))

    assert result.fallback is True
    assert result.message == FALLBACK_GENERIC_MESSAGE
    assert result.model_dump(by_alias=True)["roadmap"] == get_fallback_roadmap("ui-ux")


def test_api_key_error_raises_after_retries(tmp_path):
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(
            generate_roadmap(FakeGeminiClient(RuntimeError("API_KEY")), "web-dev", "none", make_settings(tmp_path))
        )
    assert exc_info.value.status_code == 401


def test_parse_roadmap_strips_every_fence():
    text = "```json\n" + roadmap_json() + "\n```\n```"
    steps = parse_roadmap(text)
    assert steps is not None
    assert [step.level for step in steps] == ["Beginner", "Intermediate", "Advanced"]
    assert parse_roadmap("[]") is None


def test_fractional_hours_are_rounded_up_not_rejected(api):
    roadmap = make_roadmap()
    roadmap[1]["topics"][0]["estimatedHours"] = 12.5
    response = api(FakeGeminiClient(json.dumps(roadmap))).post("/api/roadmap", json=BODY)

    data = response.json()
    assert "fallback" not in data
    assert data["roadmap"][0]["title"] == "Basics"
    assert data["roadmap"][1]["topics"][0]["estimatedHours"] == 13
