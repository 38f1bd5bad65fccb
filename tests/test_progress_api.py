import json
from datetime import date

from factories import make_roadmap


def test_empty_progress(api):
    response = api().get("/api/progress/web-dev")
    assert response.status_code == 200
    assert response.json() == {
        "technology": "web-dev",
        "completedSkills": [],
        "completedSubtopics": [],
        "completedResources": [],
        "dailyStreak": 0,
        "lastActiveDate": "",
        "totalStudyHours": 0,
    }


def test_toggle_endpoints(api):
    client = api()

    data = client.post("/api/progress/web-dev/skills", json={"item": "HTML"}).json()
    assert data["completedSkills"] == ["HTML"]
    assert data["dailyStreak"] == 1
    assert data["lastActiveDate"] == date.today().isoformat()

    data = client.post(
        "/api/progress/web-dev/subtopics",
        json={"item": "Flexbox", "estimatedHours": 35, "subtopicCount": 5},
    ).json()
    assert data["completedSubtopics"] == ["Flexbox"]
    assert data["totalStudyHours"] == 7

    data = client.post("/api/progress/web-dev/resources", json={"item": "MDN"}).json()
    assert data["completedResources"] == ["MDN"]

    persisted = client.get("/api/progress/web-dev").json()
    assert persisted["completedSkills"] == ["HTML"]
    assert persisted["totalStudyHours"] == 7
    assert persisted["dailyStreak"] == 1


def test_blank_item_is_rejected(api):
    response = api().post("/api/progress/web-dev/skills", json={"item": "  "})
    assert response.status_code == 400
    assert response.json() == {"error": "Item is required"}


def test_invalid_subtopic_count_is_rejected(api):
    response = api().post(
        "/api/progress/web-dev/subtopics",
        json={"item": "Flexbox", "estimatedHours": 10, "subtopicCount": 0},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_stats_and_reset(api):
    client = api()
    client.post("/api/progress/ai-ml/skills", json={"item": "Beginner skill A"})

    stats = client.post("/api/progress/ai-ml/stats", json={"roadmap": make_roadmap()}).json()
    assert stats["totalSkills"] == 6
    assert stats["completedSkills"] == 1
    assert round(stats["skillsProgress"], 2) == 16.67

    reset = client.delete("/api/progress/ai-ml").json()
    assert reset["completedSkills"] == []
    assert client.get("/api/progress/ai-ml").json()["dailyStreak"] == 0


def test_wrong_shape_progress_file_is_treated_as_empty(api, tmp_path):
    client = api()
    path = tmp_path / "progress" / "roadmap-progress-web-dev.json"

    for document in (["x"], {"dailyStreak": -1}):
        path.write_text(json.dumps(document))
        response = client.get("/api/progress/web-dev")
        assert response.status_code == 200
        assert response.json()["completedSkills"] == []
        assert response.json()["dailyStreak"] == 0

    data = client.post("/api/progress/web-dev/skills", json={"item": "HTML"}).json()
    assert data["completedSkills"] == ["HTML"]
    assert data["dailyStreak"] == 1


def test_zero_estimated_hours_is_rejected(api):
    response = api().post(
        "/api/progress/web-dev/subtopics",
        json={"item": "Flexbox", "estimatedHours": 0, "subtopicCount": 3},
    )
    assert response.status_code == 400
    assert "error" in response.json()
