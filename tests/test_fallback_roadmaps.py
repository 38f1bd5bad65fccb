import pytest

from app.constants import ROADMAP_LEVELS, TECHNOLOGY_NAMES
from app.models import RoadmapStep
from app.services.fallback_roadmaps import available_technologies, get_fallback_roadmap
from app.services.roadmap_prompt import technology_name


@pytest.mark.parametrize("technology", sorted(TECHNOLOGY_NAMES))
def test_every_technology_has_three_valid_levels(technology):
    roadmap = get_fallback_roadmap(technology)
    assert len(roadmap) == 3
    steps = [RoadmapStep.model_validate(step) for step in roadmap]
    assert tuple(step.level for step in steps) == ROADMAP_LEVELS
    for step in steps:
        assert step.skills
        for topic in step.topics:
            assert topic.subtopics
            assert topic.estimated_hours > 0


def test_table_covers_exactly_the_known_technologies():
    assert set(available_technologies()) == set(TECHNOLOGY_NAMES)


@pytest.mark.parametrize("technology", ["", "cobol", "WEB-DEV", "quantum"])
def test_unknown_technology_falls_back_to_web_dev(technology):
    assert get_fallback_roadmap(technology) == get_fallback_roadmap("web-dev")


def test_lookup_returns_a_copy():
    roadmap = get_fallback_roadmap("devops")
    roadmap[0]["title"] = "mutated"
    roadmap.pop()
    assert len(get_fallback_roadmap("devops")) == 3
    assert get_fallback_roadmap("devops")[0]["title"] != "mutated"


def test_technology_display_names():
    assert technology_name("ai-ml") == "AI/Machine Learning"
    assert technology_name("unknown") == "Web Development"
