import copy
import json
import os
from functools import lru_cache
from typing import Any, Dict, List

from app.constants import DEFAULT_TECHNOLOGY

FALLBACK_ROADMAPS_PATH = os.path.join(
    os.path.dirname(__file__), "..", "data", "fallback_roadmaps.json"
)


@lru_cache(maxsize=1)
def load_fallback_roadmaps() -> Dict[str, List[Dict[str, Any]]]:
    """Load the pre-authored roadmaps, keyed by technology."""
    with open(FALLBACK_ROADMAPS_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def available_technologies() -> List[str]:
    return list(load_fallback_roadmaps().keys())


def get_fallback_roadmap(technology: str) -> List[Dict[str, Any]]:
    """
    Return the 3-step fallback roadmap for a technology.
    Unknown keys resolve to the web-dev roadmap. The result is a copy,
    so callers may mutate it freely.
    """
    roadmaps = load_fallback_roadmaps()
    return copy.deepcopy(roadmaps.get(technology) or roadmaps[DEFAULT_TECHNOLOGY])
