import json
import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

from fastapi import HTTPException
from pydantic import ValidationError

from app.config import Settings
from app.constants import (
    FALLBACK_BUSY_MESSAGE,
    FALLBACK_GENERIC_MESSAGE,
    FALLBACK_QUOTA_MESSAGE,
    INVALID_API_KEY_MESSAGE,
    ROADMAP_LEVELS,
)
from app.models import RoadmapResponse, RoadmapStep
from app.services.fallback_roadmaps import get_fallback_roadmap
from app.services.gemini_service import clean_gemini_output, generate_text
from app.services.roadmap_prompt import build_prompt

logger = logging.getLogger(__name__)


def parse_roadmap(text: str) -> Optional[List[RoadmapStep]]:
    """
    Parse Gemini output into exactly len(ROADMAP_LEVELS) steps.
    Returns None when the text is not valid JSON or does not have that shape.
    """
    try:
        data = json.loads(clean_gemini_output(text))
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse roadmap JSON: %s", e)
        return None

    if not isinstance(data, list) or len(data) != len(ROADMAP_LEVELS):
        logger.warning("Roadmap JSON is not a list of %d steps", len(ROADMAP_LEVELS))
        return None

    try:
        return [RoadmapStep.model_validate(step) for step in data]
    except ValidationError as e:
        logger.warning("Roadmap JSON has an invalid step: %s", e)
        return None


def fallback_response(
    technology: str, current_knowledge: str, message: Optional[str] = None
) -> RoadmapResponse:
    return RoadmapResponse(
        roadmap=get_fallback_roadmap(technology),
        technology=technology,
        current_knowledge=current_knowledge,
        fallback=True,
        message=message,
    )


def degrade(error: Optional[Exception], technology: str, current_knowledge: str) -> RoadmapResponse:
    """Turn the final generation error into a fallback response, or a 401 for a bad key."""
    text = str(error) if error else ""

    if "overloaded" in text or "503" in text:
        logger.info("API overloaded, using fallback roadmap")
        return fallback_response(technology, current_knowledge, FALLBACK_BUSY_MESSAGE)
    if "API_KEY" in text:
        raise HTTPException(status_code=401, detail=INVALID_API_KEY_MESSAGE)
    if "quota" in text:
        logger.info("API quota exceeded, using fallback roadmap")
        return fallback_response(technology, current_knowledge, FALLBACK_QUOTA_MESSAGE)
    return fallback_response(technology, current_knowledge, FALLBACK_GENERIC_MESSAGE)


async def generate_roadmap(
    client: Any,
    technology: str,
    current_knowledge: str,
    settings: Settings,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> RoadmapResponse:
    if client is None:
        logger.info("No Gemini API key found, using fallback roadmap")
        return fallback_response(technology, current_knowledge)

    prompt = build_prompt(technology, current_knowledge)
    max_retries = settings.roadmap_max_retries
    last_error: Optional[Exception] = None

    for attempt in range(1, max_retries + 1):
        try:
            text = await generate_text(
                client,
                prompt,
                model=settings.gemini_model,
                timeout=settings.roadmap_timeout_seconds,
            )
        except Exception as e:
            logger.warning("Gemini API error (attempt %d/%d): %s", attempt, max_retries, e)
            last_error = e
            if attempt < max_retries:
                # Exponential backoff: base, 2*base, 4*base, ...
                await sleep(settings.roadmap_base_delay_seconds * (2 ** (attempt - 1)))
            continue

        roadmap = parse_roadmap(text)
        if roadmap is None:
            logger.warning("Gemini returned an unusable roadmap for %s, substituting fallback", technology)
            roadmap = get_fallback_roadmap(technology)

        return RoadmapResponse(
            roadmap=roadmap,
            technology=technology,
            current_knowledge=current_knowledge,
        )

    return degrade(last_error, technology, current_knowledge)
