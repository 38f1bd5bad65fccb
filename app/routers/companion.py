from datetime import datetime, timezone
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.config import Settings, get_settings
from app.constants import GEMINI_NOT_CONFIGURED_MESSAGE
from app.models import CompanionRequest, CompanionResponse
from app.services.companion_prompt import build_prompt
from app.services.gemini_service import generate_text, get_gemini_client, raise_for_gemini_error

logger = logging.getLogger(__name__)

router = APIRouter()


def iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.post("/companion", response_model=CompanionResponse)
async def chat_with_companion(
    req: CompanionRequest,
    client: Optional[Any] = Depends(get_gemini_client),
    settings: Settings = Depends(get_settings),
):
    """
    Answer a developer question. The conversation type picks the system
    preamble that is placed in front of the message.
    """
    if not req.message or not req.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    if client is None:
        raise HTTPException(status_code=500, detail=GEMINI_NOT_CONFIGURED_MESSAGE)

    prompt = build_prompt(req.message, req.conversation_type)
    try:
        text = await generate_text(client, prompt, model=settings.gemini_model)
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        raise_for_gemini_error(e, "Failed to generate response. Please try again.")

    return CompanionResponse(
        response=text,
        conversation_type=req.conversation_type or "general",
        timestamp=iso_timestamp(),
    )
