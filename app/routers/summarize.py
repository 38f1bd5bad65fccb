import logging
import math
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.config import Settings, get_settings
from app.constants import GEMINI_NOT_CONFIGURED_MESSAGE
from app.models import SummarizeRequest, SummarizeResponse
from app.services.gemini_service import generate_text, get_gemini_client, raise_for_gemini_error
from app.services.summary_prompt import build_prompt

logger = logging.getLogger(__name__)

router = APIRouter()


def compression_ratio(original_length: int, summary_length: int) -> int:
    """Percentage of characters removed, rounded half up."""
    if original_length == 0:
        return 0
    return math.floor((1 - summary_length / original_length) * 100 + 0.5)


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize_text(
    req: SummarizeRequest,
    client: Optional[Any] = Depends(get_gemini_client),
    settings: Settings = Depends(get_settings),
):
    if not req.text or not req.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    if client is None:
        raise HTTPException(status_code=500, detail=GEMINI_NOT_CONFIGURED_MESSAGE)

    try:
        summary = await generate_text(client, build_prompt(req.text), model=settings.gemini_model)
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        raise_for_gemini_error(e, "Failed to generate summary. Please try again.")

    return SummarizeResponse(
        summary=summary,
        original_length=len(req.text),
        summary_length=len(summary),
        compression_ratio=compression_ratio(len(req.text), len(summary)),
    )
