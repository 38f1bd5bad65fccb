import re
import asyncio
import logging
from functools import lru_cache
from typing import Any, NoReturn, Optional, Tuple

from fastapi import Depends, HTTPException

from app.config import Settings, get_settings
from app.constants import INVALID_API_KEY_MESSAGE, QUOTA_EXCEEDED_MESSAGE

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _build_client(api_key: str) -> Any:
    from google import genai as google_genai_module

    client = google_genai_module.Client(api_key=api_key)
    logger.info("✅ Gemini client initialized.")
    return client


@lru_cache(maxsize=1)
def _warn_missing_key() -> None:
    logger.warning("⚠️ GEMINI_API_KEY not set.")


def get_gemini_client(settings: Settings = Depends(get_settings)) -> Optional[Any]:
    """Return a Gemini client, or None when GEMINI_API_KEY is not set."""
    if not settings.gemini_configured:
        _warn_missing_key()
        return None
    return _build_client(settings.gemini_api_key.strip())


def clean_gemini_output(text: str) -> str:
    """Removes markdown-style ```json and ``` fences from Gemini output."""
    text = re.sub(r"```json\n?", "", text)
    text = re.sub(r"```\n?", "", text)
    return text.strip()


async def generate_text(
    client: Any,
    prompt: str,
    model: str,
    timeout: Optional[float] = None,
) -> str:
    """
    Run a single generate_content call off the event loop.
    When a timeout is given the call is raced against it and a
    TimeoutError("Request timeout") is raised if it loses.
    """
    call = asyncio.to_thread(
        client.models.generate_content,
        model=model,
        contents=prompt,
    )
    if timeout is None:
        response = await call
    else:
        try:
            response = await asyncio.wait_for(call, timeout=timeout)
        except asyncio.TimeoutError:
            raise TimeoutError("Request timeout")

    return (response.text or "").strip()


def classify_gemini_error(error: Exception) -> Optional[Tuple[int, str]]:
    """
    Map an upstream error to (status_code, message) by inspecting its text.
    Returns None when the error is not one of the recognised kinds.
    """
    message = str(error)
    if "API_KEY" in message:
        return 401, INVALID_API_KEY_MESSAGE
    if "quota" in message:
        return 429, QUOTA_EXCEEDED_MESSAGE
    return None


def raise_for_gemini_error(error: Exception, default_message: str) -> NoReturn:
    status_code, detail = classify_gemini_error(error) or (500, default_message)
    raise HTTPException(status_code=status_code, detail=detail)
