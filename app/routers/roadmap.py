from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.config import Settings, get_settings
from app.models import RoadmapRequest, RoadmapResponse
from app.services.gemini_service import get_gemini_client
from app.services.roadmap_service import generate_roadmap

router = APIRouter()


@router.post("/roadmap", response_model=RoadmapResponse, response_model_exclude_none=True)
async def create_roadmap(
    req: RoadmapRequest,
    client: Optional[Any] = Depends(get_gemini_client),
    settings: Settings = Depends(get_settings),
):
    technology = (req.technology or "").strip()
    current_knowledge = (req.current_knowledge or "").strip()
    if not technology or not current_knowledge:
        raise HTTPException(
            status_code=400, detail="Technology and current knowledge are required"
        )

    return await generate_roadmap(client, technology, current_knowledge, settings)
