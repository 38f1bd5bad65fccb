from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_progress_tracker
from app.models import (
    ProgressData,
    ProgressResponse,
    ProgressStats,
    ProgressStatsRequest,
    ToggleItemRequest,
    ToggleSubtopicRequest,
)
from app.services.progress_tracker import ProgressTracker

router = APIRouter()


def to_response(technology: str, progress: ProgressData) -> ProgressResponse:
    return ProgressResponse(technology=technology, **progress.to_storage())


def require_item(item):
    if not item or not item.strip():
        raise HTTPException(status_code=400, detail="Item is required")
    return item


@router.get("/progress/{technology}", response_model=ProgressResponse)
async def get_progress(technology: str, tracker: ProgressTracker = Depends(get_progress_tracker)):
    return to_response(technology, tracker.load(technology))


@router.post("/progress/{technology}/skills", response_model=ProgressResponse)
async def toggle_skill(
    technology: str,
    req: ToggleItemRequest,
    tracker: ProgressTracker = Depends(get_progress_tracker),
):
    progress = tracker.toggle_skill(technology, require_item(req.item))
    return to_response(technology, progress)


@router.post("/progress/{technology}/subtopics", response_model=ProgressResponse)
async def toggle_subtopic(
    technology: str,
    req: ToggleSubtopicRequest,
    tracker: ProgressTracker = Depends(get_progress_tracker),
):
    progress = tracker.toggle_subtopic(
        technology, require_item(req.item), req.estimated_hours, req.subtopic_count
    )
    return to_response(technology, progress)


@router.post("/progress/{technology}/resources", response_model=ProgressResponse)
async def toggle_resource(
    technology: str,
    req: ToggleItemRequest,
    tracker: ProgressTracker = Depends(get_progress_tracker),
):
    progress = tracker.toggle_resource(technology, require_item(req.item))
    return to_response(technology, progress)


@router.post("/progress/{technology}/stats", response_model=ProgressStats)
async def progress_stats(
    technology: str,
    req: ProgressStatsRequest,
    tracker: ProgressTracker = Depends(get_progress_tracker),
):
    """Completion percentages of the stored progress against the given roadmap."""
    return tracker.stats(technology, req.roadmap)


@router.delete("/progress/{technology}", response_model=ProgressResponse)
async def reset_progress(technology: str, tracker: ProgressTracker = Depends(get_progress_tracker)):
    return to_response(technology, tracker.reset(technology))
