from typing import Optional

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.models import EventsResponse
from app.services.events_service import list_events

router = APIRouter()


@router.get("/events", response_model=EventsResponse)
async def get_events(city: Optional[str] = None, settings: Settings = Depends(get_settings)):
    """
    Upcoming tech events for a city. Dates are generated relative to today,
    so the listing is always in the future.
    """
    city = (city or "").strip() or settings.default_city
    return EventsResponse(city=city, events=list_events(city))
