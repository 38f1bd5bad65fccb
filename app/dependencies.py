from supabase import create_client, Client
from fastapi import Depends, HTTPException

from .config import Settings, get_settings
from .services.progress_store import (
    FileProgressStore,
    ProgressStore,
    SupabaseProgressStore,
)
from .services.progress_tracker import ProgressTracker

_supabase_client: Client = None


def get_supabase_client(settings: Settings = Depends(get_settings)) -> Client:
    global _supabase_client
    if _supabase_client is None:
        if not settings.supabase_url or not settings.supabase_key:
            raise HTTPException(
                status_code=500,
                detail="Supabase URL or Key not configured in .env file",
            )
        try:
            _supabase_client = create_client(
                settings.supabase_url, settings.supabase_key
            )
        except Exception as e:
            raise HTTPException(
                status_code=500,
                detail=f"Failed to initialize Supabase client: {str(e)}",
            )
    return _supabase_client


def get_progress_store(settings: Settings = Depends(get_settings)) -> ProgressStore:
    if settings.progress_backend == "supabase":
        return SupabaseProgressStore(
            get_supabase_client(settings), table=settings.supabase_progress_table
        )
    return FileProgressStore(settings.progress_dir)


def get_progress_tracker(store: ProgressStore = Depends(get_progress_store)) -> ProgressTracker:
    return ProgressTracker(store)
