import json
import os
import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException
from pydantic import ValidationError

from app.constants import PROGRESS_KEY_PREFIX
from app.models import ProgressData

logger = logging.getLogger(__name__)


def storage_key(technology: str) -> str:
    return f"{PROGRESS_KEY_PREFIX}{technology}"


class ProgressStore:
    """Durable key/value storage for per-technology progress."""

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def set(self, key: str, value: Dict[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def load(self, technology: str) -> ProgressData:
        key = storage_key(technology)
        raw = self.get(key)
        if raw is not None and not isinstance(raw, dict):
            logger.warning("Ignoring progress for %s: expected an object, got %s", key, type(raw).__name__)
            raw = None
        try:
            return ProgressData.from_storage(raw)
        except (ValidationError, TypeError) as e:
            logger.warning("Ignoring malformed progress for %s: %s", key, e)
            return ProgressData()

    def save(self, technology: str, progress: ProgressData) -> None:
        self.set(storage_key(technology), progress.to_storage())

    def clear(self, technology: str) -> None:
        self.delete(storage_key(technology))


class FileProgressStore(ProgressStore):
    """One JSON document per key inside a directory."""

    def __init__(self, directory: str):
        self.directory = directory
        os.makedirs(directory, exist_ok=True)

    def _path(self, key: str) -> str:
        # Path params never contain "/", but keep keys to a single file name
        safe_key = key.replace(os.sep, "_")
        return os.path.join(self.directory, f"{safe_key}.json")

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Corrupt progress file %s: %s", path, e)
            return None

    def set(self, key: str, value: Dict[str, Any]) -> None:
        path = self._path(key)
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2)
        os.replace(tmp_path, path)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)


class SupabaseProgressStore(ProgressStore):
    """Rows of (storage_key, data) in a Supabase table."""

    def __init__(self, client: Any, table: str = "roadmap_progress"):
        self.client = client
        self.table = table

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            result = (
                self.client.table(self.table).select("*").eq("storage_key", key).execute()
            )
        except Exception as e:
            logger.error("Supabase progress read failed for %s: %s", key, e)
            raise HTTPException(status_code=500, detail=f"Failed to load progress: {str(e)}")

        if not result.data:
            return None
        return result.data[0].get("data")

    def set(self, key: str, value: Dict[str, Any]) -> None:
        try:
            result = (
                self.client.table(self.table)
                .upsert({"storage_key": key, "data": value}, on_conflict="storage_key")
                .execute()
            )
        except Exception as e:
            logger.error("Supabase progress write failed for %s: %s", key, e)
            raise HTTPException(status_code=500, detail=f"Failed to save progress: {str(e)}")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to save progress: empty response from Supabase")

    def delete(self, key: str) -> None:
        try:
            self.client.table(self.table).delete().eq("storage_key", key).execute()
        except Exception as e:
            logger.error("Supabase progress delete failed for %s: %s", key, e)
            raise HTTPException(status_code=500, detail=f"Failed to reset progress: {str(e)}")
