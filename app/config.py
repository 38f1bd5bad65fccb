from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"

    # Roadmap generation
    roadmap_timeout_seconds: float = 30.0
    roadmap_max_retries: int = 3
    roadmap_base_delay_seconds: float = 1.0

    # Progress persistence: "file" or "supabase"
    progress_backend: str = "file"
    progress_dir: str = ".progress"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_progress_table: str = "roadmap_progress"

    default_city: str = "San Francisco, CA"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()

