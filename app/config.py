from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Campus Chat"
    debug: bool = False

    # Chat backend
    api_base_url: str = "http://localhost:8080"
    api_timeout: int = 30  # Seconds
    api_token: str = ""

    # Session (who is signed in)
    current_user_id: Optional[str] = None
    current_user_name: str = ""

    # Directory search
    search_debounce_ms: int = 300
    role_filters: List[str] = ["all", "student", "professor", "alumni", "management"]

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000


@lru_cache
def get_settings() -> Settings:
    return Settings()
