"""
Session context for the signed-in user.

Passed into the chat controller at construction instead of being looked up
from ambient storage. An absent user id is valid (no session yet).
"""

from dataclasses import dataclass
from typing import Optional

from app.config import Settings, get_settings


@dataclass(frozen=True)
class SessionContext:
    current_user_id: Optional[str] = None
    current_user_name: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.current_user_id)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SessionContext":
        settings = settings or get_settings()
        return cls(
            current_user_id=settings.current_user_id or None,
            current_user_name=settings.current_user_name,
        )
