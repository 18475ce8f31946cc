# Shared data models
from app.models.chat import (
    ActivityType,
    Conversation,
    Message,
    RoleCategory,
    User,
)

__all__ = [
    "ActivityType",
    "Conversation",
    "Message",
    "RoleCategory",
    "User",
]
