"""
Chat Data Models

Users, messages and conversation summaries as returned by the chat backend.
The backend speaks camelCase JSON; every model accepts either the wire alias
or the Python field name.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from enum import Enum
from typing import Optional


class RoleCategory(str, Enum):
    """Display category a user role falls into."""

    STUDENT = "student"
    PROFESSOR = "professor"
    ALUMNI = "alumni"
    MANAGEMENT = "management"
    OTHER = "other"

    @property
    def color(self) -> str:
        return ROLE_COLORS[self]


ROLE_COLORS = {
    RoleCategory.STUDENT: "#2563eb",
    RoleCategory.PROFESSOR: "#16a34a",
    RoleCategory.ALUMNI: "#9333ea",
    RoleCategory.MANAGEMENT: "#dc2626",
    RoleCategory.OTHER: "#4b5563",
}


class ActivityType(str, Enum):
    """Audit categories recorded after a message is sent."""

    ALUMNI_CHAT = "ALUMNI_CHAT"
    PROFESSOR_CHAT = "PROFESSOR_CHAT"


class ChatModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class User(ChatModel):
    """Addressable user from the chat roster."""

    id: str
    name: str
    email: str = ""
    role: str = "other"  # Raw server spelling, e.g. "ALUMNI"
    department: Optional[str] = None

    @property
    def email_local_part(self) -> str:
        return self.email.split("@")[0]


class Message(ChatModel):
    """A single direct message."""

    id: str
    sender_id: str = Field(alias="senderId")
    sender_name: str = Field("", alias="senderName")
    receiver_id: str = Field(alias="receiverId")
    receiver_name: str = Field("", alias="receiverName")
    message: str
    timestamp: datetime
    read: bool = False

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message text cannot be empty")
        return value


class Conversation(ChatModel):
    """Summary of the conversation with one counterpart."""

    user: User
    last_message: Optional[Message] = Field(None, alias="lastMessage")
    unread_count: int = Field(0, alias="unreadCount", ge=0)

    def mark_read(self) -> "Conversation":
        """Return a copy with the unread badge cleared."""
        return self.model_copy(update={"unread_count": 0})
