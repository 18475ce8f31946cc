"""
Chat transport contract.

Operations the chat controller needs from the backend. Implementations raise
``ChatAPIError`` on failure.
"""

from typing import List, Protocol

from app.models.chat import Conversation, Message, User


class ChatTransport(Protocol):
    async def fetch_conversations(self) -> List[Conversation]: ...

    async def fetch_users(self) -> List[User]: ...

    async def fetch_history(self, user_id: str) -> List[Message]: ...

    async def send_message(self, receiver_id: str, text: str) -> Message: ...

    async def mark_read(self, user_id: str) -> None: ...

    async def log_activity(self, activity_type: str, description: str) -> None: ...
