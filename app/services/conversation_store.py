"""
Conversation list store.

Ordered snapshot of the user's conversations with unread counts and the
latest message. Refreshes are tagged with a sequence number so a slow, older
refresh never overwrites a newer one.
"""

import logging
from typing import Iterable, List, Optional

from app.models.chat import Conversation

logger = logging.getLogger(__name__)


class ConversationListStore:
    def __init__(self):
        self._conversations: List[Conversation] = []
        self._issued = 0
        self._applied = 0
        self.loading = False

    @property
    def conversations(self) -> List[Conversation]:
        return list(self._conversations)

    def __len__(self) -> int:
        return len(self._conversations)

    @property
    def total_unread(self) -> int:
        return sum(conv.unread_count for conv in self._conversations)

    def find(self, user_id: str) -> Optional[Conversation]:
        for conv in self._conversations:
            if conv.user.id == user_id:
                return conv
        return None

    def begin_refresh(self) -> int:
        """Reserve a sequence number for a refresh about to be issued."""
        self._issued += 1
        self.loading = True
        return self._issued

    def _settle(self, token: int) -> bool:
        if token < self._applied:
            logger.debug(f"Dropping stale conversation refresh #{token} (have #{self._applied})")
            return False
        self._applied = token
        if token == self._issued:
            self.loading = False
        return True

    def apply(self, token: int, conversations: Iterable[Conversation]) -> bool:
        """
        Replace the list with a refresh result.

        Returns:
            False when a newer refresh has already been applied
        """
        if not self._settle(token):
            return False

        unique: List[Conversation] = []
        seen = set()
        for conv in conversations:
            if conv.user.id in seen:
                logger.warning(f"Duplicate conversation for user {conv.user.id} ignored")
                continue
            seen.add(conv.user.id)
            unique.append(conv)

        self._conversations = unique
        return True

    def fail(self, token: int) -> bool:
        """Reset to empty after a failed refresh, unless a newer one landed."""
        if not self._settle(token):
            return False
        self._conversations = []
        return True

    def clear_unread(self, user_id: str) -> None:
        """Zero the badge locally once the server acknowledged the read."""
        self._conversations = [
            conv.mark_read() if conv.user.id == user_id and conv.unread_count else conv
            for conv in self._conversations
        ]
