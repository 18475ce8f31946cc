"""
Active thread store.

Message history for the currently selected counterpart. Every history fetch
is tagged with the counterpart id and a request number; a response is only
accepted if it still belongs to the latest request, so a slow answer for a
counterpart the user has navigated away from is dropped on arrival.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from app.models.chat import Message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryRequest:
    """Tag attached to an in-flight history fetch."""

    counterpart_id: str
    seq: int


class ActiveThreadStore:
    def __init__(self):
        self.counterpart_id: Optional[str] = None
        self._messages: List[Message] = []
        self._message_ids = set()
        self._seq = 0
        self.loading = False
        self.load_failed = False
        # Bumped whenever the visible sequence changes
        self.revision = 0

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    def _set_messages(self, messages: List[Message]) -> None:
        self._messages = messages
        self._message_ids = {msg.id for msg in messages}
        self.revision += 1

    def begin_load(self, counterpart_id: str) -> HistoryRequest:
        """Switch to a counterpart, discarding the previous thread."""
        self._seq += 1
        self.counterpart_id = counterpart_id
        self.loading = True
        self.load_failed = False
        if self._messages:
            self._set_messages([])
        return HistoryRequest(counterpart_id=counterpart_id, seq=self._seq)

    def is_current(self, request: HistoryRequest) -> bool:
        return request.seq == self._seq and request.counterpart_id == self.counterpart_id

    def accept(self, request: HistoryRequest, messages: Iterable[Message]) -> bool:
        """
        Replace the thread with a history result.

        Messages appended while the fetch was in flight stay at the tail
        unless the history already contains them.

        Returns:
            False when the result is stale and was discarded
        """
        if not self.is_current(request):
            logger.info(f"Discarding stale history for {request.counterpart_id} (request #{request.seq})")
            return False
        self.loading = False
        history = list(messages)
        history_ids = {msg.id for msg in history}
        pending = [msg for msg in self._messages if msg.id not in history_ids]
        self._set_messages(history + pending)
        return True

    def fail(self, request: HistoryRequest) -> bool:
        if not self.is_current(request):
            return False
        self.loading = False
        self.load_failed = True
        return True

    def append(self, message: Message) -> bool:
        """
        Append a sent message at the tail.

        Ignored if it belongs to a different counterpart than the one shown,
        or if a message with the same id is already present.
        """
        if self.counterpart_id is None or self.counterpart_id not in (message.receiver_id, message.sender_id):
            logger.debug(f"Message {message.id} does not belong to the active thread")
            return False
        if message.id in self._message_ids:
            logger.debug(f"Message {message.id} already in thread")
            return False
        self._set_messages(self._messages + [message])
        return True
