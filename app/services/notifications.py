"""
User-facing notifications (toasts).

The controller reports load/send outcomes through a ``Notifier``; the
Streamlit layer renders them, anything else can just log them.
"""

import logging
from enum import Enum
from typing import List, Protocol, Tuple

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notifier(Protocol):
    def notify(self, message: str, level: NotificationLevel) -> None: ...


class LoggingNotifier:
    """Default notifier: writes notifications to the log."""

    _LOG_LEVELS = {
        NotificationLevel.SUCCESS: logging.INFO,
        NotificationLevel.INFO: logging.INFO,
        NotificationLevel.WARNING: logging.WARNING,
        NotificationLevel.ERROR: logging.ERROR,
    }

    def notify(self, message: str, level: NotificationLevel) -> None:
        logger.log(self._LOG_LEVELS.get(level, logging.INFO), f"[{level.value}] {message}")


class QueueNotifier:
    """Buffers notifications until the presentation layer drains them."""

    def __init__(self):
        self._pending: List[Tuple[str, NotificationLevel]] = []

    def notify(self, message: str, level: NotificationLevel) -> None:
        self._pending.append((message, level))

    def drain(self) -> List[Tuple[str, NotificationLevel]]:
        pending, self._pending = self._pending, []
        return pending
