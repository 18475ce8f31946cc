"""
Shared Utility Functions

Time and role helpers used by the chat stores and the Streamlit views.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from app.models.chat import ActivityType, RoleCategory

logger = logging.getLogger(__name__)

CLOCK_TIME_WINDOW = timedelta(hours=24)
WEEKDAY_WINDOW = timedelta(hours=168)

# Fixed English names; strftime %a and %b follow LC_TIME
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_relative_time(timestamp: datetime, now: Optional[datetime] = None) -> str:
    """
    Render a message timestamp relative to ``now``.

    - younger than 24 hours: clock time, e.g. "09:05"
    - younger than 7 days: short weekday, e.g. "Tue"
    - otherwise: month and day, e.g. "Mar 4"

    Timezone-aware timestamps are shown in local time. Timestamps in the
    future count as recent.

    Args:
        timestamp: When the message was sent
        now: Reference point (defaults to the current time)

    Returns:
        Display string
    """
    if now is None:
        now = datetime.now(timezone.utc) if timestamp.tzinfo else datetime.now()
    elif (now.tzinfo is None) != (timestamp.tzinfo is None):
        # Mixed naive/aware input: interpret naive values as UTC
        now = now if now.tzinfo else now.replace(tzinfo=timezone.utc)
        timestamp = timestamp if timestamp.tzinfo else timestamp.replace(tzinfo=timezone.utc)

    age = now - timestamp
    local = timestamp.astimezone() if timestamp.tzinfo else timestamp

    if age < CLOCK_TIME_WINDOW:
        return local.strftime("%H:%M")
    if age < WEEKDAY_WINDOW:
        return WEEKDAY_NAMES[local.weekday()]
    return f"{MONTH_NAMES[local.month - 1]} {local.day}"


def classify_role(role: Optional[str]) -> RoleCategory:
    """Map a role string, case-insensitively, to its display category."""
    if not role:
        return RoleCategory.OTHER
    try:
        return RoleCategory(role.strip().lower())
    except ValueError:
        logger.debug(f"Unknown role '{role}', using default category")
        return RoleCategory.OTHER


def activity_type_for_role(role: Optional[str]) -> ActivityType:
    """Audit category for a message sent to a user with this role."""
    if classify_role(role) == RoleCategory.PROFESSOR:
        return ActivityType.PROFESSOR_CHAT
    return ActivityType.ALUMNI_CHAT


def message_preview(text: Optional[str], max_len: int = 40) -> str:
    """Single-line preview of a message for the conversation list."""
    preview = (text or "").replace("\n", " ").strip()
    if len(preview) > max_len:
        preview = preview[:max_len] + "…"
    return preview
