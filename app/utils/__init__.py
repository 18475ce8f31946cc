"""
Utility package exports
"""

from app.utils.helpers import format_relative_time, classify_role, activity_type_for_role, message_preview

__all__ = ["format_relative_time", "classify_role", "activity_type_for_role", "message_preview"]
