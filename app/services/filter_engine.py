"""
Directory filter

Pure, synchronous filtering of the loaded roster. Safe to call on every
keystroke; never touches the network.

Matched fields: name, email, email local-part and department. The search box
historically advertised phone search, but users carry no phone field, so a
phone number only matches when it happens to appear in one of those fields.
"""

from typing import Iterable, List, Optional

from app.models.chat import User

ALL_ROLES = "all"


def _matches_role(user: User, role_filter: str) -> bool:
    return (user.role or "").lower() == role_filter


def _matches_query(user: User, query: str) -> bool:
    candidates = [user.name, user.email, user.email_local_part]
    if user.department:
        candidates.append(user.department)
    return any(query in (field or "").lower() for field in candidates)


def filter_users(
    roster: Iterable[User],
    current_user_id: Optional[str],
    role_filter: Optional[str] = ALL_ROLES,
    search_query: Optional[str] = "",
) -> List[User]:
    """
    Filter the roster for the "new message" directory.

    Steps:
    1. Drop the signed-in user (nothing is dropped without a session)
    2. Keep users whose role equals ``role_filter`` unless it is "all"
    3. Keep users matching the trimmed search query, case-insensitively

    Args:
        roster: Users in server order
        current_user_id: Signed-in user id, or None
        role_filter: Role name or "all" (blank means "all")
        search_query: Free text typed into the search box

    Returns:
        Matching users in roster order
    """
    filtered = [user for user in roster if current_user_id is None or user.id != current_user_id]

    role = (role_filter or ALL_ROLES).strip().lower()
    if role != ALL_ROLES:
        filtered = [user for user in filtered if _matches_role(user, role)]

    query = (search_query or "").strip().lower()
    if query:
        filtered = [user for user in filtered if _matches_query(user, query)]

    return filtered
