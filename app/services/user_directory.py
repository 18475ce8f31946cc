"""
User directory cache.

Holds the full roster of addressable users. Replaced wholesale on every load,
never patched.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from app.models.chat import User

logger = logging.getLogger(__name__)


class UserDirectoryCache:
    """In-memory roster used as the source for directory search."""

    def __init__(self):
        self._users: List[User] = []
        self._by_id: Dict[str, User] = {}

    @property
    def users(self) -> List[User]:
        return list(self._users)

    def __len__(self) -> int:
        return len(self._users)

    def replace(self, users: Iterable[User]) -> None:
        self._users = list(users)
        self._by_id = {user.id: user for user in self._users}
        logger.info(f"Roster loaded: {len(self._users)} users")
        logger.debug(f"Roster role breakdown: {self.role_breakdown()}")

    def clear(self) -> None:
        self._users = []
        self._by_id = {}

    def get(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def role_breakdown(self) -> Dict[str, int]:
        return dict(Counter(user.role for user in self._users))
