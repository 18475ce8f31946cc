"""
Chat API Client

HTTP transport for the chat backend:
- GET  /api/chat/conversations: conversation summaries with unread counts
- GET  /api/chat/users: roster of addressable users
- GET  /api/chat/history/{user_id}: messages exchanged with one user
- POST /api/chat/send: send a message
- PUT  /api/chat/read/{user_id}: mark a thread as read
- POST /api/activities: activity/audit log

Blocking ``requests`` calls run in a worker thread so the controller's event
loop is never blocked.
"""

import asyncio
import logging
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from app.config import Settings, get_settings
from app.models.chat import Conversation, Message, User

logger = logging.getLogger(__name__)


class ChatAPIError(Exception):
    """
    Raised when a chat backend call fails.
    ``message`` is safe to show to the user; ``status_code`` is None for
    connection problems and malformed responses.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _extract_error_detail(e: requests.HTTPError) -> str:
    """Pull a human-readable detail string from an HTTPError response."""
    try:
        body = e.response.json()
        return body.get("detail") or body.get("message") or str(e)
    except Exception:
        return str(e)


class ChatAPIClient:
    """requests-based implementation of the chat transport."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.api_base_url.rstrip("/")
        self.timeout = self.settings.api_timeout
        self.session = session or requests.Session()
        if self.settings.api_token:
            self.session.headers["Authorization"] = f"Bearer {self.settings.api_token}"

    def _request(self, method: str, endpoint: str, json: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            resp = self.session.request(method, url, json=json, timeout=self.timeout)
            resp.raise_for_status()
        except requests.ConnectionError:
            logger.error(f"Cannot connect to chat backend at {self.base_url}")
            raise ChatAPIError("Cannot connect to chat server. Is it running?")
        except requests.Timeout:
            logger.error(f"{method} {endpoint} timed out after {self.timeout}s")
            raise ChatAPIError("Chat server did not respond in time")
        except requests.HTTPError as e:
            detail = _extract_error_detail(e)
            status = e.response.status_code if e.response is not None else None
            logger.error(f"{method} {endpoint} failed ({status}): {detail}")
            raise ChatAPIError(detail, status_code=status)
        except requests.RequestException as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise ChatAPIError(str(e))

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            logger.error(f"{method} {endpoint} returned a non-JSON body")
            raise ChatAPIError("Unexpected response from chat server")

    async def _call(self, method: str, endpoint: str, json: Optional[dict] = None) -> Any:
        return await asyncio.to_thread(self._request, method, endpoint, json)

    @staticmethod
    def _parse_list(model, data: Any, what: str) -> list:
        if data is None:
            return []
        if not isinstance(data, list):
            raise ChatAPIError(f"Unexpected {what} payload from chat server")
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error(f"Invalid {what} payload: {e}")
            raise ChatAPIError(f"Unexpected {what} payload from chat server")

    async def fetch_conversations(self) -> List[Conversation]:
        logger.debug("Fetching conversations")
        data = await self._call("GET", "/api/chat/conversations")
        return self._parse_list(Conversation, data, "conversation")

    async def fetch_users(self) -> List[User]:
        logger.debug("Fetching chat roster")
        data = await self._call("GET", "/api/chat/users")
        return self._parse_list(User, data, "user")

    async def fetch_history(self, user_id: str) -> List[Message]:
        logger.debug(f"Fetching history with {user_id}")
        data = await self._call("GET", f"/api/chat/history/{user_id}")
        return self._parse_list(Message, data, "message")

    async def send_message(self, receiver_id: str, text: str) -> Message:
        data = await self._call("POST", "/api/chat/send", json={"receiverId": receiver_id, "message": text})
        try:
            return Message.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid send response: {e}")
            raise ChatAPIError("Unexpected response from chat server")

    async def mark_read(self, user_id: str) -> None:
        await self._call("PUT", f"/api/chat/read/{user_id}")

    async def log_activity(self, activity_type: str, description: str) -> None:
        await self._call("POST", "/api/activities", json={"type": activity_type, "description": description})
