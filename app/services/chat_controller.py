"""
Chat Session Controller

Orchestrates the direct-messaging view for one signed-in user:
1. Loads conversations and the user roster concurrently
2. Filters the roster for the "new message" directory (debounced)
3. Selects a counterpart: history load, read acknowledgement, list refresh
4. Sends messages (single-flight) and reconciles the thread and list

All state lives on one asyncio event loop. Overlapping operations are made
safe by discarding stale responses, not by locking.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from app.config import Settings, get_settings
from app.integrations.chat_api.transport import ChatTransport
from app.integrations.chat_api.client import ChatAPIError
from app.models.chat import Conversation, Message, User
from app.services.conversation_store import ConversationListStore
from app.services.debouncer import Debouncer
from app.services.filter_engine import ALL_ROLES, filter_users
from app.services.notifications import LoggingNotifier, NotificationLevel, Notifier
from app.services.session_context import SessionContext
from app.services.thread_store import ActiveThreadStore
from app.services.user_directory import UserDirectoryCache
from app.utils.helpers import activity_type_for_role

logger = logging.getLogger(__name__)


def _error_text(error: Exception, default: str) -> str:
    if isinstance(error, ChatAPIError) and error.message:
        return error.message
    return default


@dataclass
class ChatViewState:
    """Snapshot of everything the presentation layer renders."""

    current_user_id: Optional[str]
    conversations: List[Conversation]
    total_unread: int
    filtered_users: List[User]
    search_query: str
    role_filter: str
    directory_open: bool
    selected_user: Optional[User]
    messages: List[Message]
    compose_text: str
    sending: bool
    initial_loading: bool
    searching: bool
    thread_loading: bool
    thread_load_failed: bool
    conversations_loading: bool
    scroll_to_bottom: bool


class ChatSessionController:
    """
    Single entry point for every chat state mutation.
    """

    def __init__(
        self,
        transport: ChatTransport,
        session: SessionContext,
        notifier: Optional[Notifier] = None,
        settings: Optional[Settings] = None,
        debounce_seconds: Optional[float] = None,
    ):
        settings = settings or get_settings()
        self.transport = transport
        self.session = session
        self.notifier = notifier or LoggingNotifier()

        self.directory = UserDirectoryCache()
        self.conversation_store = ConversationListStore()
        self.thread_store = ActiveThreadStore()

        if debounce_seconds is None:
            debounce_seconds = settings.search_debounce_seconds
        self._debouncer = Debouncer(debounce_seconds, self._evaluate_filter)

        self.filtered_users: List[User] = []
        self.search_query = ""
        self.role_filter = ALL_ROLES
        self.selected_user: Optional[User] = None
        self.compose_text = ""

        self.initial_loading = False
        self.sending = False
        self.searching = False
        self.directory_open = False
        self.scroll_to_bottom = False
        self._seen_revision = self.thread_store.revision

    # ── read-only views ───────────────────────────────────────────────

    @property
    def current_user_id(self) -> Optional[str]:
        return self.session.current_user_id

    @property
    def conversations(self) -> List[Conversation]:
        return self.conversation_store.conversations

    @property
    def messages(self) -> List[Message]:
        return self.thread_store.messages

    @property
    def thread_loading(self) -> bool:
        return self.thread_store.loading

    def is_own_message(self, message: Message) -> bool:
        return self.current_user_id is not None and message.sender_id == self.current_user_id

    def directory_empty_text(self) -> str:
        if self.search_query.strip():
            return f'No users found for "{self.search_query}"'
        return "No users found"

    def view_state(self) -> ChatViewState:
        return ChatViewState(
            current_user_id=self.current_user_id,
            conversations=self.conversations,
            total_unread=self.conversation_store.total_unread,
            filtered_users=list(self.filtered_users),
            search_query=self.search_query,
            role_filter=self.role_filter,
            directory_open=self.directory_open,
            selected_user=self.selected_user,
            messages=self.messages,
            compose_text=self.compose_text,
            sending=self.sending,
            initial_loading=self.initial_loading,
            searching=self.searching,
            thread_loading=self.thread_loading,
            thread_load_failed=self.thread_store.load_failed,
            conversations_loading=self.conversation_store.loading,
            scroll_to_bottom=self.scroll_to_bottom,
        )

    # ── loading ───────────────────────────────────────────────────────

    async def load_initial_data(self) -> None:
        """Load conversations and roster concurrently; each failure is isolated."""
        self.initial_loading = True
        try:
            await asyncio.gather(
                self.load_conversations(notify_on_error=True),
                self.load_roster(),
            )
        finally:
            self.initial_loading = False

    async def load_conversations(self, notify_on_error: bool = False) -> None:
        token = self.conversation_store.begin_refresh()
        try:
            conversations = await self.transport.fetch_conversations()
        except Exception as e:
            logger.error(f"Failed to load conversations: {e}")
            if self.conversation_store.fail(token) and notify_on_error:
                self.notifier.notify(_error_text(e, "Failed to load conversations"), NotificationLevel.ERROR)
            return

        if self.conversation_store.apply(token, conversations):
            logger.info(f"Conversations loaded: {len(self.conversation_store)}")

    async def load_roster(self) -> None:
        try:
            users = await self.transport.fetch_users()
        except Exception as e:
            logger.error(f"Failed to load users: {e}")
            self.directory.clear()
            self.filtered_users = []
            self.notifier.notify("Failed to load users for chat", NotificationLevel.ERROR)
            return

        self.directory.replace(users)
        self._evaluate_filter()

    # ── directory search ──────────────────────────────────────────────

    def set_search_query(self, text: str) -> None:
        text = text or ""
        if text == self.search_query:
            return
        self.search_query = text
        self.searching = bool(text.strip())
        self._debouncer.schedule()

    def set_role_filter(self, role: str) -> None:
        role = (role or ALL_ROLES).strip().lower() or ALL_ROLES
        if role == self.role_filter:
            return
        self.role_filter = role
        self._debouncer.schedule()

    def _evaluate_filter(self) -> None:
        self.filtered_users = filter_users(
            self.directory.users,
            self.current_user_id,
            self.role_filter,
            self.search_query,
        )
        self.searching = False
        logger.debug(
            f"Directory filter (role={self.role_filter}, query='{self.search_query}'): "
            f"{len(self.filtered_users)} of {len(self.directory)} users"
        )

    # ── directory dropdown ────────────────────────────────────────────

    def open_directory(self) -> None:
        self.directory_open = True

    def close_directory(self) -> None:
        self.directory_open = False

    def toggle_directory(self) -> None:
        self.directory_open = not self.directory_open

    def handle_pointer_down(self, inside_directory: bool) -> None:
        """Any pointer interaction outside the open dropdown dismisses it."""
        if self.directory_open and not inside_directory:
            self.directory_open = False

    # ── thread ────────────────────────────────────────────────────────

    def _sync_scroll(self) -> None:
        if self.thread_store.revision != self._seen_revision:
            self._seen_revision = self.thread_store.revision
            self.scroll_to_bottom = True

    def consume_scroll_request(self) -> bool:
        """Return and reset the pending scroll-to-newest request."""
        requested, self.scroll_to_bottom = self.scroll_to_bottom, False
        return requested

    def _resolve_counterpart(self, user: User) -> Optional[User]:
        known = self.directory.get(user.id)
        if known is not None:
            return known
        conv = self.conversation_store.find(user.id)
        if conv is not None:
            return conv.user
        return None

    async def select_counterpart(self, user: User) -> bool:
        """
        Open the thread with ``user``.

        Returns:
            True when the history was loaded and is still the active thread
        """
        if self.current_user_id is not None and user.id == self.current_user_id:
            logger.warning("Ignoring selection of the signed-in user")
            return False

        counterpart = self._resolve_counterpart(user)
        if counterpart is None:
            logger.warning(f"User {user.id} is neither in the directory nor in a conversation")
            return False

        self.selected_user = counterpart
        self.directory_open = False
        self.set_search_query("")

        request = self.thread_store.begin_load(counterpart.id)
        self._sync_scroll()
        try:
            history = await self.transport.fetch_history(counterpart.id)
        except Exception as e:
            logger.error(f"Failed to load history with {counterpart.id}: {e}")
            if self.thread_store.fail(request):
                self.notifier.notify(_error_text(e, "Failed to load chat history"), NotificationLevel.ERROR)
            return False

        if not self.thread_store.accept(request, history):
            return False
        self._sync_scroll()
        logger.info(f"Loaded {len(history)} messages with {counterpart.id}")

        try:
            await self.transport.mark_read(counterpart.id)
        except Exception as e:
            logger.warning(f"Failed to mark messages from {counterpart.id} as read: {e}")
        else:
            self.conversation_store.clear_unread(counterpart.id)

        await self.load_conversations()
        return True

    # ── compose / send ────────────────────────────────────────────────

    def set_compose_text(self, text: str) -> None:
        self.compose_text = text or ""

    async def send_message(self, text: Optional[str] = None) -> Optional[Message]:
        """
        Send ``text`` (defaults to the compose box) to the selected counterpart.

        Returns:
            The persisted message, or None if nothing was sent
        """
        if self.sending:
            logger.debug("Send already in flight, ignoring")
            return None
        text = self.compose_text if text is None else text
        counterpart = self.selected_user
        if not text.strip() or counterpart is None:
            return None

        self.sending = True
        try:
            try:
                message = await self.transport.send_message(counterpart.id, text.strip())
            except Exception as e:
                logger.error(f"Failed to send message to {counterpart.id}: {e}")
                self.notifier.notify(_error_text(e, "Failed to send message"), NotificationLevel.ERROR)
                return None

            self.thread_store.append(message)
            self._sync_scroll()
            self.compose_text = ""

            await asyncio.gather(
                self.load_conversations(),
                self._log_send_activity(counterpart),
            )
            self.notifier.notify("Message sent successfully!", NotificationLevel.SUCCESS)
            return message
        finally:
            self.sending = False

    async def _log_send_activity(self, counterpart: User) -> None:
        activity_type = activity_type_for_role(counterpart.role)
        try:
            await self.transport.log_activity(activity_type.value, f"Sent message to {counterpart.name}")
        except Exception as e:
            logger.warning(f"Failed to log chat activity: {e}")

    def close(self) -> None:
        self._debouncer.cancel()
