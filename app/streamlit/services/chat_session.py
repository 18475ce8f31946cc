"""
Per-browser-session chat controller.

Creates the controller once per Streamlit session and keeps it, with its
event loop runner and toast queue, in ``st.session_state``. Every call into
the controller goes through the runner so it executes on the loop thread.
"""

import logging
from typing import Any, Callable

import streamlit as st

from app.config import get_settings
from app.integrations.chat_api import ChatAPIClient
from app.services.chat_controller import ChatSessionController, ChatViewState
from app.services.notifications import QueueNotifier
from app.services.runner import ControllerRunner
from app.services.session_context import SessionContext
from config.settings import CONTROLLER_CALL_TIMEOUT, TOAST_ICONS

logger = logging.getLogger(__name__)


def get_controller() -> ChatSessionController:
    """Return the session's controller, creating and loading it on first use."""
    if "chat_controller" not in st.session_state:
        settings = get_settings()
        runner = ControllerRunner()
        notifier = QueueNotifier()
        controller = ChatSessionController(
            transport=ChatAPIClient(settings),
            session=SessionContext.from_settings(settings),
            notifier=notifier,
            settings=settings,
        )
        st.session_state.chat_runner = runner
        st.session_state.chat_notifier = notifier
        st.session_state.chat_controller = controller
        logger.info(f"Chat session started for user {controller.current_user_id}")
        runner.run(controller.load_initial_data(), timeout=CONTROLLER_CALL_TIMEOUT)
    return st.session_state.chat_controller


def run_action(coro_factory: Callable[[ChatSessionController], Any]) -> Any:
    """Await a controller coroutine on the loop, e.g. ``run_action(lambda c: c.send_message())``."""
    controller = get_controller()
    return st.session_state.chat_runner.run(coro_factory(controller), timeout=CONTROLLER_CALL_TIMEOUT)


def call_action(method: Callable[..., Any], *args: Any) -> Any:
    """Invoke a synchronous controller method on the loop thread."""
    get_controller()
    return st.session_state.chat_runner.call(method, *args, timeout=CONTROLLER_CALL_TIMEOUT)


def snapshot() -> ChatViewState:
    controller = get_controller()
    return call_action(controller.view_state)


def show_pending_toasts() -> None:
    notifier: QueueNotifier = st.session_state.get("chat_notifier")
    if notifier is None:
        return
    for message, level in call_action(notifier.drain):
        st.toast(message, icon=TOAST_ICONS.get(level.value))
