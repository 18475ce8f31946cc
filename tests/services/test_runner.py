"""
Tests for the background event loop runner used by the Streamlit page.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import asyncio
import threading

import pytest

from app.services.chat_controller import ChatSessionController
from app.services.notifications import QueueNotifier
from app.services.runner import ControllerRunner
from app.services.session_context import SessionContext


@pytest.fixture
def runner():
    r = ControllerRunner(name="test-loop")
    yield r
    r.stop()


def test_run_returns_coroutine_result(runner):
    async def compute():
        await asyncio.sleep(0.01)
        return 42

    assert runner.run(compute(), timeout=5) == 42


def test_call_executes_on_loop_thread(runner):
    caller = threading.get_ident()
    loop_thread = runner.call(threading.get_ident, timeout=5)
    assert loop_thread != caller


def test_exceptions_propagate(runner):
    async def explode():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        runner.run(explode(), timeout=5)


def test_drives_controller_debounce(runner):
    """Setters called through the runner can schedule loop timers."""

    class EmptyTransport:
        async def fetch_users(self):
            return []

    controller = ChatSessionController(
        transport=EmptyTransport(),
        session=SessionContext(current_user_id="me"),
        notifier=QueueNotifier(),
        debounce_seconds=0.01,
    )
    runner.call(controller.set_search_query, "abc", timeout=5)
    runner.run(asyncio.sleep(0.05), timeout=5)
    assert runner.call(lambda: controller.searching, timeout=5) is False


def test_stop_is_idempotent():
    r = ControllerRunner()
    r.stop()
    r.stop()
    assert r.loop.is_closed()
