"""
Background event loop for synchronous hosts.

Streamlit re-executes its script on every interaction, so the chat controller
lives on a long-running asyncio loop in a daemon thread. The page submits
coroutines with ``run`` and plain calls with ``call``; both execute on the
loop thread, keeping every state mutation on one logical thread.
"""

import asyncio
import logging
import threading
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ControllerRunner:
    def __init__(self, name: str = "chat-loop"):
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run_loop, name=name, daemon=True)
        self._thread.start()

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    def run(self, coro: Awaitable[T], timeout: Optional[float] = None) -> T:
        """Run a coroutine on the loop and wait for its result."""
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        return future.result(timeout)

    def call(self, func: Callable[..., T], *args: Any, timeout: Optional[float] = None) -> T:
        """Run a synchronous function on the loop thread and return its result."""

        async def _invoke() -> T:
            return func(*args)

        return self.run(_invoke(), timeout)

    def stop(self) -> None:
        if self.loop.is_closed():
            return
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout=5)
        self.loop.close()
        logger.debug("Controller loop stopped")
