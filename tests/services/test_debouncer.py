"""
Tests for the single-timer debouncer.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import asyncio

import pytest

from app.services.debouncer import Debouncer

WINDOW = 0.05


@pytest.mark.asyncio
async def test_burst_collapses_to_one_call():
    calls = []
    debouncer = Debouncer(WINDOW, lambda: calls.append("run"))

    for _ in range(5):
        debouncer.schedule()
        await asyncio.sleep(WINDOW / 5)

    assert calls == []
    await asyncio.sleep(WINDOW * 3)
    assert calls == ["run"]


@pytest.mark.asyncio
async def test_cancel_prevents_call():
    calls = []
    debouncer = Debouncer(WINDOW, lambda: calls.append("run"))
    debouncer.schedule()
    debouncer.cancel()
    await asyncio.sleep(WINDOW * 3)
    assert calls == []


@pytest.mark.asyncio
async def test_failing_callback_does_not_break_later_runs():
    calls = []

    def callback():
        calls.append("run")
        if len(calls) == 1:
            raise RuntimeError("boom")

    debouncer = Debouncer(WINDOW, callback)
    debouncer.schedule()
    await asyncio.sleep(WINDOW * 3)
    debouncer.schedule()
    await asyncio.sleep(WINDOW * 3)
    assert calls == ["run", "run"]


def test_schedule_requires_running_loop():
    debouncer = Debouncer(WINDOW, lambda: None)
    with pytest.raises(RuntimeError):
        debouncer.schedule()
