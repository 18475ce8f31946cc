"""
Tests for settings and the session context.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.config import Settings
from app.services.session_context import SessionContext


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.search_debounce_ms == 300
    assert settings.search_debounce_seconds == 0.3
    assert settings.role_filters[0] == "all"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CURRENT_USER_ID", "u42")
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "150")
    settings = Settings(_env_file=None)
    assert settings.current_user_id == "u42"
    assert settings.search_debounce_seconds == 0.15


def test_session_from_settings():
    session = SessionContext.from_settings(Settings(_env_file=None, current_user_id="u1", current_user_name="Alice"))
    assert session.current_user_id == "u1"
    assert session.is_authenticated


def test_session_blank_user_id_is_absent():
    session = SessionContext.from_settings(Settings(_env_file=None, current_user_id=""))
    assert session.current_user_id is None
    assert not session.is_authenticated
