"""
Tests for the conversation list, active thread and user directory stores.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from datetime import datetime, timedelta

from app.models.chat import Conversation, Message, User
from app.services.conversation_store import ConversationListStore
from app.services.thread_store import ActiveThreadStore
from app.services.user_directory import UserDirectoryCache

BASE_TIME = datetime(2026, 5, 1, 9, 0)


def make_user(user_id, role="student"):
    return User(id=user_id, name=f"User {user_id}", email=f"{user_id}@uni.edu", role=role)


def make_message(msg_id, sender, receiver, minutes=0):
    return Message(
        id=msg_id,
        sender_id=sender,
        receiver_id=receiver,
        message=f"message {msg_id}",
        timestamp=BASE_TIME + timedelta(minutes=minutes),
    )


class TestConversationListStore:
    def test_apply_and_totals(self):
        store = ConversationListStore()
        token = store.begin_refresh()
        assert store.loading

        store.apply(token, [
            Conversation(user=make_user("a"), unread_count=2),
            Conversation(user=make_user("b"), unread_count=3),
        ])

        assert not store.loading
        assert len(store) == 2
        assert store.total_unread == 5
        assert store.find("b").unread_count == 3
        assert store.find("zzz") is None

    def test_duplicates_are_dropped(self):
        store = ConversationListStore()
        token = store.begin_refresh()
        store.apply(token, [
            Conversation(user=make_user("a"), unread_count=1),
            Conversation(user=make_user("a"), unread_count=9),
        ])
        assert len(store) == 1
        assert store.find("a").unread_count == 1

    def test_older_refresh_cannot_overwrite_newer(self):
        store = ConversationListStore()
        old = store.begin_refresh()
        new = store.begin_refresh()

        assert store.apply(new, [Conversation(user=make_user("fresh"))])
        assert not store.apply(old, [Conversation(user=make_user("stale"))])
        assert [c.user.id for c in store.conversations] == ["fresh"]
        assert not store.loading

    def test_loading_stays_until_latest_refresh_settles(self):
        store = ConversationListStore()
        old = store.begin_refresh()
        new = store.begin_refresh()
        store.apply(old, [])
        assert store.loading
        store.fail(new)
        assert not store.loading

    def test_fail_resets_to_empty(self):
        store = ConversationListStore()
        store.apply(store.begin_refresh(), [Conversation(user=make_user("a"))])
        assert store.fail(store.begin_refresh())
        assert store.conversations == []

    def test_clear_unread(self):
        store = ConversationListStore()
        store.apply(store.begin_refresh(), [
            Conversation(user=make_user("a"), unread_count=4),
            Conversation(user=make_user("b"), unread_count=1),
        ])
        store.clear_unread("a")
        assert store.find("a").unread_count == 0
        assert store.find("b").unread_count == 1

    def test_negative_unread_rejected(self):
        with pytest.raises(ValueError):
            Conversation(user=make_user("a"), unread_count=-1)


class TestActiveThreadStore:
    def test_accepts_current_history(self):
        store = ActiveThreadStore()
        request = store.begin_load("a")
        assert store.loading

        history = [make_message("1", "a", "me"), make_message("2", "me", "a", 1)]
        assert store.accept(request, history)
        assert not store.loading
        assert [m.id for m in store.messages] == ["1", "2"]
        assert store.messages[-1].id == "2"

    def test_stale_history_discarded(self):
        store = ActiveThreadStore()
        request_a = store.begin_load("a")
        request_b = store.begin_load("b")

        assert store.accept(request_b, [make_message("b1", "b", "me")])
        assert not store.accept(request_a, [make_message("a1", "a", "me")])
        assert [m.id for m in store.messages] == ["b1"]

    def test_reselecting_same_counterpart_discards_first_request(self):
        store = ActiveThreadStore()
        first = store.begin_load("a")
        store.begin_load("b")
        latest = store.begin_load("a")

        assert not store.accept(first, [make_message("old", "a", "me")])
        assert store.accept(latest, [make_message("new", "a", "me")])
        assert [m.id for m in store.messages] == ["new"]

    def test_switching_discards_previous_messages(self):
        store = ActiveThreadStore()
        store.accept(store.begin_load("a"), [make_message("1", "a", "me")])
        store.begin_load("b")
        assert store.messages == []

    def test_fail_clears_loading(self):
        store = ActiveThreadStore()
        request = store.begin_load("a")
        assert store.fail(request)
        assert not store.loading
        assert store.load_failed

    def test_stale_failure_ignored(self):
        store = ActiveThreadStore()
        old = store.begin_load("a")
        store.begin_load("b")
        assert not store.fail(old)
        assert store.loading

    def test_append_only_for_active_counterpart(self):
        store = ActiveThreadStore()
        store.accept(store.begin_load("a"), [])

        assert store.append(make_message("1", "me", "a"))
        assert not store.append(make_message("2", "me", "b"))
        assert [m.id for m in store.messages] == ["1"]

    def test_append_ignores_duplicate_ids(self):
        store = ActiveThreadStore()
        store.accept(store.begin_load("a"), [make_message("1", "a", "me")])
        assert not store.append(make_message("1", "a", "me"))
        assert len(store.messages) == 1

    def test_history_keeps_messages_sent_while_loading(self):
        store = ActiveThreadStore()
        request = store.begin_load("a")
        assert store.append(make_message("sent", "me", "a", minutes=5))

        assert store.accept(request, [make_message("old", "a", "me")])
        assert [m.id for m in store.messages] == ["old", "sent"]

    def test_history_that_already_has_sent_message_is_not_duplicated(self):
        store = ActiveThreadStore()
        request = store.begin_load("a")
        store.append(make_message("sent", "me", "a", minutes=5))

        store.accept(request, [make_message("old", "a", "me"), make_message("sent", "me", "a", minutes=5)])
        assert [m.id for m in store.messages] == ["old", "sent"]

    def test_revision_tracks_changes(self):
        store = ActiveThreadStore()
        start = store.revision
        store.accept(store.begin_load("a"), [make_message("1", "a", "me")])
        after_load = store.revision
        assert after_load > start
        store.append(make_message("2", "me", "a"))
        assert store.revision > after_load


class TestUserDirectoryCache:
    def test_replace_and_lookup(self):
        cache = UserDirectoryCache()
        cache.replace([make_user("a"), make_user("b", role="ALUMNI")])
        assert len(cache) == 2
        assert cache.get("b").role == "ALUMNI"
        assert cache.role_breakdown() == {"student": 1, "ALUMNI": 1}

    def test_clear(self):
        cache = UserDirectoryCache()
        cache.replace([make_user("a")])
        cache.clear()
        assert cache.users == []
        assert cache.get("a") is None
