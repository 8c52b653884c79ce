"""
Tests for the in-process chat session store: reuse, idle expiry and reset.
"""

from datetime import datetime, timedelta

from app.core.sessions import SESSION_EXPIRY_TIME, SessionStore

T0 = datetime(2024, 1, 1, 12, 0, 0)


# ── Lookup / creation ────────────────────────────────────────

class TestGetOrCreate:
    def test_first_message_creates_session(self, session_store, chat_factory):
        chat = session_store.get_or_create("u1", now=T0)
        assert chat is chat_factory.created[0]
        assert "u1" in session_store
        assert len(session_store) == 1

    def test_same_user_reuses_handle(self, session_store, chat_factory):
        first = session_store.get_or_create("u1", now=T0)
        second = session_store.get_or_create("u1", now=T0 + timedelta(minutes=5))
        assert first is second
        assert len(chat_factory.created) == 1

    def test_different_users_get_different_handles(self, session_store):
        a = session_store.get_or_create("alice", now=T0)
        b = session_store.get_or_create("bob", now=T0)
        assert a is not b
        assert len(session_store) == 2

    def test_lookup_refreshes_last_accessed(self, session_store):
        session_store.get_or_create("u1", now=T0)
        session_store.get_or_create("u1", now=T0 + timedelta(minutes=25))
        # 50 minutes after creation, but only 25 after the last message
        removed = session_store.sweep_expired(now=T0 + timedelta(minutes=50))
        assert removed == []
        assert "u1" in session_store

    def test_expired_handle_is_replaced_on_lookup(self, session_store, chat_factory):
        stale = session_store.get_or_create("u1", now=T0)
        fresh = session_store.get_or_create("u1", now=T0 + SESSION_EXPIRY_TIME + timedelta(seconds=1))
        assert fresh is not stale
        assert len(chat_factory.created) == 2
        assert len(session_store) == 1


# ── Sweeping ─────────────────────────────────────────────────

class TestSweepExpired:
    def test_default_idle_timeout_is_thirty_minutes(self, session_store):
        assert session_store.idle_timeout == timedelta(minutes=30)

    def test_sweep_removes_only_idle_sessions(self, session_store):
        session_store.get_or_create("idle", now=T0)
        session_store.get_or_create("active", now=T0 + timedelta(minutes=20))

        removed = session_store.sweep_expired(now=T0 + timedelta(minutes=31))

        assert removed == ["idle"]
        assert "idle" not in session_store
        assert "active" in session_store

    def test_session_exactly_at_timeout_is_kept(self, session_store):
        session_store.get_or_create("u1", now=T0)
        assert session_store.sweep_expired(now=T0 + SESSION_EXPIRY_TIME) == []
        assert "u1" in session_store

    def test_user_gets_new_session_after_eviction(self, session_store, chat_factory):
        stale = session_store.get_or_create("u1", now=T0)
        later = T0 + timedelta(hours=1)
        session_store.sweep_expired(now=later)
        assert "u1" not in session_store

        fresh = session_store.get_or_create("u1", now=later)
        assert fresh is not stale
        assert fresh.history == []

    def test_sweep_on_empty_store(self, session_store):
        assert session_store.sweep_expired(now=T0) == []

    def test_custom_idle_timeout(self, chat_factory):
        store = SessionStore(chat_factory=chat_factory, idle_timeout=timedelta(minutes=1))
        store.get_or_create("u1", now=T0)
        assert store.sweep_expired(now=T0 + timedelta(minutes=2)) == ["u1"]


# ── Removal ──────────────────────────────────────────────────

class TestRemove:
    def test_remove_existing(self, session_store):
        session_store.get_or_create("u1", now=T0)
        assert session_store.remove("u1") is True
        assert "u1" not in session_store

    def test_remove_missing(self, session_store):
        assert session_store.remove("nobody") is False
