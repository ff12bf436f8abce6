"""
Tests for SessionStore: sign-in/sign-out semantics, timeouts, notifications,
serialization of auth calls and startup restore.

Async code is driven with asyncio.run so no pytest plugin is needed.
"""

import asyncio

import pytest

from conftest import FakeProvider
from domain.models import Identity
from services.auth.local import LocalAuthProvider, LocalUser
from services.auth.provider import AuthError
from services.session.store import SessionStore


def _events(store: SessionStore) -> list:
    seen = []
    store.subscribe(seen.append)
    return seen


class TestSignIn:
    def test_success_sets_user_and_notifies(self, provider, creds):
        store = SessionStore(provider)
        seen = _events(store)

        identity = asyncio.run(store.sign_in(creds))

        assert identity == Identity(id="u1")
        assert store.current_user() == Identity(id="u1")
        assert [e.type for e in seen] == ["sign_in"]
        assert seen[0].old_user is None
        assert seen[0].new_user == Identity(id="u1")

    def test_rejection_is_raised_and_session_stays_absent(self, provider, creds):
        provider.sign_in_error = AuthError("invalid username or password")
        store = SessionStore(provider)
        seen = _events(store)

        with pytest.raises(AuthError, match="invalid username"):
            asyncio.run(store.sign_in(creds))

        assert store.current_user() is None
        assert seen == []

    def test_timeout_becomes_auth_error(self, creds):
        store = SessionStore(FakeProvider(delay=1.0), timeout_s=0.01)

        with pytest.raises(AuthError, match="timed out"):
            asyncio.run(store.sign_in(creds))

        assert store.current_user() is None


class TestSignOut:
    def _signed_in(self, provider, creds) -> SessionStore:
        store = SessionStore(provider, timeout_s=0.05)
        asyncio.run(store.sign_in(creds))
        return store

    def test_success_clears_user(self, provider, creds):
        store = self._signed_in(provider, creds)
        seen = _events(store)

        asyncio.run(store.sign_out())

        assert store.current_user() is None
        assert [e.type for e in seen] == ["sign_out"]

    def test_provider_error_is_not_raised_and_user_is_cleared(self, provider, creds, caplog):
        store = self._signed_in(provider, creds)
        provider.sign_out_error = AuthError("upstream down")

        asyncio.run(store.sign_out())

        assert store.current_user() is None
        assert "upstream down" in caplog.text

    def test_provider_timeout_still_clears_user(self, provider, creds):
        store = self._signed_in(provider, creds)
        provider.delay = 1.0

        asyncio.run(store.sign_out())

        assert store.current_user() is None

    def test_unexpected_error_propagates_after_clearing(self, provider, creds):
        store = self._signed_in(provider, creds)
        provider.sign_out_error = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            asyncio.run(store.sign_out())

        assert store.current_user() is None

    def test_sign_out_while_signed_out_emits_nothing(self, provider):
        store = SessionStore(provider)
        seen = _events(store)

        asyncio.run(store.sign_out())

        assert store.current_user() is None
        assert seen == []


class TestSubscribers:
    def test_failing_subscriber_does_not_block_others(self, provider, creds):
        store = SessionStore(provider)

        def boom(_event):
            raise ValueError("subscriber bug")

        store.subscribe(boom)
        seen = _events(store)

        asyncio.run(store.sign_in(creds))

        assert store.current_user() == Identity(id="u1")
        assert len(seen) == 1

    def test_unsubscribe(self, provider, creds):
        store = SessionStore(provider)
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()  # idempotent

        asyncio.run(store.sign_in(creds))

        assert seen == []


def test_auth_calls_are_serialized_and_last_completed_wins(creds):
    provider = FakeProvider(delay=0.01)
    store = SessionStore(provider)

    async def race():
        await asyncio.gather(store.sign_in(creds), store.sign_out())

    asyncio.run(race())

    assert provider.max_in_flight == 1
    assert provider.calls == ["sign_in", "sign_out"]
    assert store.current_user() is None


class TestRestore:
    def test_provider_without_restore_keeps_current_state(self, provider):
        store = SessionStore(provider)

        assert asyncio.run(store.restore()) is None
        assert store.current_user() is None

    def test_restores_provider_session(self, admin_hash, creds):
        local = LocalAuthProvider([LocalUser("u1", "alice", admin_hash)])
        asyncio.run(local.sign_in(creds))
        store = SessionStore(local)
        seen = _events(store)

        restored = asyncio.run(store.restore())

        assert restored == Identity(id="u1", username="alice")
        assert store.current_user() == restored
        assert [e.type for e in seen] == ["restored"]

    def test_restore_failure_leaves_session_absent(self, provider, caplog):
        async def failing_restore():
            raise AuthError("token store unreadable")

        provider.restore = failing_restore
        store = SessionStore(provider)

        assert asyncio.run(store.restore()) is None
        assert store.current_user() is None
        assert "token store unreadable" in caplog.text


def test_provider_reported_expiry_clears_session(admin_hash, creds):
    local = LocalAuthProvider([LocalUser("u1", "alice", admin_hash)])
    store = SessionStore(local)
    seen = _events(store)
    asyncio.run(store.sign_in(creds))

    local.expire()

    assert store.current_user() is None
    assert [e.type for e in seen] == ["sign_in", "expired"]
