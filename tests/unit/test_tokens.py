"""
Unit tests for jobboard/tokens.py

Covers both stores: the in-memory one and the Flask session cookie one.
"""

from flask import Flask, session

from jobboard.tokens import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    MemoryTokenStore,
    SessionTokenStore,
)


class TestMemoryTokenStore:

    def test_empty_store_is_not_authenticated(self):
        store = MemoryTokenStore()
        assert store.get() is None
        assert store.get_refresh() is None
        assert store.is_authenticated() is False

    def test_set_then_get(self):
        store = MemoryTokenStore()
        store.set("a1", "r1")
        assert store.get() == "a1"
        assert store.get_refresh() == "r1"
        assert store.is_authenticated() is True

    def test_set_access_keeps_refresh(self):
        store = MemoryTokenStore("a1", "r1")
        store.set_access("a2")
        assert store.get() == "a2"
        assert store.get_refresh() == "r1"

    def test_clear_removes_both(self):
        store = MemoryTokenStore("a1", "r1")
        store.clear()
        assert store.get() is None
        assert store.get_refresh() is None
        assert store.is_authenticated() is False


class TestSessionTokenStore:

    def _app(self):
        app = Flask(__name__)
        app.secret_key = "test-secret-key"
        return app

    def test_set_writes_session_keys(self):
        with self._app().test_request_context():
            store = SessionTokenStore()
            store.set("a1", "r1")

            assert session[ACCESS_TOKEN_KEY] == "a1"
            assert session[REFRESH_TOKEN_KEY] == "r1"
            assert session.permanent is True
            assert store.is_authenticated() is True

    def test_set_without_refresh_drops_stale_refresh(self):
        with self._app().test_request_context():
            session[REFRESH_TOKEN_KEY] = "old"
            store = SessionTokenStore()
            store.set("a1", None)

            assert store.get() == "a1"
            assert store.get_refresh() is None

    def test_set_access_keeps_refresh(self):
        with self._app().test_request_context():
            store = SessionTokenStore()
            store.set("a1", "r1")
            store.set_access("a2")

            assert store.get() == "a2"
            assert store.get_refresh() == "r1"

    def test_clear_removes_both_keys(self):
        with self._app().test_request_context():
            store = SessionTokenStore()
            store.set("a1", "r1")
            store.clear()

            assert ACCESS_TOKEN_KEY not in session
            assert REFRESH_TOKEN_KEY not in session
            assert store.is_authenticated() is False

    def test_cookie_survives_across_requests(self, client):
        with client.session_transaction() as sess:
            sess[ACCESS_TOKEN_KEY] = "a1"

        with client.session_transaction() as sess:
            assert sess[ACCESS_TOKEN_KEY] == "a1"
