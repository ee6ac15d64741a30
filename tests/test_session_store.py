"""
Test: client storage and the persisted session.
"""
import pytest
from sqlalchemy import text

from core import config_store
from core.schema_registry import registered_names, run_all
from core.session import (CLIENT_COOKIE, CLIENT_ID_KEY, STORAGE_KEY, Session, SessionStore,
                          StaticSessionProvider, resolve_client_id)


class TestConfigStore:
    def test_roundtrip_and_upsert(self, engine):
        config_store.save(engine, "tab-1", "prefs", {"theme": "dark"})
        config_store.save(engine, "tab-1", "prefs", {"theme": "light"})
        assert config_store.get(engine, "tab-1", "prefs") == {"theme": "light"}

    def test_missing_key(self, engine):
        assert config_store.get(engine, "tab-1", "nope") is None

    def test_clients_are_isolated(self, engine):
        config_store.save(engine, "tab-1", STORAGE_KEY, {"a": 1})
        assert config_store.get(engine, "tab-2", STORAGE_KEY) is None

    def test_unreadable_value_is_none(self, engine):
        with engine.begin() as conn:
            conn.execute(text("INSERT INTO client_storage (client_id, storage_key, value_json) "
                              "VALUES ('tab-1', 'broken', '{not json')"))
        assert config_store.get(engine, "tab-1", "broken") is None

    def test_remove_and_clear(self, engine):
        config_store.save(engine, "tab-1", "a", 1)
        config_store.save(engine, "tab-1", "b", 2)
        config_store.save(engine, "tab-2", "a", 3)
        assert config_store.remove(engine, "tab-1", "a") is True
        assert config_store.remove(engine, "tab-1", "a") is False
        assert config_store.clear(engine, "tab-1") == 1
        assert config_store.get(engine, "tab-2", "a") == 3


class TestSchemaRegistry:
    def test_client_storage_installer_registered(self, engine):
        assert "client_storage" in registered_names()

    def test_installers_are_idempotent(self, engine):
        run_all(engine)
        run_all(engine)


class TestSession:
    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            Session(role="guest", api_key="x")

    def test_from_dict_with_bad_role_is_none(self):
        assert Session.from_dict({"role": "guest", "api_key": "x"}) is None

    def test_dict_roundtrip(self, admin_session):
        assert Session.from_dict(admin_session.to_dict()) == admin_session

    def test_from_login_joins_names(self):
        s = Session.from_login({"api_key": "k", "first_name": " Ada ", "last_name": "Lovelace"}, "admin")
        assert s.name == "Ada Lovelace"

    def test_static_provider(self, admin_session):
        p = StaticSessionProvider()
        assert p.current() is None
        p.set(admin_session)
        assert p.current() is admin_session


class TestSessionStore:
    def test_login_survives_reload(self, engine, student_session):
        SessionStore(engine, "tab-1").login(student_session)
        reloaded = SessionStore(engine, "tab-1")
        assert reloaded.current() == student_session

    def test_other_tab_is_signed_out(self, engine, student_session):
        SessionStore(engine, "tab-1").login(student_session)
        assert SessionStore(engine, "tab-2").current() is None

    def test_logout_clears_everything(self, engine, admin_session):
        store = SessionStore(engine, "tab-1")
        store.login(admin_session)
        config_store.save(engine, "tab-1", "prefs", {"x": 1})
        store.logout()
        assert store.current() is None
        assert config_store.get(engine, "tab-1", "prefs") is None
        assert SessionStore(engine, "tab-1").current() is None

    def test_invalid_blob_is_discarded(self, engine):
        config_store.save(engine, "tab-1", STORAGE_KEY, {"role": "hacker"})
        store = SessionStore(engine, "tab-1")
        assert store.load() is None
        assert config_store.get(engine, "tab-1", STORAGE_KEY) is None

    def test_refresh_profile(self, engine, student_session):
        store = SessionStore(engine, "tab-1")
        store.login(student_session)
        store.refresh_profile(name="Samantha Student", email="sam@university.edu")
        reloaded = SessionStore(engine, "tab-1").current()
        assert reloaded.name == "Samantha Student"
        assert reloaded.api_key == student_session.api_key

    def test_refresh_profile_signed_out(self, engine):
        assert SessionStore(engine, "tab-1").refresh_profile(name="x") is None


class TestClientId:
    def test_fresh_browser_gets_new_id_and_needs_cookie(self):
        state = {}
        cid, needs_cookie = resolve_client_id(state, {})
        assert len(cid) >= 32
        assert needs_cookie
        assert state[CLIENT_ID_KEY] == cid

    def test_ids_are_not_reused_across_browsers(self):
        assert resolve_client_id({}, {})[0] != resolve_client_id({}, {})[0]

    def test_cookie_restores_stored_session(self, engine, student_session):
        SessionStore(engine, "cookie-id").login(student_session)
        cid, needs_cookie = resolve_client_id({}, {CLIENT_COOKIE: "cookie-id"})
        assert (cid, needs_cookie) == ("cookie-id", False)
        assert SessionStore(engine, cid).load() == student_session

    def test_session_state_wins_within_a_session(self):
        cid, needs_cookie = resolve_client_id({CLIENT_ID_KEY: "tab-1"}, {CLIENT_COOKIE: "tab-1"})
        assert (cid, needs_cookie) == ("tab-1", False)
        cid, needs_cookie = resolve_client_id({CLIENT_ID_KEY: "tab-1"}, {})
        assert (cid, needs_cookie) == ("tab-1", True)

    def test_other_values_do_not_select_a_session(self, engine, admin_session):
        SessionStore(engine, "admin-tab").login(admin_session)
        # a link carrying someone else's id outside the cookie opens a blank session
        state = {}
        cid, _ = resolve_client_id(state, {"sid": "admin-tab"})
        assert cid != "admin-tab"
        assert SessionStore(engine, cid).load() is None
