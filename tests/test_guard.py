"""Tests for the admin session guard."""

import pytest

from booking_admin.auth import GuardState, SessionGuard
from booking_admin.errors import StoreError
from booking_admin.identity import AuthSession
from booking_admin.models import USERS

ADMIN = AuthSession(uid="admin-1", email="admin@admin.com", id_token="token-admin-1")


class TestAuthorization:
    def test_starts_checking(self, store):
        guard = SessionGuard(store)
        assert guard.state == GuardState.CHECKING
        assert guard.loading
        assert not guard.authorized

    @pytest.mark.asyncio
    async def test_admin_role_is_admitted(self, store):
        guard = SessionGuard(store)
        assert await guard.check(ADMIN)
        assert guard.authorized
        assert guard.admin.uid == "admin-1"
        assert guard.admin.email == "admin@admin.com"

    @pytest.mark.asyncio
    async def test_email_falls_back_to_profile(self, store):
        guard = SessionGuard(store)
        await guard.check(AuthSession(uid="admin-1"))
        assert guard.admin.email == "admin@admin.com"


class TestFailClosed:
    @pytest.mark.asyncio
    async def test_no_session(self, store):
        redirects = []
        guard = SessionGuard(store, on_redirect=lambda: redirects.append(True))
        assert not await guard.check(None)
        assert guard.state == GuardState.DENIED
        assert redirects == [True]

    @pytest.mark.asyncio
    async def test_non_admin_role(self, store):
        guard = SessionGuard(store)
        assert not await guard.check(AuthSession(uid="user-1"))
        assert not guard.authorized
        assert guard.admin is None

    @pytest.mark.asyncio
    async def test_missing_profile_document(self, store):
        guard = SessionGuard(store)
        assert not await guard.check(AuthSession(uid="nobody"))
        assert guard.state == GuardState.DENIED

    @pytest.mark.asyncio
    async def test_malformed_profile(self, store):
        store.data[USERS]["weird"] = {"role": {"name": "admin"}}
        guard = SessionGuard(store)
        assert not await guard.check(AuthSession(uid="weird"))
        assert guard.state == GuardState.DENIED

    @pytest.mark.asyncio
    async def test_network_error(self, store):
        store.fail("get_document", StoreError("unavailable", "backend down"))
        guard = SessionGuard(store)
        assert not await guard.check(ADMIN)
        assert guard.state == GuardState.DENIED

    @pytest.mark.asyncio
    async def test_unexpected_error(self, store):
        store.fail("get_document", RuntimeError("boom"))
        guard = SessionGuard(store)
        assert not await guard.check(ADMIN)
        assert not guard.authorized

    @pytest.mark.asyncio
    async def test_revoked_admin_loses_access_on_recheck(self, store):
        guard = SessionGuard(store)
        assert await guard.check(ADMIN)
        store.data[USERS]["admin-1"]["role"] = "customer"
        assert not await guard.check(ADMIN)
        assert guard.admin is None


class TestSessionWatching:
    @pytest.mark.asyncio
    async def test_watch_checks_immediately_and_on_changes(self, store, identity):
        identity.add_account("admin-1", "admin@admin.com")
        guard = SessionGuard(store)

        await guard.watch(identity)
        assert guard.state == GuardState.DENIED  # no session yet

        await identity.sign_in("admin@admin.com", "secret123")
        assert guard.authorized

        await identity.sign_out()
        assert guard.state == GuardState.DENIED

    @pytest.mark.asyncio
    async def test_closed_guard_ignores_changes(self, store, identity):
        identity.add_account("admin-1", "admin@admin.com")
        guard = SessionGuard(store)
        await guard.watch(identity)
        guard.close()

        await identity.sign_in("admin@admin.com", "secret123")
        assert not guard.authorized
        assert identity._listeners == []

    @pytest.mark.asyncio
    async def test_closed_guard_does_not_redirect(self, store):
        redirects = []
        guard = SessionGuard(store, on_redirect=lambda: redirects.append(True))
        guard.close()
        assert not await guard.check(None)
        assert redirects == []
