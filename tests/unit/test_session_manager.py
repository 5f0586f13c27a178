"""
Unit tests for the Session Manager state machine.
"""

import asyncio

import httpx
import pytest

from anvaya_client.domain.session import SessionState
from anvaya_client.domain.user import User, UserRole
from anvaya_client.sdk import HealthcareApi, RequestGateway, SessionManager


def _doctor():
    return User(user_id="1", email="a@b.com", name="Dr. Rao", role=UserRole.DOCTOR)


def _gateway_for(store, backend):
    return RequestGateway(store, base_url="http://testserver/api", transport=backend.transport)


class TestRestore:
    """Startup restore."""

    def test_starts_restoring(self, sessions):
        assert sessions.state == SessionState.RESTORING
        assert sessions.is_restoring
        assert sessions.current_user is None

    @pytest.mark.asyncio
    async def test_no_credential_is_anonymous_without_network(self, sessions, backend):
        snapshot = await sessions.restore()

        assert snapshot.state == SessionState.ANONYMOUS
        assert not sessions.is_restoring
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_valid_credential_authenticates(self, sessions, backend, store, doctor_profile):
        store.set("T1")
        writes = store.writes
        backend.on("GET", "/verify-token", json={"valid": True, "user": doctor_profile})

        snapshot = await sessions.restore()

        assert snapshot.state == SessionState.AUTHENTICATED
        assert sessions.current_user.user_id == "1"
        assert sessions.current_user.role == UserRole.DOCTOR
        assert backend.last.headers["Authorization"] == "Bearer T1"
        assert store.writes == writes

    @pytest.mark.asyncio
    async def test_restore_twice_is_idempotent(self, sessions, backend, store, doctor_profile):
        store.set("T1")
        writes = store.writes
        backend.on("GET", "/verify-token", json={"valid": True, "user": doctor_profile})

        first = await sessions.restore()
        second = await sessions.restore()

        assert first.state == second.state == SessionState.AUTHENTICATED
        assert first.user == second.user
        assert store.get() == "T1"
        assert store.writes == writes

    @pytest.mark.asyncio
    async def test_rejected_credential_demotes(self, sessions, backend, store):
        store.set("T-expired")
        backend.on("GET", "/verify-token", json={"valid": False})

        snapshot = await sessions.restore()

        assert snapshot.state == SessionState.ANONYMOUS
        assert store.get() is None

    @pytest.mark.asyncio
    async def test_401_demotes(self, sessions, backend, store):
        store.set("T-expired")
        backend.on("GET", "/verify-token", status=401, json={"error": "Invalid token"})

        snapshot = await sessions.restore()

        assert snapshot.state == SessionState.ANONYMOUS
        assert store.get() is None

    @pytest.mark.asyncio
    async def test_transport_failure_demotes(self, sessions, backend, store):
        store.set("T1")
        backend.on("GET", "/verify-token", exc=httpx.ConnectError("offline"))

        snapshot = await sessions.restore()

        assert snapshot.state == SessionState.ANONYMOUS
        assert store.get() is None

    @pytest.mark.asyncio
    async def test_valid_without_profile_demotes(self, sessions, backend, store):
        store.set("T1")
        backend.on("GET", "/verify-token", json={"valid": True})

        snapshot = await sessions.restore()

        assert snapshot.state == SessionState.ANONYMOUS
        assert store.get() is None

    @pytest.mark.asyncio
    async def test_concurrent_restores_share_one_validation(self, sessions, backend, store, doctor_profile):
        store.set("T1")
        backend.on("GET", "/verify-token", json={"valid": True, "user": doctor_profile})

        first, second = await asyncio.gather(sessions.restore(), sessions.restore())

        assert first is second
        assert len(backend.requests) == 1


class TestSignInOut:
    """Sign-in and sign-out transitions."""

    @pytest.mark.asyncio
    async def test_sign_in_persists_credential(self, sessions, backend, store):
        snapshot = await sessions.sign_in(_doctor(), "T1")

        assert snapshot.state == SessionState.AUTHENTICATED
        assert sessions.current_user == _doctor()
        assert store.get() == "T1"
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_sign_in_requires_credential(self, sessions):
        with pytest.raises(ValueError):
            await sessions.sign_in(_doctor(), "")

    @pytest.mark.asyncio
    async def test_round_trip_then_restore_is_offline(self, sessions, backend, store):
        await sessions.sign_in(_doctor(), "T1")
        snapshot = await sessions.sign_out()

        assert snapshot.state == SessionState.ANONYMOUS
        assert store.get() is None

        restored = await sessions.restore()
        assert restored.state == SessionState.ANONYMOUS
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_sign_out_survives_server_failure(self, store, backend):
        backend.on("POST", "/logout", status=500, json={"error": "boom"})
        gateway_api = HealthcareApi(
            _gateway_for(store, backend),
            logout_path="/logout",
        )
        sessions = SessionManager(store, gateway_api)
        await sessions.sign_in(_doctor(), "T1")

        snapshot = await sessions.sign_out()

        assert snapshot.state == SessionState.ANONYMOUS
        assert store.get() is None
        assert backend.last.url.path == "/api/logout"
        assert backend.last.headers["Authorization"] == "Bearer T1"

    @pytest.mark.asyncio
    async def test_sign_out_when_anonymous(self, sessions, backend):
        snapshot = await sessions.sign_out()

        assert snapshot.state == SessionState.ANONYMOUS
        assert backend.requests == []


class TestOrdering:
    """Sign-in/out queue behind a pending restore."""

    @pytest.mark.asyncio
    async def test_sign_in_during_restore_is_not_clobbered(self, store, api):
        store.set("T-old")
        release = asyncio.Event()

        class SlowRejectingApi:
            async def verify_token(self):
                await release.wait()
                return await api.verify_token()

            async def invalidate_session(self):
                return await api.invalidate_session()

        sessions = SessionManager(store, SlowRejectingApi())

        restore = asyncio.ensure_future(sessions.restore())
        await asyncio.sleep(0)
        sign_in = asyncio.ensure_future(sessions.sign_in(_doctor(), "T-new"))
        await asyncio.sleep(0)

        assert sessions.is_restoring
        assert store.get() == "T-old"

        # /verify-token is unrouted, so the old credential is rejected
        release.set()
        await restore
        await sign_in

        assert store.get() == "T-new"
        assert sessions.state == SessionState.AUTHENTICATED
        assert sessions.current_user == _doctor()

    @pytest.mark.asyncio
    async def test_sign_out_during_restore_waits(self, store, api, backend, doctor_profile):
        store.set("T1")
        backend.on("GET", "/verify-token", json={"valid": True, "user": doctor_profile})
        release = asyncio.Event()
        cleared_while_restoring = []

        class SlowAcceptingApi:
            async def verify_token(self):
                await release.wait()
                cleared_while_restoring.append(store.get() is None)
                return await api.verify_token()

            async def invalidate_session(self):
                return await api.invalidate_session()

        sessions = SessionManager(store, SlowAcceptingApi())

        restore = asyncio.ensure_future(sessions.restore())
        await asyncio.sleep(0)
        sign_out = asyncio.ensure_future(sessions.sign_out())
        await asyncio.sleep(0)

        assert sessions.is_restoring
        assert store.get() == "T1"

        release.set()
        restored = await restore
        await sign_out

        assert cleared_while_restoring == [False]
        assert restored.state == SessionState.AUTHENTICATED
        assert store.get() is None
        assert sessions.state == SessionState.ANONYMOUS
        assert sessions.current_user is None

    @pytest.mark.asyncio
    async def test_restore_survives_cancelled_caller(self, store, api, backend, doctor_profile):
        store.set("T1")
        backend.on("GET", "/verify-token", json={"valid": True, "user": doctor_profile})
        release = asyncio.Event()

        class SlowAcceptingApi:
            async def verify_token(self):
                await release.wait()
                return await api.verify_token()

        sessions = SessionManager(store, SlowAcceptingApi())

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(sessions.restore(), 0.05)

        assert sessions.is_restoring
        release.set()
        snapshot = await sessions.restore()

        assert snapshot.state == SessionState.AUTHENTICATED
        assert store.get() == "T1"


class TestListeners:
    """State change notifications."""

    @pytest.mark.asyncio
    async def test_listener_sees_transitions(self, sessions):
        seen = []
        unsubscribe = sessions.subscribe(lambda snapshot: seen.append(snapshot.state))

        await sessions.restore()
        await sessions.sign_in(_doctor(), "T1")
        unsubscribe()
        await sessions.sign_out()

        assert seen == [
            SessionState.RESTORING,
            SessionState.ANONYMOUS,
            SessionState.AUTHENTICATED,
        ]

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_break_transition(self, sessions):
        def broken(snapshot):
            raise RuntimeError("ui crashed")

        sessions.subscribe(broken)

        snapshot = await sessions.sign_in(_doctor(), "T1")

        assert snapshot.state == SessionState.AUTHENTICATED
