"""
Anvaya Client - High-level SDK wiring storage, gateway, API and session.

Simplifies the common application workflows: restore at startup, log in,
log out, and ask the role gate where to go.
"""

import logging
from typing import Mapping, Optional

import httpx

from anvaya_client.adapters.factory import create_credential_store
from anvaya_client.adapters.role_gate import can_enter, decide
from anvaya_client.config import ClientConfig, load_config
from anvaya_client.domain.records import LoginCredentials
from anvaya_client.domain.result import ApiResult
from anvaya_client.domain.session import SessionSnapshot
from anvaya_client.domain.user import User
from anvaya_client.ports.credential_port import CredentialStorePort
from anvaya_client.ports.gate_port import AppArea, GateDecision
from anvaya_client.sdk.api import HealthcareApi
from anvaya_client.sdk.gateway import RequestGateway
from anvaya_client.sdk.session_manager import SessionManager

logger = logging.getLogger(__name__)


class AnvayaClient:
    """
    High-level client combining credential storage, API access and sessions.

    Example:
        from anvaya_client import AnvayaClient

        async with AnvayaClient() as client:
            await client.start()
            if client.sessions.current_user is None:
                result = await client.login("a@b.com", "secret")
            decision = client.gate()
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        credentials: Optional[CredentialStorePort] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize client with adapters.

        Args:
            config: Client settings (default: load_config() from the environment)
            credentials: Credential store (default: chosen by config.runtime_target)
            transport: HTTP transport override (e.g. httpx.MockTransport in tests)
        """
        self.config = config or load_config()
        self.credentials = credentials or create_credential_store(self.config)
        self.gateway = RequestGateway.from_config(self.config, self.credentials, transport=transport)
        self.api = HealthcareApi(self.gateway, logout_path=self.config.logout_path)
        self.sessions = SessionManager(self.credentials, self.api)

    async def start(self) -> SessionSnapshot:
        """Restore the previous session (call once at application startup)."""
        return await self.sessions.restore()

    async def login(self, email: str, password: str) -> ApiResult:
        """
        Log in: exchange credentials, then sign in with the returned token.

        Args:
            email: Account email (or phone number, as the backend accepts)
            password: Account password

        Returns:
            The login ApiResult; a 2xx response without a token and a
            usable user profile is reported as a failure
        """
        result = await self.api.login(LoginCredentials(email=email, password=password))
        if not result.success:
            return result

        data = result.data if isinstance(result.data, Mapping) else {}
        token = data.get("token")
        profile = data.get("user")

        try:
            user = User.from_dict(dict(profile)) if isinstance(profile, Mapping) else None
        except (KeyError, TypeError, ValueError):
            user = None

        if not token or user is None:
            logger.warning("Login response missing token or user profile")
            return ApiResult.fail("Login response did not include a session")

        await self.sessions.sign_in(user, token)
        return result

    async def logout(self) -> SessionSnapshot:
        """Sign out locally (and on the server when configured)."""
        return await self.sessions.sign_out()

    def gate(self) -> GateDecision:
        """Where the current session may go."""
        return decide(self.sessions.snapshot)

    def can_enter(self, area: AppArea) -> GateDecision:
        """Whether the current session may enter a given area."""
        return can_enter(self.sessions.snapshot, area)

    async def aclose(self) -> None:
        await self.gateway.aclose()

    async def __aenter__(self) -> "AnvayaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
