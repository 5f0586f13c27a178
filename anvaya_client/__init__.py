"""
Anvaya Client - Session & API Gateway Layer

Hexagonal architecture for the Anvaya healthcare app: a pluggable
credential store, a request gateway that normalizes every call into an
ApiResult, a session manager that owns sign-in state, and a role gate.

Usage:
    from anvaya_client import AnvayaClient, load_config

    client = AnvayaClient(load_config(runtime_target="web"))

    # Restore the previous session
    await client.start()

    # Log in
    result = await client.login("doctor@example.com", "secret")
    if not result.success:
        print(result.message)

    # Where may this user go?
    decision = client.gate()
"""

__version__ = "0.1.0"

from anvaya_client.sdk.client import AnvayaClient
from anvaya_client.config import ClientConfig, RuntimeTarget, load_config
from anvaya_client.domain.user import User, UserRole
from anvaya_client.domain.result import ApiResult
from anvaya_client.domain.session import SessionState, SessionSnapshot
from anvaya_client.errors import ConfigurationError

__all__ = [
    "AnvayaClient",
    "ClientConfig",
    "RuntimeTarget",
    "load_config",
    "User",
    "UserRole",
    "ApiResult",
    "SessionState",
    "SessionSnapshot",
    "ConfigurationError",
]
