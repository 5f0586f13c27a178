"""
Client Configuration - Settings for the session and gateway layer.

Values come from constructor arguments or ANVAYA_* environment variables.
"""

import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from anvaya_client.errors import ConfigurationError


DEFAULT_BASE_URL = "https://healthcare-backend-dev.vercel.app"
DEFAULT_CREDENTIAL_KEY = "userToken"


class RuntimeTarget(Enum):
    """Where the client runs; decides the credential storage backend."""
    WEB = "web"          # browser-like: plain persistent key-value store
    NATIVE = "native"    # sandboxed native: encrypted durable storage
    VAULT = "vault"      # managed workstation: HashiCorp Vault
    MEMORY = "memory"    # tests and throwaway processes


class ClientConfig(BaseModel):
    """Validated client settings."""

    # Remote service
    base_url: str = Field(default=DEFAULT_BASE_URL, min_length=1)
    api_prefix: str = Field(default="/api")
    timeout: float = Field(default=30.0, gt=0)
    logout_path: Optional[str] = None  # server-side invalidation, if the backend has one

    # Credential storage
    runtime_target: RuntimeTarget = RuntimeTarget.NATIVE
    credential_key: str = Field(default=DEFAULT_CREDENTIAL_KEY, min_length=1)
    storage_path: str = Field(default="~/.anvaya/storage.json")
    key_path: str = Field(default="~/.anvaya/storage.key")
    encryption_key: Optional[str] = None

    # Vault (runtime_target=vault)
    vault_url: str = Field(default="http://localhost:8200")
    vault_token: Optional[str] = None
    vault_mount_point: str = Field(default="secret")
    vault_path_prefix: str = Field(default="anvaya")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        v = v.strip().strip("/")
        return f"/{v}" if v else ""

    @property
    def api_base_url(self) -> str:
        """Base URL including the API prefix."""
        return f"{self.base_url}{self.api_prefix}"


def load_config(**overrides) -> ClientConfig:
    """
    Build a ClientConfig from the environment.

    Args:
        **overrides: Explicit values that win over environment variables

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If any value fails validation
    """
    env = os.getenv
    values = {
        "base_url": env("ANVAYA_BASE_URL", DEFAULT_BASE_URL),
        "api_prefix": env("ANVAYA_API_PREFIX", "/api"),
        "timeout": env("ANVAYA_TIMEOUT", "30"),
        "logout_path": env("ANVAYA_LOGOUT_PATH") or None,
        "runtime_target": env("ANVAYA_RUNTIME_TARGET", RuntimeTarget.NATIVE.value),
        "credential_key": env("ANVAYA_CREDENTIAL_KEY", DEFAULT_CREDENTIAL_KEY),
        "storage_path": env("ANVAYA_STORAGE_PATH", "~/.anvaya/storage.json"),
        "key_path": env("ANVAYA_KEY_PATH", "~/.anvaya/storage.key"),
        "encryption_key": env("ANVAYA_ENCRYPTION_KEY") or None,
        "vault_url": env("ANVAYA_VAULT_URL", env("VAULT_ADDR", "http://localhost:8200")),
        "vault_token": env("ANVAYA_VAULT_TOKEN", env("VAULT_TOKEN")) or None,
    }
    values.update(overrides)

    try:
        return ClientConfig(**values)
    except ValidationError as ve:
        raise ConfigurationError(f"invalid client configuration: {ve}") from ve
