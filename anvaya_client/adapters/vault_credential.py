"""
HashiCorp Vault Credential Store - Encrypted storage on managed workstations.
"""

import logging
from typing import Optional
from anvaya_client.ports.credential_port import CredentialStorePort

logger = logging.getLogger(__name__)


class VaultCredentialStore(CredentialStorePort):
    """
    HashiCorp Vault credential store.

    Uses KV Secrets Engine v2; the credential is one secret at
    <path_prefix>/<key>. Vault errors are logged and swallowed.
    Requires: pip install hvac
    """

    def __init__(
        self,
        url: str = "http://localhost:8200",
        token: Optional[str] = None,
        mount_point: str = "secret",
        path_prefix: str = "anvaya",
        key: str = "userToken",
        client=None,
    ):
        """
        Initialize Vault store.

        Args:
            url: Vault server URL
            token: Vault token (or use VAULT_TOKEN env var)
            mount_point: KV mount point (default: secret)
            path_prefix: Path prefix for secrets (default: anvaya)
            key: Entry name for the credential
            client: Pre-built hvac.Client (skips construction)
        """
        if client is None:
            try:
                import hvac
            except ImportError:
                raise ImportError("hvac package required: pip install hvac")
            client = hvac.Client(url=url, token=token)

        self._client = client
        self._mount_point = mount_point
        self._path = f"{path_prefix}/{key}"

    def get(self) -> Optional[str]:
        try:
            response = self._client.secrets.kv.v2.read_secret_version(
                path=self._path,
                mount_point=self._mount_point,
            )
            return response["data"]["data"].get("value")
        except Exception as e:
            logger.warning("Error retrieving credential from Vault: %s", e)
            return None

    def set(self, credential: str) -> None:
        try:
            self._client.secrets.kv.v2.create_or_update_secret(
                path=self._path,
                secret={"value": credential},
                mount_point=self._mount_point,
            )
        except Exception as e:
            logger.warning("Error storing credential in Vault: %s", e)

    def clear(self) -> None:
        try:
            self._client.secrets.kv.v2.delete_metadata_and_all_versions(
                path=self._path,
                mount_point=self._mount_point,
            )
        except Exception as e:
            logger.warning("Error removing credential from Vault: %s", e)
