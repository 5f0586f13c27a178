"""
Credential Store Factory - Picks the storage backend for a runtime target.
"""

from anvaya_client.config import ClientConfig, RuntimeTarget
from anvaya_client.errors import ConfigurationError
from anvaya_client.ports.credential_port import CredentialStorePort
from anvaya_client.adapters.memory_credential import MemoryCredentialStore
from anvaya_client.adapters.file_credential import FileCredentialStore
from anvaya_client.adapters.encrypted_credential import EncryptedFileCredentialStore
from anvaya_client.adapters.vault_credential import VaultCredentialStore


def create_credential_store(config: ClientConfig) -> CredentialStorePort:
    """
    Build the credential store for config.runtime_target.

    Called once when the client is constructed; everything else depends
    only on CredentialStorePort.

    Raises:
        ConfigurationError: If the target has no backend
    """
    target = config.runtime_target

    if target is RuntimeTarget.WEB:
        return FileCredentialStore(config.storage_path, key=config.credential_key)

    if target is RuntimeTarget.NATIVE:
        return EncryptedFileCredentialStore(
            config.storage_path,
            key_path=config.key_path,
            encryption_key=config.encryption_key,
            key=config.credential_key,
        )

    if target is RuntimeTarget.VAULT:
        return VaultCredentialStore(
            url=config.vault_url,
            token=config.vault_token,
            mount_point=config.vault_mount_point,
            path_prefix=config.vault_path_prefix,
            key=config.credential_key,
        )

    if target is RuntimeTarget.MEMORY:
        return MemoryCredentialStore()

    raise ConfigurationError(f"No credential store for runtime target {target!r}")
