"""
Adapters - Implementations of ports.

Credential Storage:
- MemoryCredentialStore: In-process storage (testing)
- FileCredentialStore: Plain key-value file (browser-like targets)
- EncryptedFileCredentialStore: Fernet-encrypted file (native targets)
- VaultCredentialStore: HashiCorp Vault (managed workstations)

Area Gating:
- decide / can_enter: Role gate decisions
"""

# Credential Storage
from anvaya_client.adapters.memory_credential import MemoryCredentialStore
from anvaya_client.adapters.file_credential import FileCredentialStore
from anvaya_client.adapters.encrypted_credential import EncryptedFileCredentialStore
from anvaya_client.adapters.vault_credential import VaultCredentialStore
from anvaya_client.adapters.factory import create_credential_store

# Area Gating
from anvaya_client.adapters.role_gate import decide, can_enter, area_for_role, ROLE_AREAS

__all__ = [
    # Credential Storage
    "MemoryCredentialStore",
    "FileCredentialStore",
    "EncryptedFileCredentialStore",
    "VaultCredentialStore",
    "create_credential_store",
    # Area Gating
    "decide",
    "can_enter",
    "area_for_role",
    "ROLE_AREAS",
]
