"""
Credential Store Port - Interface for persisting the session credential.

Implementations:
- MemoryCredentialStore: In-process storage (testing only)
- FileCredentialStore: Plain key-value file (browser-like targets)
- EncryptedFileCredentialStore: Fernet-encrypted file (native targets)
- VaultCredentialStore: HashiCorp Vault (managed workstations)
"""

from abc import ABC, abstractmethod
from typing import Optional


class CredentialStorePort(ABC):
    """
    Port: Hold exactly one opaque session credential.

    Adapters never raise. A storage failure is logged and treated as
    "absent" on read and as a completed no-op on write, so that a broken
    store degrades to "logged out".
    """

    @abstractmethod
    def get(self) -> Optional[str]:
        """
        Read the stored credential.

        Returns:
            The credential, or None if absent or unreadable
        """
        pass

    @abstractmethod
    def set(self, credential: str) -> None:
        """
        Persist a credential, replacing any previous one.

        Args:
            credential: Opaque token string
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored credential (no-op if absent)."""
        pass
