"""
Memory Credential Store - In-process credential storage (testing only).
"""

from typing import Optional
from anvaya_client.ports.credential_port import CredentialStorePort


class MemoryCredentialStore(CredentialStorePort):
    """
    In-memory credential storage.

    WARNING: Only for testing. The credential is lost on restart.
    """

    def __init__(self, credential: Optional[str] = None):
        """
        Initialize in-memory storage.

        Args:
            credential: Optional credential to start with
        """
        self._credential = credential
        self.writes = 0

    def get(self) -> Optional[str]:
        return self._credential

    def set(self, credential: str) -> None:
        self._credential = credential
        self.writes += 1

    def clear(self) -> None:
        self._credential = None
        self.writes += 1
