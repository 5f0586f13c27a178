"""
Encrypted File Credential Store - Durable encrypted storage for native targets.

Requires: pip install cryptography
"""

import logging
import os
from typing import Optional

from cryptography.fernet import Fernet

from anvaya_client.adapters.file_credential import FileCredentialStore
from anvaya_client.errors import ConfigurationError

logger = logging.getLogger(__name__)


class EncryptedFileCredentialStore(FileCredentialStore):
    """
    File store whose credential entry is Fernet-encrypted at rest.

    The key comes from the caller, or is generated once into key_path with
    owner-only permissions. A credential that fails to decrypt (rotated or
    lost key, tampered file) reads as absent.
    """

    def __init__(
        self,
        path: str,
        key_path: Optional[str] = None,
        encryption_key: Optional[str] = None,
        key: str = "userToken",
    ):
        """
        Initialize encrypted store.

        Args:
            path: JSON file path holding the encrypted entry
            key_path: File holding the Fernet key (used if encryption_key is None)
            encryption_key: urlsafe base64 Fernet key
            key: Entry name for the credential

        Raises:
            ConfigurationError: If neither key source is given, or the key is malformed
        """
        super().__init__(path, key=key)
        self._key_path = os.path.expanduser(key_path) if key_path else None
        self._cipher: Optional[Fernet] = None

        if encryption_key:
            try:
                self._cipher = Fernet(encryption_key)
            except (ValueError, TypeError) as e:
                raise ConfigurationError(f"malformed encryption key: {e}") from e
        elif not self._key_path:
            raise ConfigurationError("encryption_key or key_path is required")

    def _get_cipher(self) -> Fernet:
        """Lazy load (or create) the key file."""
        if self._cipher is None:
            if os.path.exists(self._key_path):
                with open(self._key_path, "rb") as fh:
                    secret = fh.read().strip()
            else:
                secret = Fernet.generate_key()
                directory = os.path.dirname(self._key_path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                fd = os.open(self._key_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
                with os.fdopen(fd, "wb") as fh:
                    fh.write(secret)
                logger.info("Generated credential encryption key at %s", self._key_path)
            self._cipher = Fernet(secret)
        return self._cipher

    def _encode(self, credential: str) -> str:
        return self._get_cipher().encrypt(credential.encode("utf-8")).decode("ascii")

    def _decode(self, stored: str) -> str:
        # InvalidToken propagates to get(), which logs it and reports absent
        return self._get_cipher().decrypt(stored.encode("ascii")).decode("utf-8")
