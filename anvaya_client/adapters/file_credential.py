"""
File Credential Store - Plain persistent key-value storage.

Used on browser-like targets, where the credential lives in an
unencrypted key-value store shared with other app settings.
"""

import json
import logging
import os
from typing import Optional, Dict, Any
from anvaya_client.ports.credential_port import CredentialStorePort

logger = logging.getLogger(__name__)


class FileCredentialStore(CredentialStorePort):
    """
    Credential stored under a fixed key in a JSON key-value file.

    Other keys in the file are left untouched. Read and write failures
    are logged and swallowed.
    """

    def __init__(self, path: str, key: str = "userToken"):
        """
        Initialize file-backed store.

        Args:
            path: JSON file path (~ is expanded, parent dirs are created on write)
            key: Entry name for the credential
        """
        self._path = os.path.expanduser(path)
        self._key = key

    @property
    def path(self) -> str:
        return self._path

    def _read_all(self) -> Dict[str, Any]:
        """Load the whole key-value file ({} if missing)."""
        if not os.path.exists(self._path):
            return {}
        with open(self._path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        """Atomically replace the key-value file."""
        directory = os.path.dirname(self._path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self._path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(data, fh)
        os.replace(tmp_path, self._path)

    def _encode(self, credential: str) -> str:
        return credential

    def _decode(self, stored: str) -> str:
        return stored

    def get(self) -> Optional[str]:
        try:
            stored = self._read_all().get(self._key)
            if stored is None:
                return None
            if not isinstance(stored, str):
                logger.warning("Ignoring non-string credential in %s", self._path)
                return None
            return self._decode(stored)
        except Exception as e:
            logger.warning("Error retrieving credential from %s: %s", self._path, e)
            return None

    def set(self, credential: str) -> None:
        try:
            data = self._read_all()
        except Exception as e:
            # Unreadable file: start over rather than lose the new credential
            logger.warning("Discarding unreadable store %s: %s", self._path, e)
            data = {}

        try:
            data[self._key] = self._encode(credential)
            self._write_all(data)
        except Exception as e:
            logger.warning("Error storing credential in %s: %s", self._path, e)

    def clear(self) -> None:
        try:
            data = self._read_all()
            if self._key not in data:
                return
            del data[self._key]
            self._write_all(data)
        except Exception as e:
            logger.warning("Error removing credential from %s: %s", self._path, e)
