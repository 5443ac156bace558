"""Encrypted on-disk storage for the single Google Ads credentials record.

The record lives in one file at a fixed path. Every failure (I/O, cipher,
parse) is logged and reported as ``False``/``None`` so callers can treat a
broken file the same as a missing one: "not configured".
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ConfigDict
from pydantic import ValidationError as PydanticValidationError

from src.core.encryption import EncryptionError, decrypt_data, encrypt_data
from src.domain.credentials import Credentials

logger = logging.getLogger(__name__)


class _StoredCredentials(Credentials):
    """On-disk record shape. Every required field must be present and no others."""

    model_config = ConfigDict(extra="forbid")

    client_id: str
    client_secret: str
    developer_token: str
    refresh_token: str


class CorruptRecordError(ValueError):
    """Decrypted record parsed but is not a complete credentials record."""


class CredentialStore:
    """Persists one ``Credentials`` record, AES-256-CBC encrypted at rest.

    Args:
        path: File the encrypted record is written to
        key: 32-byte encryption key (str or bytes)
    """

    def __init__(self, path: Union[str, Path], key: Union[str, bytes]):
        self.path = Path(path)
        self._key = key

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, credentials: Credentials) -> bool:
        """Encrypt and write *credentials*, replacing any existing record.

        Returns:
            True on success; False if required fields are missing or the
            write fails.
        """
        missing = credentials.missing_fields()
        if missing:
            logger.warning(
                "Refusing to save incomplete credentials",
                extra={"missing_fields": missing},
            )
            return False

        try:
            payload = json.dumps(credentials.to_wire())
            encrypted = encrypt_data(payload, self._key)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(encrypted, encoding="utf-8")
            os.chmod(self.path, 0o600)
        except (OSError, EncryptionError) as exc:
            logger.error(
                "Failed to save credentials",
                extra={"path": str(self.path), "error_type": type(exc).__name__},
            )
            return False

        logger.info("Credentials saved", extra={"path": str(self.path)})
        return True

    def load(self) -> Optional[Credentials]:
        """Read and decrypt the stored record.

        Returns:
            The stored credentials, or None when the file is absent or cannot
            be read, decrypted or parsed.
        """
        if not self.exists():
            return None

        try:
            encrypted = self.path.read_text(encoding="utf-8")
            plaintext = decrypt_data(encrypted, self._key)
            data = json.loads(plaintext)
            stored = _StoredCredentials.model_validate(data)
            if not stored.is_complete():
                raise CorruptRecordError("Stored record has blank required fields")
            return Credentials.model_validate(stored.model_dump())
        except (OSError, EncryptionError, ValueError, PydanticValidationError) as exc:
            # CBC has no integrity check; tampering surfaces as a malformed record
            logger.warning(
                "Stored credentials could not be read; treating as not configured",
                extra={"path": str(self.path), "error_type": type(exc).__name__},
            )
            return None

    def clear(self) -> bool:
        """Delete the stored record. Succeeds when nothing is stored."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error(
                "Failed to delete credentials",
                extra={"path": str(self.path), "error_type": type(exc).__name__},
            )
            return False

        logger.info("Credentials cleared", extra={"path": str(self.path)})
        return True
