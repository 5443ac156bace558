"""Core infrastructure: encryption and credential persistence."""

from src.core.credential_store import CredentialStore
from src.core.encryption import (
    EncryptedBlob,
    EncryptionError,
    coerce_key,
    decrypt_data,
    encrypt_data,
)

__all__ = [
    "CredentialStore",
    "EncryptedBlob",
    "EncryptionError",
    "coerce_key",
    "decrypt_data",
    "encrypt_data",
]
