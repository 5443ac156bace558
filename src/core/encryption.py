"""AES-256-CBC symmetric encryption for the stored API credentials.

Uses the ``cryptography`` library with PKCS7 padding and a fresh random
16-byte IV per call. Ciphertext is serialized as ``"<iv-hex>:<ciphertext-hex>"``
so it can be written to a plain text file. The 32-byte key comes from
configuration (``ENCRYPTION_KEY``) and is passed in explicitly by the caller.
"""

import logging
import os
from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

logger = logging.getLogger(__name__)

KEY_LENGTH = 32
IV_LENGTH = 16
_BLOCK_BITS = algorithms.AES.block_size


class EncryptionError(Exception):
    """Raised when a key is unusable or ciphertext cannot be decrypted."""

    pass


@dataclass(frozen=True)
class EncryptedBlob:
    """An initialization vector plus the ciphertext it was used for."""

    iv: bytes
    ciphertext: bytes

    def serialize(self) -> str:
        return f"{self.iv.hex()}:{self.ciphertext.hex()}"

    @classmethod
    def parse(cls, text: str) -> "EncryptedBlob":
        """Parse the ``iv:ciphertext`` hex form.

        Raises:
            EncryptionError: If the text is not two hex fields or the IV has
                the wrong length.
        """
        iv_hex, sep, ct_hex = text.strip().partition(":")
        if not sep:
            raise EncryptionError("Encrypted data is missing the IV separator")
        try:
            iv = bytes.fromhex(iv_hex)
            ciphertext = bytes.fromhex(ct_hex)
        except ValueError as exc:
            raise EncryptionError("Encrypted data is not valid hex") from exc
        if len(iv) != IV_LENGTH:
            raise EncryptionError(f"IV must be {IV_LENGTH} bytes, got {len(iv)}")
        if not ciphertext or len(ciphertext) % (_BLOCK_BITS // 8):
            raise EncryptionError("Ciphertext length is not a multiple of the block size")
        return cls(iv=iv, ciphertext=ciphertext)


def coerce_key(key: Union[str, bytes]) -> bytes:
    """Return *key* as bytes, checking it is exactly 32 bytes long."""
    raw = key.encode("utf-8") if isinstance(key, str) else key
    if len(raw) != KEY_LENGTH:
        raise EncryptionError(f"Encryption key must be {KEY_LENGTH} bytes, got {len(raw)}")
    return raw


def encrypt_data(plaintext: str, key: Union[str, bytes]) -> str:
    """Encrypt *plaintext* and return the serialized ``iv:ciphertext`` string."""
    raw_key = coerce_key(key)
    iv = os.urandom(IV_LENGTH)

    padder = padding.PKCS7(_BLOCK_BITS).padder()
    padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

    encryptor = Cipher(algorithms.AES(raw_key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return EncryptedBlob(iv=iv, ciphertext=ciphertext).serialize()


def decrypt_data(data: str, key: Union[str, bytes]) -> str:
    """Decrypt a serialized ``iv:ciphertext`` string and return the plaintext.

    Raises:
        EncryptionError: If the key does not match or data is corrupt.
    """
    raw_key = coerce_key(key)
    blob = EncryptedBlob.parse(data)

    decryptor = Cipher(algorithms.AES(raw_key), modes.CBC(blob.iv)).decryptor()
    padded = decryptor.update(blob.ciphertext) + decryptor.finalize()

    unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
    try:
        plaintext = unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        # Wrong key or tampered ciphertext shows up as bad padding
        raise EncryptionError("Decryption failed: invalid padding") from exc

    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncryptionError("Decryption failed: plaintext is not UTF-8") from exc
