"""
Symmetric cipher - AES-256-CBC over JSON-encoded payloads.

Any JSON-serializable value is encoded, PKCS7-padded and encrypted.
The result is an EncryptedBlob carrying the IV next to the ciphertext,
so decryption never depends on how the IV was chosen.

Key normalization
=================
The configured key string is UTF-8 encoded, then zero-padded to 32 bytes
or truncated to 32 bytes. A short key is never rejected; it is padded.
Tokens already in circulation depend on this exact derivation.

Initialization vector
=====================
By default the IV is the first 16 bytes of a process-wide configured
value, so equal plaintexts under one key produce equal ciphertexts.
With ``random_iv=True`` a fresh IV is drawn per call instead. Both modes
decrypt each other's blobs because the IV travels inside the blob.
"""

import json
import os
from dataclasses import dataclass
from typing import Any

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .exceptions import DecryptionError, EncryptionError

KEY_LENGTH = 32
IV_LENGTH = 16


@dataclass(frozen=True)
class EncryptedBlob:
    """Ciphertext plus the IV used to produce it."""

    iv: bytes
    cipher_text: bytes

    def to_dict(self) -> dict[str, str]:
        """Hex-encoded form, embeddable in a signed token."""
        return {"iv": self.iv.hex(), "cipher_text": self.cipher_text.hex()}

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "EncryptedBlob":
        """
        Rebuild a blob from its hex-encoded form.

        Raises:
            DecryptionError: If fields are missing or not valid hex
        """
        try:
            return cls(iv=bytes.fromhex(data["iv"]), cipher_text=bytes.fromhex(data["cipher_text"]))
        except (KeyError, TypeError, ValueError) as e:
            raise DecryptionError(f"Malformed encrypted blob: {e}") from e


def normalize_key(key: str) -> bytes:
    """Zero-pad or truncate the key to exactly 32 bytes."""
    key_bytes = key.encode("utf-8")
    if len(key_bytes) < KEY_LENGTH:
        return key_bytes.ljust(KEY_LENGTH, b"\x00")
    return key_bytes[:KEY_LENGTH]


class SymmetricCipher:
    """Encrypts and decrypts JSON values with AES-256-CBC."""

    def __init__(self, iv_source: str, random_iv: bool = False) -> None:
        """
        Initialize cipher.

        Args:
            iv_source: Configured value whose first 16 bytes form the fixed IV
            random_iv: Draw a fresh IV per call instead of the fixed one
        """
        self._fixed_iv = iv_source.encode("utf-8")[:IV_LENGTH]
        self._random_iv = random_iv

    def encrypt(self, value: Any, key: str) -> EncryptedBlob:
        """
        Encrypt a JSON-serializable value.

        Raises:
            EncryptionError: On serialization or cipher failure
        """
        try:
            iv = os.urandom(IV_LENGTH) if self._random_iv else self._fixed_iv
            plaintext = json.dumps(value, separators=(",", ":")).encode("utf-8")
            padder = padding.PKCS7(algorithms.AES.block_size).padder()
            padded = padder.update(plaintext) + padder.finalize()
            encryptor = Cipher(algorithms.AES(normalize_key(key)), modes.CBC(iv)).encryptor()
            cipher_text = encryptor.update(padded) + encryptor.finalize()
        except (TypeError, ValueError) as e:
            raise EncryptionError(f"Encryption failed: {e}") from e
        return EncryptedBlob(iv=iv, cipher_text=cipher_text)

    def decrypt(self, blob: EncryptedBlob, key: str) -> Any:
        """
        Decrypt a blob back into its JSON value.

        Raises:
            DecryptionError: On cipher, padding or JSON failure
        """
        try:
            decryptor = Cipher(algorithms.AES(normalize_key(key)), modes.CBC(blob.iv)).decryptor()
            padded = decryptor.update(blob.cipher_text) + decryptor.finalize()
            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            plaintext = unpadder.update(padded) + unpadder.finalize()
            return json.loads(plaintext.decode("utf-8"))
        except (TypeError, ValueError) as e:
            raise DecryptionError(f"Decryption failed: {e}") from e
