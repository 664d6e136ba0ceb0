"""
Encryption of identity payloads.

The router decrypts ``AppIdentity`` with a shared 32-character key using
AES-256 in ECB mode with PKCS7 padding and expects base64 text. Any
object with a matching ``encrypt`` method can stand in for
AesEcbEncryptor, which is how tests swap in a deterministic fake.
"""

import base64
from typing import Protocol

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from luis_router.exceptions import RouterConfigurationError

KEY_LENGTH = 32


class Encryptor(Protocol):
    """Encrypt(plaintext, key) -> ciphertext capability."""

    def encrypt(self, plaintext: str, key: str) -> str:
        ...


def check_key(key: str) -> None:
    """
    Reject a key AES-256 cannot use.

    Raises:
        RouterConfigurationError: key is not exactly 32 characters
    """
    if len(key) != KEY_LENGTH:
        raise RouterConfigurationError(
            f"Encryption key must be {KEY_LENGTH} characters",
            details={"key_length": len(key)},
        )


class AesEcbEncryptor:
    """
    AES-256/ECB/PKCS7 with base64 output.

    Only encrypt() is used at runtime; decrypt() exists for tests and
    diagnostics that need to read back an ``AppIdentity`` payload.
    """

    def encrypt(self, plaintext: str, key: str) -> str:
        """
        Encrypt ``plaintext`` with ``key``.

        Raises:
            RouterConfigurationError: key is not exactly 32 characters
        """
        check_key(key)
        key_bytes = key.encode("utf-8").ljust(KEY_LENGTH)[:KEY_LENGTH]
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(key_bytes), modes.ECB()).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(ciphertext).decode("ascii")

    def decrypt(self, ciphertext: str, key: str) -> str:
        """Inverse of encrypt(); not called by the client itself."""
        key_bytes = key.encode("utf-8").ljust(KEY_LENGTH)[:KEY_LENGTH]
        decryptor = Cipher(algorithms.AES(key_bytes), modes.ECB()).decryptor()
        padded = decryptor.update(base64.b64decode(ciphertext)) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")
