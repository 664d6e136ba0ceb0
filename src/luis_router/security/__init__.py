"""Encryption capability for identity payloads."""

from luis_router.security.cipher import AesEcbEncryptor, Encryptor, check_key

__all__ = ["AesEcbEncryptor", "Encryptor", "check_key"]
