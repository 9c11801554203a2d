"""Boundary to the value encryption collaborator."""

from stand.crypto.decryption import (
    decrypt_value,
    decrypt_variables,
    resolve_private_key,
)
from stand.crypto.errors import CryptoError, DecryptionError, MissingPrivateKeyError
from stand.crypto.markers import ENCRYPTED_PREFIX, is_marked_encrypted
from stand.crypto.protocols import EncryptionProvider


__all__ = [
    "ENCRYPTED_PREFIX",
    "CryptoError",
    "DecryptionError",
    "EncryptionProvider",
    "MissingPrivateKeyError",
    "decrypt_value",
    "decrypt_variables",
    "is_marked_encrypted",
    "resolve_private_key",
]
