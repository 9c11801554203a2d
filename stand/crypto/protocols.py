"""Protocol interface for value encryption providers."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EncryptionProvider(Protocol):
    """Protocol for the collaborator that owns ciphertext.

    The resolution engine never interprets ciphertext; it only hands marked
    values to a provider together with a caller-supplied key.
    """

    def encrypt(self, value: str, public_key: str) -> str:
        """Encrypt a plaintext value.

        Args:
            value: Plaintext to protect.
            public_key: Recipient public key.

        Returns:
            Ciphertext carrying the ``encrypted:`` prefix.
        """
        ...

    def decrypt(self, value: str, private_key: str) -> str:
        """Decrypt a marked value.

        Args:
            value: Ciphertext carrying the ``encrypted:`` prefix.
            private_key: Private key matching the recipient.

        Returns:
            The plaintext value.

        Raises:
            Exception: Any provider-specific failure.
        """
        ...
