"""Error types for decryption of marked values."""


class CryptoError(Exception):
    """Base exception for encryption boundary failures."""


class MissingPrivateKeyError(CryptoError):
    """Encrypted values are present but no private key was supplied."""

    def __init__(self) -> None:
        """Initialize the error."""
        super().__init__("No private key available for decryption")


class DecryptionError(CryptoError):
    """The provider failed to decrypt a variable."""

    def __init__(self, variable: str, cause: Exception) -> None:
        """Initialize the error.

        Args:
            variable: Name of the variable whose value failed to decrypt.
            cause: The provider's exception.
        """
        super().__init__(f"Failed to decrypt variable '{variable}': {cause}")
        self.variable = variable
        self.cause = cause
