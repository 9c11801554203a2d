"""Recognition of encrypted variable values."""

# Prefix the encryption collaborator puts in front of ciphertext.
ENCRYPTED_PREFIX = "encrypted:"


def is_marked_encrypted(value: str) -> bool:
    """Return True if ``value`` carries the encrypted-value prefix."""
    return value.startswith(ENCRYPTED_PREFIX)
