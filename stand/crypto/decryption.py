"""Decryption of marked values through an injected provider."""

from collections.abc import Mapping

import structlog

from stand.crypto.errors import DecryptionError, MissingPrivateKeyError
from stand.crypto.markers import is_marked_encrypted
from stand.crypto.protocols import EncryptionProvider
from stand.settings.app import StandSettings


logger = structlog.get_logger()


def resolve_private_key(settings: StandSettings) -> str | None:
    """Return the private key configured through ``STAND_PRIVATE_KEY``."""
    if settings.private_key is None:
        return None
    return settings.private_key.get_secret_value()


def decrypt_value(
    name: str,
    value: str,
    provider: EncryptionProvider,
    private_key: str | None,
) -> str:
    """Decrypt a single value if it is marked, else return it unchanged.

    Args:
        name: Variable name, used for error reporting.
        value: Possibly encrypted value.
        provider: Encryption collaborator.
        private_key: Key used for decryption.

    Returns:
        Plaintext value.

    Raises:
        MissingPrivateKeyError: If the value is marked and no key is given.
        DecryptionError: If the provider fails.
    """
    if not is_marked_encrypted(value):
        return value
    if private_key is None:
        raise MissingPrivateKeyError
    try:
        return provider.decrypt(value, private_key)
    except Exception as e:
        raise DecryptionError(name, e) from e


def decrypt_variables(
    variables: Mapping[str, str],
    provider: EncryptionProvider,
    private_key: str | None,
) -> dict[str, str]:
    """Decrypt every marked value in a mapping.

    Args:
        variables: Resolved variables, some possibly encrypted.
        provider: Encryption collaborator.
        private_key: Key used for decryption; may be None when nothing is
            encrypted.

    Returns:
        A new mapping in the same key order with plaintext values.

    Raises:
        MissingPrivateKeyError: If marked values exist and no key is given.
        DecryptionError: If the provider fails for any variable.
    """
    encrypted = [
        name for name, value in variables.items() if is_marked_encrypted(value)
    ]
    if not encrypted:
        return dict(variables)

    logger.debug("decrypting_variables", component="crypto", variables=encrypted)
    return {
        name: decrypt_value(name, value, provider, private_key)
        for name, value in variables.items()
    }
