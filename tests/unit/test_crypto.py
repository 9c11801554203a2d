"""Unit tests for the decryption boundary."""

import pytest

from stand.crypto import (
    ENCRYPTED_PREFIX,
    DecryptionError,
    EncryptionProvider,
    MissingPrivateKeyError,
    decrypt_value,
    decrypt_variables,
    is_marked_encrypted,
    resolve_private_key,
)
from stand.settings.app import StandSettings


class ReversingProvider:
    """Test provider that 'encrypts' by reversing the text."""

    def encrypt(self, value: str, public_key: str) -> str:
        return ENCRYPTED_PREFIX + value[::-1]

    def decrypt(self, value: str, private_key: str) -> str:
        if private_key != "secret-key":
            msg = "wrong key"
            raise ValueError(msg)
        return value.removeprefix(ENCRYPTED_PREFIX)[::-1]


@pytest.fixture
def provider() -> ReversingProvider:
    return ReversingProvider()


class TestMarkers:
    """Tests for encrypted value markers."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("encrypted:abc", True),
            ("encrypted:", True),
            ("plain", False),
            ("not encrypted:abc", False),
            ("ENCRYPTED:abc", False),
        ],
    )
    def test_is_marked_encrypted(self, value: str, expected: bool) -> None:
        """Test prefix detection."""
        assert is_marked_encrypted(value) is expected

    @pytest.mark.unit
    def test_provider_satisfies_protocol(self, provider: ReversingProvider) -> None:
        """Test structural typing of providers."""
        assert isinstance(provider, EncryptionProvider)


class TestDecryptValue:
    """Tests for decrypt_value function."""

    @pytest.mark.unit
    def test_plain_value_passes_through(self, provider: ReversingProvider) -> None:
        """Test unmarked values need no key."""
        assert decrypt_value("A", "plain", provider, None) == "plain"

    @pytest.mark.unit
    def test_decrypts_marked_value(self, provider: ReversingProvider) -> None:
        """Test marked values go through the provider."""
        encrypted = provider.encrypt("hunter2", "public-key")
        assert decrypt_value("PASSWORD", encrypted, provider, "secret-key") == "hunter2"

    @pytest.mark.unit
    def test_missing_key(self, provider: ReversingProvider) -> None:
        """Test a marked value without a key fails."""
        with pytest.raises(MissingPrivateKeyError):
            decrypt_value("PASSWORD", "encrypted:x", provider, None)

    @pytest.mark.unit
    def test_provider_failure_wrapped(self, provider: ReversingProvider) -> None:
        """Test provider errors name the variable."""
        with pytest.raises(DecryptionError) as exc_info:
            decrypt_value("PASSWORD", "encrypted:x", provider, "wrong")
        assert exc_info.value.variable == "PASSWORD"
        assert isinstance(exc_info.value.cause, ValueError)


class TestDecryptVariables:
    """Tests for decrypt_variables function."""

    @pytest.mark.unit
    def test_mixed_mapping(self, provider: ReversingProvider) -> None:
        """Test only marked values change and order is kept."""
        variables = {
            "HOST": "db.local",
            "PASSWORD": provider.encrypt("hunter2", "public-key"),
            "PORT": "5432",
        }
        result = decrypt_variables(variables, provider, "secret-key")
        assert list(result.items()) == [
            ("HOST", "db.local"),
            ("PASSWORD", "hunter2"),
            ("PORT", "5432"),
        ]

    @pytest.mark.unit
    def test_nothing_encrypted_needs_no_key(self, provider: ReversingProvider) -> None:
        """Test a plain mapping is copied without a key."""
        variables = {"A": "1"}
        result = decrypt_variables(variables, provider, None)
        assert result == variables
        assert result is not variables


class TestResolvePrivateKey:
    """Tests for resolve_private_key function."""

    @pytest.mark.unit
    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the key is read from STAND_PRIVATE_KEY."""
        monkeypatch.setenv("STAND_PRIVATE_KEY", "secret-key")
        assert resolve_private_key(StandSettings()) == "secret-key"

    @pytest.mark.unit
    def test_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test no key yields None."""
        monkeypatch.delenv("STAND_PRIVATE_KEY", raising=False)
        assert resolve_private_key(StandSettings()) is None
