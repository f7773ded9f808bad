"""
Unit tests for SymmetricCipher.

Tests verify:
- JSON values survive encrypt/decrypt
- Key normalization (zero-pad / truncate to 32 bytes)
- Fixed vs random IV behaviour
- Failures are wrapped in EncryptionError / DecryptionError
"""

import pytest

from src.domain.cipher import EncryptedBlob, SymmetricCipher, normalize_key
from src.domain.exceptions import CryptoError, DecryptionError, EncryptionError

IV_SOURCE = "0123456789abcdef-ignored-tail"
KEY = "cipher-test-key"


@pytest.fixture
def cipher() -> SymmetricCipher:
    return SymmetricCipher(IV_SOURCE)


class TestRoundTrip:
    """Tests for decrypt(encrypt(v, k), k) == v."""

    @pytest.mark.parametrize(
        "value",
        [
            "secret",
            "",
            123456,
            0,
            3.5,
            True,
            None,
            [1, "two", None],
            {"fname": "Jane", "nested": {"a": [1, 2]}},
            "unicode: żółć ✓",
        ],
    )
    def test_value_survives_round_trip(self, cipher: SymmetricCipher, value: object) -> None:
        """Any JSON value decrypts back to itself."""
        assert cipher.decrypt(cipher.encrypt(value, KEY), KEY) == value

    def test_blob_dict_round_trip(self, cipher: SymmetricCipher) -> None:
        """Hex dict form rebuilds an equal blob."""
        blob = cipher.encrypt({"a": 1}, KEY)
        assert EncryptedBlob.from_dict(blob.to_dict()) == blob

    def test_blob_dict_is_hex(self, cipher: SymmetricCipher) -> None:
        """Blob dict carries hex strings for iv and cipher_text."""
        data = cipher.encrypt("x", KEY).to_dict()
        assert set(data) == {"iv", "cipher_text"}
        bytes.fromhex(data["iv"])
        bytes.fromhex(data["cipher_text"])


class TestKeyNormalization:
    """Tests for the 32-byte key derivation."""

    def test_short_key_is_zero_padded(self) -> None:
        """Keys under 32 bytes are right-padded with zero bytes."""
        assert normalize_key("abc") == b"abc" + b"\x00" * 29

    def test_long_key_is_truncated(self) -> None:
        """Keys over 32 bytes keep their first 32 bytes."""
        key = "k" * 32 + "extra"
        assert normalize_key(key) == b"k" * 32

    def test_exact_key_unchanged(self) -> None:
        assert normalize_key("x" * 32) == b"x" * 32

    def test_short_key_equals_explicit_zero_padding(self, cipher: SymmetricCipher) -> None:
        """A short key and the same key zero-padded to 32 bytes encrypt identically."""
        padded = "short" + "\x00" * 27
        assert cipher.encrypt("v", "short") == cipher.encrypt("v", padded)

    def test_short_key_differs_from_left_padded_key(self, cipher: SymmetricCipher) -> None:
        """Left-padding with another character yields a different key."""
        left_padded = "0" * 27 + "short"
        assert cipher.encrypt("v", "short") != cipher.encrypt("v", left_padded)

    def test_truncated_tail_is_ignored(self, cipher: SymmetricCipher) -> None:
        """Bytes past 32 do not influence the ciphertext."""
        base = "a" * 32
        blob = cipher.encrypt("v", base + "one")
        assert cipher.decrypt(blob, base + "two") == "v"

    def test_empty_key_is_accepted(self, cipher: SymmetricCipher) -> None:
        """An empty key is padded, not rejected."""
        assert cipher.decrypt(cipher.encrypt("v", ""), "") == "v"


class TestInitializationVector:
    """Tests for fixed and random IV modes."""

    def test_fixed_iv_is_first_16_bytes_of_source(self, cipher: SymmetricCipher) -> None:
        assert cipher.encrypt("v", KEY).iv == b"0123456789abcdef"

    def test_fixed_iv_is_deterministic(self, cipher: SymmetricCipher) -> None:
        """Same plaintext and key give the same ciphertext under the fixed IV."""
        assert cipher.encrypt("same", KEY) == cipher.encrypt("same", KEY)

    def test_random_iv_varies(self) -> None:
        cipher = SymmetricCipher(IV_SOURCE, random_iv=True)
        first = cipher.encrypt("same", KEY)
        second = cipher.encrypt("same", KEY)
        assert first.iv != second.iv
        assert first.cipher_text != second.cipher_text
        assert len(first.iv) == 16

    def test_modes_decrypt_each_other(self) -> None:
        """The IV travels in the blob, so either mode decrypts the other's output."""
        fixed = SymmetricCipher(IV_SOURCE)
        random_ = SymmetricCipher(IV_SOURCE, random_iv=True)
        assert fixed.decrypt(random_.encrypt("x", KEY), KEY) == "x"
        assert random_.decrypt(fixed.encrypt("y", KEY), KEY) == "y"


class TestFailures:
    """Tests for error wrapping."""

    def test_short_iv_source_raises_encryption_error(self) -> None:
        """An IV source under 16 bytes cannot form an IV."""
        cipher = SymmetricCipher("too-short")
        with pytest.raises(EncryptionError):
            cipher.encrypt("v", KEY)

    def test_unserializable_value_raises_encryption_error(self, cipher: SymmetricCipher) -> None:
        with pytest.raises(EncryptionError):
            cipher.encrypt({1, 2, 3}, KEY)

    def test_corrupt_ciphertext_raises_decryption_error(self, cipher: SymmetricCipher) -> None:
        blob = cipher.encrypt("v", KEY)
        corrupt = EncryptedBlob(iv=blob.iv, cipher_text=blob.cipher_text[:-3])
        with pytest.raises(DecryptionError):
            cipher.decrypt(corrupt, KEY)

    def test_wrong_key_raises_decryption_error(self, cipher: SymmetricCipher) -> None:
        blob = cipher.encrypt({"password": "secret"}, KEY)
        with pytest.raises(DecryptionError):
            cipher.decrypt(blob, "a-completely-different-key")

    def test_malformed_blob_dict_raises_decryption_error(self) -> None:
        with pytest.raises(DecryptionError):
            EncryptedBlob.from_dict({"iv": "not-hex", "cipher_text": "00"})
        with pytest.raises(DecryptionError):
            EncryptedBlob.from_dict({"iv": "00"})

    def test_errors_are_crypto_errors(self) -> None:
        assert issubclass(EncryptionError, CryptoError)
        assert issubclass(DecryptionError, CryptoError)

    def test_error_carries_original_message(self) -> None:
        cipher = SymmetricCipher("too-short")
        with pytest.raises(EncryptionError) as exc_info:
            cipher.encrypt("v", KEY)
        assert exc_info.value.__cause__ is not None
        assert str(exc_info.value.__cause__) in str(exc_info.value)
