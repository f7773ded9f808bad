"""
One-time code issuance and verification.

A signup produces two things travelling through different channels:
a signed token for the client and a numeric code for the inbox. Only
their reunification at verification time proves inbox possession.

Token claims
============
- ``payload``: arbitrary JSON (the pending registration)
- ``encrypted_code``: the code, AES-encrypted with the crypto secret
- ``iat`` / ``exp``: issue time and expiry (default 3 minutes)

Nothing server-side marks a token as used. Replay is bounded by expiry
and, for signups, by the duplicate-email check at account creation.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from .cipher import EncryptedBlob
from .exceptions import CodeMismatch, ConfigurationError, InvalidOrExpiredToken
from .toolkit import CryptoToolkit

logger = logging.getLogger(__name__)

MIN_CODE_LENGTH = 6
MAX_CODE_LENGTH = 10
DEFAULT_CODE_LENGTH = 6
DEFAULT_EXPIRES_IN = timedelta(minutes=3)


@dataclass(frozen=True)
class IssuedCode:
    """Signed token for the client and plaintext code for the inbox."""

    token: str
    code: int


@dataclass(frozen=True)
class VerifiedToken:
    """Payload of a token whose signature, expiry and code all checked out."""

    payload: Any
    ok: bool = True


def generate_code(length: int = DEFAULT_CODE_LENGTH) -> int:
    """
    Uniformly random integer in [10^(n-1), 10^n - 1].

    Raises:
        ConfigurationError: If length is outside [6, 10]
    """
    if not isinstance(length, int) or not MIN_CODE_LENGTH <= length <= MAX_CODE_LENGTH:
        raise ConfigurationError(
            f"Code length must be between {MIN_CODE_LENGTH} and {MAX_CODE_LENGTH} digits"
        )
    low = 10 ** (length - 1)
    high = 10**length - 1
    return low + secrets.randbelow(high - low + 1)


class OneTimeCodeIssuer:
    """Wraps a payload and an encrypted one-time code into a signed token."""

    def __init__(self, toolkit: CryptoToolkit) -> None:
        self._toolkit = toolkit

    def issue(
        self,
        payload: Any,
        signing_secret: str,
        expires_in: timedelta | None = None,
        code_length: int | None = None,
    ) -> IssuedCode:
        """
        Generate a code and a signed token embedding it.

        Args:
            payload: JSON-serializable data carried by the token
            signing_secret: HMAC secret for the token
            expires_in: Token lifetime (default 3 minutes)
            code_length: Digits in the code, 6..10 (default 6)

        Returns:
            IssuedCode with the token and the plaintext code

        Raises:
            ConfigurationError: If code_length is outside [6, 10]
            EncryptionError: If the code cannot be encrypted
            TokenSigningError: If the token cannot be signed
        """
        code = generate_code(DEFAULT_CODE_LENGTH if code_length is None else code_length)
        encrypted_code = self._toolkit.encrypt(code)
        token = self._toolkit.sign_token(
            {"payload": payload, "encrypted_code": encrypted_code.to_dict()},
            signing_secret,
            DEFAULT_EXPIRES_IN if expires_in is None else expires_in,
        )
        return IssuedCode(token=token, code=code)


class TokenVerifier:
    """Validates a one-time code token against a submitted code."""

    def __init__(self, toolkit: CryptoToolkit) -> None:
        self._toolkit = toolkit

    def verify(
        self,
        token: str,
        submitted_code: str | int,
        signing_secret: str,
        decrypt_secret: str,
    ) -> VerifiedToken:
        """
        Check signature and expiry, then compare codes numerically.

        "007" matches 7: both sides are compared as integers.

        Raises:
            InvalidOrExpiredToken: Signature, format or expiry failure
            CodeMismatch: Token valid, code wrong or not numeric
            DecryptionError: Embedded code could not be decrypted
        """
        try:
            claims = self._toolkit.decode_token(token, signing_secret)
        except InvalidOrExpiredToken:
            logger.warning("Verification token rejected: invalid or expired")
            raise
        if "payload" not in claims or "encrypted_code" not in claims:
            logger.warning("Verification token rejected: missing code claims")
            raise InvalidOrExpiredToken("Token is invalid or expired")

        blob = EncryptedBlob.from_dict(claims["encrypted_code"])
        expected = self._toolkit.decrypt(blob, decrypt_secret)

        submitted = _as_number(submitted_code)
        if submitted is None or not _numbers_equal(submitted, expected):
            logger.warning("One-time code mismatch")
            raise CodeMismatch("Submitted code does not match")

        return VerifiedToken(payload=claims["payload"])


def _as_number(value: str | int) -> int | None:
    """Submitted code as an int, or None if it cannot be a valid code."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value < 10**MAX_CODE_LENGTH else None
    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        return None
    # "007" is 7; the remainder is bounded before int() sees it
    digits = text.lstrip("0") or "0"
    if len(digits) > MAX_CODE_LENGTH:
        return None
    return int(digits)


def _numbers_equal(submitted: int, expected: Any) -> bool:
    try:
        expected_number = int(expected)
    except (TypeError, ValueError):
        return False
    return secrets.compare_digest(str(submitted).encode(), str(expected_number).encode())
