"""
Crypto toolkit - Stateless encrypt/decrypt/sign/decode/hash capability.

AccountRegistrar and SessionIssuer hold a reference to one CryptoToolkit
injected at construction. The toolkit owns no mutable state: it wraps the
configured SymmetricCipher, HS256 signing via PyJWT and bcrypt hashing.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from .cipher import EncryptedBlob, SymmetricCipher
from .config import SecurityConfig
from .exceptions import InvalidOrExpiredToken, TokenSigningError

ALGORITHM = "HS256"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CryptoToolkit:
    """Crypto primitives bound to one SecurityConfig."""

    def __init__(
        self, config: SecurityConfig, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self.config = config
        self.cipher = SymmetricCipher(config.iv_source, random_iv=config.random_iv)
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    # Symmetric encryption

    def encrypt(self, value: Any, key: str | None = None) -> EncryptedBlob:
        """Encrypt with ``key`` or, by default, the configured crypto secret."""
        return self.cipher.encrypt(value, key if key is not None else self.config.crypto_secret)

    def decrypt(self, blob: EncryptedBlob, key: str | None = None) -> Any:
        """Decrypt with ``key`` or, by default, the configured crypto secret."""
        return self.cipher.decrypt(blob, key if key is not None else self.config.crypto_secret)

    # Signed tokens

    def sign_token(self, claims: dict[str, Any], secret: str, expires_in: timedelta) -> str:
        """
        Sign claims into an HS256 token valid for ``expires_in``.

        Raises:
            TokenSigningError: If the secret is empty or signing fails
        """
        if not secret:
            raise TokenSigningError("Signing secret is not configured")
        issued_at = self.now()
        payload = {**claims, "iat": issued_at, "exp": issued_at + expires_in}
        try:
            return jwt.encode(payload, secret, algorithm=ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenSigningError(f"Token signing failed: {e}") from e

    def decode_token(self, token: str, secret: str) -> dict[str, Any]:
        """
        Verify signature and expiry, returning the claims.

        Fails closed: nothing from a token that does not verify is returned.

        Raises:
            InvalidOrExpiredToken: On any signature, format or expiry failure
        """
        if not token or not secret:
            raise InvalidOrExpiredToken("Token is invalid or expired")
        try:
            return jwt.decode(
                token, secret, algorithms=[ALGORITHM], options={"require": ["exp", "iat"]}
            )
        except jwt.InvalidTokenError as e:
            raise InvalidOrExpiredToken("Token is invalid or expired") from e

    # Password hashing

    def hash_password(self, password: str) -> str:
        """Hash password using bcrypt with the configured cost factor."""
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self.config.bcrypt_cost)
        ).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Constant-time bcrypt comparison; False on malformed hashes."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
