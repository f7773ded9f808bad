"""
Domain exceptions - Semantic error types for signup, verification and signin.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Primitive failures (cipher, signer, SMTP) are chained onto these
with ``raise ... from exc`` so the original cause stays inspectable.
"""


class AuthError(Exception):
    """Base class for authentication domain errors."""

    pass


class ValidationError(AuthError):
    """Required input is missing or malformed."""

    pass


class ConfigurationError(AuthError):
    """A security parameter is outside its accepted range."""

    pass


class DuplicateEmail(AuthError):
    """Email already belongs to an account."""

    pass


class CryptoError(AuthError):
    """Cipher, signing or verification primitive failed."""

    pass


class EncryptionError(CryptoError):
    """Symmetric encryption failed."""

    pass


class DecryptionError(CryptoError):
    """Symmetric decryption failed (corrupt blob, wrong key, bad IV)."""

    pass


class TokenSigningError(CryptoError):
    """A signed token could not be produced."""

    pass


class InvalidOrExpiredToken(AuthError):
    """Signed token failed signature or expiry checks."""

    pass


class CodeMismatch(AuthError):
    """Token was valid but the submitted one-time code was wrong."""

    pass


class InvalidCredentials(AuthError):
    """Unknown email or wrong password."""

    pass


class AccountStateError(AuthError):
    """Account exists but may not sign in."""

    def __init__(self, message: str, reason: str = "") -> None:
        super().__init__(message)
        self.reason = reason


class AccountBanned(AccountStateError):
    """Account is banned."""

    pass


class AccountDisabled(AccountStateError):
    """Account is disabled."""

    pass


class AccountNotFound(AuthError):
    """No account with the requested identity."""

    pass


class DispatchError(AuthError):
    """Verification email could not be delivered."""

    pass


class SessionIssuanceError(AuthError):
    """Access token could not be issued; signin aborted."""

    pass
