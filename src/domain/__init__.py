"""
Domain layer - Pure business logic with zero framework imports.

This package contains the stateless email-verification protocol and the
session issuance logic. It defines its own port interfaces for
infrastructure abstraction; only crypto primitives (cryptography, PyJWT,
bcrypt) are imported here.
"""

from .accounts import Account, AccountStatus, BanStatus, DisableStatus, LoginIp, NewAccount
from .cipher import EncryptedBlob, SymmetricCipher
from .config import SecurityConfig
from .exceptions import (
    AccountBanned,
    AccountDisabled,
    AccountNotFound,
    AccountStateError,
    AuthError,
    CodeMismatch,
    ConfigurationError,
    CryptoError,
    DecryptionError,
    DispatchError,
    DuplicateEmail,
    EncryptionError,
    InvalidCredentials,
    InvalidOrExpiredToken,
    SessionIssuanceError,
    TokenSigningError,
    ValidationError,
)
from .moderation import ModerationService
from .otp import IssuedCode, OneTimeCodeIssuer, TokenVerifier, VerifiedToken
from .ports import AccountStore, EmailDispatcher, SessionCache
from .registration import AccountRegistrar, PendingRegistration
from .session import ACCESS_TOKEN_COOKIE, CookieDirective, IssuedSession, SessionIssuer
from .toolkit import CryptoToolkit

__all__ = [
    "ACCESS_TOKEN_COOKIE",
    "Account",
    "AccountBanned",
    "AccountDisabled",
    "AccountNotFound",
    "AccountRegistrar",
    "AccountStateError",
    "AccountStatus",
    "AccountStore",
    "AuthError",
    "BanStatus",
    "CodeMismatch",
    "ConfigurationError",
    "CookieDirective",
    "CryptoError",
    "CryptoToolkit",
    "DecryptionError",
    "DisableStatus",
    "DispatchError",
    "DuplicateEmail",
    "EmailDispatcher",
    "EncryptedBlob",
    "EncryptionError",
    "InvalidCredentials",
    "InvalidOrExpiredToken",
    "IssuedCode",
    "IssuedSession",
    "LoginIp",
    "ModerationService",
    "NewAccount",
    "OneTimeCodeIssuer",
    "PendingRegistration",
    "SecurityConfig",
    "SessionCache",
    "SessionIssuanceError",
    "SessionIssuer",
    "SymmetricCipher",
    "TokenSigningError",
    "TokenVerifier",
    "ValidationError",
    "VerifiedToken",
]
