"""
Account registration domain service - stateless email verification.

Nothing about an unverified signup is persisted. The pending account
travels inside a signed, expiring token together with an encrypted
one-time code; the code itself goes to the inbox.

Registration State Machine
==========================

States:
- NO_ACCOUNT: Email unknown to the account store
- PENDING_TOKEN: Token issued, code emailed (exists only client-side)
- VERIFIED: Account created with is_verified = True
- REJECTED: Duplicate email or malformed input

Transitions:
    NO_ACCOUNT    -> PENDING_TOKEN  (signup)
    NO_ACCOUNT    -> REJECTED       (signup with taken email / missing fields)
    PENDING_TOKEN -> VERIFIED       (verify with valid token and matching code)

The email is checked for duplicates twice: at signup and again at
verification, since accounts may have been created in between. The final
guard is the account store's atomic uniqueness constraint on create.

Password representations
========================
plaintext -> AES-encrypted (inside the token) -> plaintext -> bcrypt hash.
The hash, not the token, is the permanent credential.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from .accounts import Account, NewAccount, capitalize, normalize_email
from .cipher import EncryptedBlob
from .exceptions import (
    DecryptionError,
    DispatchError,
    DuplicateEmail,
    InvalidOrExpiredToken,
    ValidationError,
)
from .otp import OneTimeCodeIssuer, TokenVerifier
from .ports import AccountStore, EmailDispatcher
from .toolkit import CryptoToolkit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingRegistration:
    """Signup data carried inside the verification token."""

    first_name: str
    last_name: str
    email: str
    encrypted_password: EncryptedBlob

    def to_payload(self) -> dict[str, Any]:
        return {
            "fname": self.first_name,
            "lname": self.last_name,
            "email": self.email,
            "password": self.encrypted_password.to_dict(),
        }

    @classmethod
    def from_payload(cls, payload: Any) -> "PendingRegistration":
        """
        Rebuild from a verified token payload.

        Raises:
            InvalidOrExpiredToken: If the payload lacks required fields
        """
        try:
            return cls(
                first_name=payload["fname"],
                last_name=payload["lname"],
                email=payload["email"],
                encrypted_password=EncryptedBlob.from_dict(payload["password"]),
            )
        except (KeyError, TypeError, DecryptionError) as e:
            raise InvalidOrExpiredToken("Token is invalid or expired") from e


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


@dataclass
class AccountRegistrar:
    """
    Domain service for signup and account verification.

    Orchestrates the flow: duplicate check, password encryption,
    token issuance, code dispatch, and account materialization.
    """

    store: AccountStore
    email_dispatcher: EmailDispatcher
    toolkit: CryptoToolkit
    _issuer: OneTimeCodeIssuer = field(init=False, repr=False)
    _verifier: TokenVerifier = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._issuer = OneTimeCodeIssuer(self.toolkit)
        self._verifier = TokenVerifier(self.toolkit)

    def signup(self, first_name: str, last_name: str, email: str, password: str) -> str:
        """
        Begin registration: issue a verification token and email the code.

        Args:
            first_name: User's first name
            last_name: User's last name
            email: User's email address (will be normalized)
            password: User's password (encrypted into the token)

        Returns:
            Signed verification token for the client

        Raises:
            ValidationError: If any field is empty
            DuplicateEmail: If an account already uses this email
            CryptoError: If encryption or signing fails
            ConfigurationError: If the configured code length is invalid
            DispatchError: If the verification email cannot be sent
        """
        if any(_is_blank(value) for value in (first_name, last_name, email, password)):
            raise ValidationError("First name, last name, email, and password are required.")

        normalized_email = normalize_email(email)
        self._ensure_email_available(normalized_email)

        config = self.toolkit.config
        pending = PendingRegistration(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=normalized_email,
            encrypted_password=self.toolkit.encrypt(password),
        )
        issued = self._issuer.issue(
            pending.to_payload(),
            config.activation_secret,
            expires_in=config.activation_token_ttl,
            code_length=config.otp_length,
        )

        try:
            self.email_dispatcher.send_verification_code(
                normalized_email, capitalize(pending.first_name), issued.code
            )
        except DispatchError:
            logger.error("Verification email could not be sent to %s", normalized_email)
            raise

        logger.info("Verification token issued for %s", normalized_email)
        return issued.token

    def verify(self, token: str, submitted_code: str | int) -> Account:
        """
        Complete registration: check token and code, create the account.

        Args:
            token: Verification token returned by signup()
            submitted_code: Code the user received by email

        Returns:
            The newly created, verified account

        Raises:
            ValidationError: If token or code is empty
            InvalidOrExpiredToken: If the token fails signature or expiry
            CodeMismatch: If the code is wrong
            DuplicateEmail: If the email was taken since signup
        """
        if _is_blank(submitted_code):
            raise ValidationError(
                "Please enter the verification code we sent to complete your activation."
            )
        if _is_blank(token):
            raise ValidationError(
                "Activation token is missing. Please try again or request a new code."
            )

        config = self.toolkit.config
        verified = self._verifier.verify(
            token, submitted_code, config.activation_secret, config.crypto_secret
        )
        pending = PendingRegistration.from_payload(verified.payload)

        self._ensure_email_available(pending.email)

        password = self.toolkit.decrypt(pending.encrypted_password)
        account = self.store.create(
            NewAccount(
                first_name=capitalize(pending.first_name),
                last_name=capitalize(pending.last_name),
                email=pending.email,
                password_hash=self.toolkit.hash_password(str(password)),
                is_verified=True,
            )
        )
        logger.info("Account %s created for %s", account.id, account.email)
        return account

    def _ensure_email_available(self, email: str) -> None:
        if self.store.find_by_email(email) is not None:
            raise DuplicateEmail(email)
