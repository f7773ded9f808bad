"""
Session issuance - access tokens, cookies and remember-me records.

Two durability tiers:
- Every signin gets a short-lived signed access token (default 5 minutes),
  returned in the body and set as the ``user_access_token`` cookie.
- With remember-me, the cookie lives 7 days and a JSON snapshot of the
  account is written to the session cache under the account id, without
  an expiry (cache-layer TTL policy applies, if any).

Issuance is fail-closed: if the access token cannot be signed, no cookie
directive is produced and nothing is written to the cache.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any

import bcrypt

from .accounts import Account, normalize_email
from .exceptions import (
    AccountBanned,
    AccountDisabled,
    CryptoError,
    InvalidCredentials,
    SessionIssuanceError,
    ValidationError,
)
from .ports import AccountStore, SessionCache
from .toolkit import CryptoToolkit

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "user_access_token"


@lru_cache
def _dummy_hash(cost: int) -> str:
    # Compared against when the email is unknown so response time does
    # not reveal account existence.
    return bcrypt.hashpw(b"dummy_password_for_timing_safety", bcrypt.gensalt(cost)).decode()


@dataclass(frozen=True)
class CookieDirective:
    """How the HTTP layer must set the access token cookie."""

    name: str
    value: str
    http_only: bool = True
    secure: bool = False
    same_site: str = "none"
    max_age: int | None = None
    expires: datetime | None = None

    @property
    def is_persistent(self) -> bool:
        return self.max_age is not None


@dataclass(frozen=True)
class IssuedSession:
    """Result of a successful signin."""

    access_token: str
    cookie: CookieDirective
    user: dict[str, Any]


@dataclass
class SessionIssuer:
    """
    Domain service for signin and session issuance.

    Checks credentials and account state, then issues the access token,
    the cookie directive and (for remember-me) the cached session record.
    """

    store: AccountStore
    cache: SessionCache
    toolkit: CryptoToolkit

    def signin(
        self,
        email: str,
        password: str,
        remember_me: bool = False,
        client_ip: str | None = None,
    ) -> IssuedSession:
        """
        Authenticate and issue a session.

        Args:
            email: Account email (will be normalized)
            password: Plaintext password
            remember_me: Extend the cookie to 7 days and cache the session
            client_ip: Caller address, recorded in the login IP history

        Raises:
            ValidationError: If email or password is empty
            InvalidCredentials: Unknown email or wrong password
            AccountBanned: Account is banned (carries the stored reason)
            AccountDisabled: Account is disabled
            SessionIssuanceError: Access token could not be signed
        """
        if not email or not email.strip() or not password:
            raise ValidationError("Please provide your email and password.")

        account = self.store.find_by_email(normalize_email(email))
        if account is None:
            self.toolkit.verify_password(password, _dummy_hash(self.toolkit.config.bcrypt_cost))
            logger.warning("Signin rejected: unknown email")
            raise InvalidCredentials("Incorrect email or password")

        banned = account.account_status.banned
        if banned.is_banned:
            logger.warning("Signin rejected: account %s is banned", account.id)
            raise AccountBanned(banned.reason or "Your account is banned.", reason=banned.reason)

        disabled = account.account_status.disabled
        if disabled.is_disabled:
            logger.warning("Signin rejected: account %s is disabled", account.id)
            raise AccountDisabled(
                "Your account is disabled. Please reach out to our support team for assistance.",
                reason=disabled.reason,
            )

        if not self.toolkit.verify_password(password, account.password_hash):
            logger.warning("Signin rejected: wrong password for account %s", account.id)
            raise InvalidCredentials("Incorrect email or password")

        session = self.issue_session(account, remember_me)

        if client_ip:
            account.record_login_ip(client_ip)
            self.store.save(account)

        logger.info("Account %s signed in (remember_me=%s)", account.id, remember_me)
        return session

    def issue_session(self, account: Account, remember_me: bool) -> IssuedSession:
        """
        Issue an access token, its cookie directive and, optionally, a cache record.

        The returned user view never contains the password hash or the
        account status.

        Raises:
            SessionIssuanceError: If the access token cannot be signed
        """
        config = self.toolkit.config
        try:
            access_token = self.toolkit.sign_token(
                {"sub": account.id}, config.access_token_secret, config.access_token_ttl
            )
        except CryptoError as e:
            logger.error("Access token signing failed for account %s", account.id)
            raise SessionIssuanceError("Session could not be issued") from e

        if remember_me:
            cookie = CookieDirective(
                name=ACCESS_TOKEN_COOKIE,
                value=access_token,
                secure=config.secure_cookies,
                max_age=int(config.remember_me_ttl.total_seconds()),
                expires=self.toolkit.now() + config.remember_me_ttl,
            )
            self.cache.set(str(account.id), account.to_snapshot())
            logger.info("Remember-me session cached for account %s", account.id)
        else:
            cookie = CookieDirective(
                name=ACCESS_TOKEN_COOKIE, value=access_token, secure=config.secure_cookies
            )

        return IssuedSession(access_token=access_token, cookie=cookie, user=account.public_view())
