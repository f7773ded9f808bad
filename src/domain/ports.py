"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol

from .accounts import Account, NewAccount


class AccountStore(Protocol):
    """Port interface for account persistence."""

    def find_by_email(self, email: str) -> Account | None:
        """
        Look up an account by normalized email.

        Returns:
            The account, or None if no account uses this email
        """
        ...

    def find_by_id(self, account_id: str) -> Account | None:
        """Look up an account by identity."""
        ...

    def create(self, fields: NewAccount) -> Account:
        """
        Persist a new account.

        Email uniqueness must be enforced atomically here: of two
        concurrent creates for one email, exactly one succeeds.

        Raises:
            DuplicateEmail: If an account with this email already exists
        """
        ...

    def save(self, account: Account) -> Account:
        """
        Persist changes to an existing account (status, login IPs).

        Raises:
            AccountNotFound: If the account does not exist
        """
        ...


class EmailDispatcher(Protocol):
    """Port interface for verification email delivery."""

    def send_verification_code(self, recipient: str, name: str, code: int) -> None:
        """
        Deliver a one-time code.

        Args:
            recipient: Normalized email address
            name: Capitalized first name for the greeting
            code: Numeric one-time code

        Raises:
            DispatchError: If delivery fails
        """
        ...


class SessionCache(Protocol):
    """Port interface for the remember-me session store."""

    def set(self, key: str, value: str) -> None:
        """Store a value without expiry; overwrites any existing entry."""
        ...

    def get(self, key: str) -> str | None:
        """Return the stored value, or None."""
        ...
