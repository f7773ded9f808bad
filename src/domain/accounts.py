"""
Account value types.

Status sub-documents (ban, disable, login IP) are always fully
initialized with explicit defaults, so callers never null-check them.
Accounts are created only after successful verification and are never
deleted by this package; moderation and signin mutate them and persist
through AccountStore.save().
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def capitalize(text: str) -> str:
    """Upper-case the first character, leave the rest untouched."""
    return text[:1].upper() + text[1:] if text else ""


def normalize_email(email: str) -> str:
    """Strip whitespace and lowercase."""
    return email.strip().lower()


@dataclass
class BanStatus:
    is_banned: bool = False
    reason: str = ""
    banned_at: datetime | None = None


@dataclass
class DisableStatus:
    is_disabled: bool = False
    reason: str = ""
    disabled_at: datetime | None = None


@dataclass
class AccountStatus:
    banned: BanStatus = field(default_factory=BanStatus)
    disabled: DisableStatus = field(default_factory=DisableStatus)


@dataclass
class LoginIp:
    """First and most recent signin addresses."""

    first: str = ""
    last: str = ""


@dataclass(frozen=True)
class NewAccount:
    """Fields for AccountStore.create(). The password is already hashed."""

    first_name: str
    last_name: str
    email: str
    password_hash: str
    is_verified: bool = True


@dataclass
class Account:
    """A persisted, verified user account."""

    id: str
    first_name: str
    last_name: str
    email: str
    password_hash: str
    is_verified: bool = False
    role: str = "user"
    account_status: AccountStatus = field(default_factory=AccountStatus)
    login_ip: LoginIp = field(default_factory=LoginIp)
    created_at: datetime = field(default_factory=_utc_now)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def ban(self, reason: str) -> None:
        self.account_status.banned = BanStatus(is_banned=True, reason=reason, banned_at=_utc_now())

    def unban(self) -> None:
        self.account_status.banned = BanStatus()

    def disable(self, reason: str) -> None:
        self.account_status.disabled = DisableStatus(
            is_disabled=True, reason=reason, disabled_at=_utc_now()
        )

    def enable(self) -> None:
        self.account_status.disabled = DisableStatus()

    def record_login_ip(self, ip_address: str) -> None:
        """Set the first IP once, update the last IP every time."""
        if not self.login_ip.first:
            self.login_ip.first = ip_address
        self.login_ip.last = ip_address

    def public_view(self) -> dict[str, Any]:
        """
        Account fields safe to echo to a client.

        Password hash, account status and login IPs are left out.
        """
        return {
            "id": self.id,
            "fname": self.first_name,
            "lname": self.last_name,
            "email": self.email,
            "role": self.role,
            "is_verified": self.is_verified,
            "created_at": self.created_at.isoformat(),
        }

    def to_snapshot(self) -> str:
        """
        JSON snapshot stored in the session cache.

        Everything except the password hash and account status, so unlike
        public_view() it carries the login IP history.
        """
        snapshot = self.public_view()
        snapshot["login_ip"] = {"first": self.login_ip.first, "last": self.login_ip.last}
        return json.dumps(snapshot)
