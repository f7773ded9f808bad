"""
In-memory repository adapter - Implements AccountStore protocol.

Keeps accounts in process memory behind a lock. Email uniqueness is
checked and the row inserted under the same lock, so concurrent creates
for one email behave like the PostgreSQL UNIQUE constraint: exactly one
wins. Returned accounts are copies; changes persist only through save().
"""

import copy
import threading
import uuid

from src.domain.accounts import Account, NewAccount
from src.domain.exceptions import AccountNotFound, DuplicateEmail


class InMemoryAccountStore:
    """
    Implements AccountStore protocol with dictionaries.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, Account] = {}
        self._id_by_email: dict[str, str] = {}

    def find_by_email(self, email: str) -> Account | None:
        with self._lock:
            account_id = self._id_by_email.get(email)
            if account_id is None:
                return None
            return copy.deepcopy(self._by_id[account_id])

    def find_by_id(self, account_id: str) -> Account | None:
        with self._lock:
            account = self._by_id.get(account_id)
            return copy.deepcopy(account) if account is not None else None

    def create(self, fields: NewAccount) -> Account:
        with self._lock:
            if fields.email in self._id_by_email:
                raise DuplicateEmail(fields.email)
            account = Account(
                id=str(uuid.uuid4()),
                first_name=fields.first_name,
                last_name=fields.last_name,
                email=fields.email,
                password_hash=fields.password_hash,
                is_verified=fields.is_verified,
            )
            self._by_id[account.id] = account
            self._id_by_email[account.email] = account.id
            return copy.deepcopy(account)

    def save(self, account: Account) -> Account:
        with self._lock:
            if account.id not in self._by_id:
                raise AccountNotFound(account.id)
            self._by_id[account.id] = copy.deepcopy(account)
            return copy.deepcopy(account)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)
