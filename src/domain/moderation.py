"""Account moderation - ban, unban, disable and enable accounts."""

import logging
from dataclasses import dataclass

from .accounts import Account
from .exceptions import AccountNotFound, ValidationError
from .ports import AccountStore

logger = logging.getLogger(__name__)


@dataclass
class ModerationService:
    """Changes account status and persists it through the store."""

    store: AccountStore

    def ban(self, account_id: str, reason: str) -> Account:
        if not reason or not reason.strip():
            raise ValidationError("A ban reason is required.")
        account = self._load(account_id)
        account.ban(reason.strip())
        logger.info("Account %s banned", account_id)
        return self.store.save(account)

    def unban(self, account_id: str) -> Account:
        account = self._load(account_id)
        account.unban()
        logger.info("Account %s unbanned", account_id)
        return self.store.save(account)

    def disable(self, account_id: str, reason: str) -> Account:
        account = self._load(account_id)
        account.disable(reason.strip())
        logger.info("Account %s disabled", account_id)
        return self.store.save(account)

    def enable(self, account_id: str) -> Account:
        account = self._load(account_id)
        account.enable()
        logger.info("Account %s enabled", account_id)
        return self.store.save(account)

    def _load(self, account_id: str) -> Account:
        account = self.store.find_by_id(account_id)
        if account is None:
            raise AccountNotFound(account_id)
        return account
