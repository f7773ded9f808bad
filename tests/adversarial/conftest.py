"""
Shared fixtures for adversarial tests.

Adversarial tests run against the in-memory store so they need no
database; the root conftest supplies the services.
"""

from unittest.mock import Mock

import pytest

from src.adapters.repository.memory import InMemoryAccountStore
from src.domain.accounts import Account, NewAccount
from src.domain.registration import AccountRegistrar
from src.domain.toolkit import CryptoToolkit


@pytest.fixture
def victim(store: InMemoryAccountStore, toolkit: CryptoToolkit) -> Account:
    """Existing account victim@example.com / correct-horse."""
    return store.create(
        NewAccount("Victim", "User", "victim@example.com", toolkit.hash_password("correct-horse"))
    )


@pytest.fixture
def pending(registrar: AccountRegistrar, sender: Mock) -> tuple[str, int]:
    """Activation token and its code for attacker@example.com."""
    token = registrar.signup("Attacker", "User", "attacker@example.com", "pw")
    return token, sender.send_verification_code.call_args[0][2]
