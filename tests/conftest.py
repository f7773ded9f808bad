"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A fast security config (bcrypt cost 4, 32+ byte secrets)
- Crypto toolkit, in-memory account store and mocked ports
- Wired domain services
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, Mock

import pytest
import redis

from src.adapters.cache.redis import RedisSessionCache
from src.adapters.repository.memory import InMemoryAccountStore
from src.domain.config import SecurityConfig
from src.domain.registration import AccountRegistrar
from src.domain.session import SessionIssuer
from src.domain.toolkit import CryptoToolkit

ACTIVATION_SECRET = "test-activation-secret-0123456789abcdef"
CRYPTO_SECRET = "test-crypto-secret-0123456789abcdef"
ACCESS_TOKEN_SECRET = "test-access-token-secret-0123456789abcdef"
IV_SOURCE = "0123456789abcdef"


@pytest.fixture
def security_config() -> SecurityConfig:
    """Security config with fast bcrypt and the documented defaults."""
    return SecurityConfig(
        activation_secret=ACTIVATION_SECRET,
        crypto_secret=CRYPTO_SECRET,
        iv_source=IV_SOURCE,
        access_token_secret=ACCESS_TOKEN_SECRET,
        bcrypt_cost=4,
    )


@pytest.fixture
def toolkit(security_config: SecurityConfig) -> CryptoToolkit:
    return CryptoToolkit(security_config)


@pytest.fixture
def past_toolkit(security_config: SecurityConfig) -> Callable[[timedelta], CryptoToolkit]:
    """Factory for toolkits whose clock runs ``ago`` behind real time."""

    def make(ago: timedelta) -> CryptoToolkit:
        return CryptoToolkit(security_config, clock=lambda: datetime.now(timezone.utc) - ago)

    return make


@pytest.fixture
def store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def sender() -> Mock:
    """EmailDispatcher mock; the code is call_args[0][2]."""
    return Mock()


@pytest.fixture
def redis_client() -> MagicMock:
    """Mock Redis client."""
    mock = MagicMock(spec=redis.Redis)
    mock.get.return_value = None
    mock.set.return_value = True
    return mock


@pytest.fixture
def cache(redis_client: MagicMock) -> RedisSessionCache:
    return RedisSessionCache(redis_client)


@pytest.fixture
def registrar(store: InMemoryAccountStore, sender: Mock, toolkit: CryptoToolkit) -> AccountRegistrar:
    return AccountRegistrar(store=store, email_dispatcher=sender, toolkit=toolkit)


@pytest.fixture
def session_issuer(
    store: InMemoryAccountStore, cache: RedisSessionCache, toolkit: CryptoToolkit
) -> SessionIssuer:
    return SessionIssuer(store=store, cache=cache, toolkit=toolkit)


def sent_code(sender: Mock) -> int:
    """Code passed to the most recent send_verification_code call."""
    return sender.send_verification_code.call_args[0][2]
