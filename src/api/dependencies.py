"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.cache.redis import RedisSessionCache
from src.adapters.repository.postgres import PostgresAccountStore
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.config.settings import get_settings
from src.domain.ports import EmailDispatcher
from src.domain.registration import AccountRegistrar
from src.domain.session import SessionIssuer
from src.domain.toolkit import CryptoToolkit


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_account_store(request: Request) -> PostgresAccountStore:
    """Create account store with connection pool from app state."""
    return PostgresAccountStore(get_pool(request))


def get_session_cache(request: Request) -> RedisSessionCache:
    """Wrap the Redis client created at startup."""
    return RedisSessionCache(request.app.state.redis)


@lru_cache
def get_email_sender() -> EmailDispatcher:
    """Email dispatcher selected by settings (singleton, stateless)."""
    settings = get_settings()
    if settings.email_backend == "smtp":
        return SmtpEmailSender(
            host=settings.email_host,
            port=settings.email_port,
            username=settings.email_username,
            password=settings.email_password,
            sender=settings.email_from,
        )
    return ConsoleEmailSender()


@lru_cache
def get_toolkit() -> CryptoToolkit:
    """Crypto toolkit bound to the process-wide security config (singleton)."""
    return CryptoToolkit(get_settings().security_config())


def get_registrar(request: Request) -> AccountRegistrar:
    """
    Create account registrar with injected dependencies.

    Wires together the account store, email dispatcher and crypto toolkit.
    """
    return AccountRegistrar(
        store=get_account_store(request),
        email_dispatcher=get_email_sender(),
        toolkit=get_toolkit(),
    )


def get_session_issuer(request: Request) -> SessionIssuer:
    """Create session issuer with account store, session cache and toolkit."""
    return SessionIssuer(
        store=get_account_store(request),
        cache=get_session_cache(request),
        toolkit=get_toolkit(),
    )
