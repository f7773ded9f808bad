"""
PostgreSQL repository adapter - Implements AccountStore protocol.

This module provides the PostgreSQL implementation of the domain's
account store port using psycopg3 with raw SQL.

Uniqueness Design:
-----------------
The domain checks for an existing email before issuing a token and again
before creating the account, but two verifications for the same email can
still interleave between that read and the INSERT. The UNIQUE constraint
on ``accounts.email`` is the atomic guard: the losing INSERT raises
UniqueViolation, which is surfaced as DuplicateEmail.
"""

import logging
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.accounts import (
    Account,
    AccountStatus,
    BanStatus,
    DisableStatus,
    LoginIp,
    NewAccount,
)
from src.domain.exceptions import AccountNotFound, DuplicateEmail

logger = logging.getLogger(__name__)

_COLUMNS = """
    id::text, first_name, last_name, email, password_hash, is_verified, role,
    is_banned, banned_reason, banned_at,
    is_disabled, disabled_reason, disabled_at,
    first_login_ip, last_login_ip, created_at
"""


def _row_to_account(row: tuple) -> Account:
    return Account(
        id=row[0],
        first_name=row[1],
        last_name=row[2],
        email=row[3],
        password_hash=row[4],
        is_verified=row[5],
        role=row[6],
        account_status=AccountStatus(
            banned=BanStatus(is_banned=row[7], reason=row[8], banned_at=row[9]),
            disabled=DisableStatus(is_disabled=row[10], reason=row[11], disabled_at=row[12]),
        ),
        login_ip=LoginIp(first=row[13], last=row[14]),
        created_at=row[15],
    )


class PostgresAccountStore:
    """
    Implements AccountStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Account | None:
        sql = f"SELECT {_COLUMNS} FROM accounts WHERE email = %s"
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()
        return _row_to_account(row) if row is not None else None

    def find_by_id(self, account_id: str) -> Account | None:
        sql = f"SELECT {_COLUMNS} FROM accounts WHERE id::text = %s"
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (account_id,))
            row = cursor.fetchone()
        return _row_to_account(row) if row is not None else None

    def create(self, fields: NewAccount) -> Account:
        """
        Insert a verified account.

        Raises:
            DuplicateEmail: If the UNIQUE constraint on email rejects the row
        """
        sql = f"""
            INSERT INTO accounts (first_name, last_name, email, password_hash, is_verified)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {_COLUMNS}
        """
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(
                    sql,
                    (
                        fields.first_name,
                        fields.last_name,
                        fields.email,
                        fields.password_hash,
                        fields.is_verified,
                    ),
                )
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation as e:
            raise DuplicateEmail(fields.email) from e
        return _row_to_account(row)

    def save(self, account: Account) -> Account:
        """
        Persist status and login IP changes.

        Raises:
            AccountNotFound: If no row has this id
        """
        status = account.account_status
        sql = f"""
            UPDATE accounts
            SET is_banned = %s, banned_reason = %s, banned_at = %s,
                is_disabled = %s, disabled_reason = %s, disabled_at = %s,
                first_login_ip = %s, last_login_ip = %s
            WHERE id::text = %s
            RETURNING {_COLUMNS}
        """
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    status.banned.is_banned,
                    status.banned.reason,
                    status.banned.banned_at,
                    status.disabled.is_disabled,
                    status.disabled.reason,
                    status.disabled.disabled_at,
                    account.login_ip.first,
                    account.login_ip.last,
                    account.id,
                ),
            )
            row = cursor.fetchone()
            conn.commit()
        if row is None:
            raise AccountNotFound(account.id)
        return _row_to_account(row)


MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> None:
    """
    Apply every ``*.sql`` file in ``migrations_dir`` in filename order.

    Files must be idempotent (``IF NOT EXISTS``); they run on every startup.

    Raises:
        RuntimeError: If a migration fails, chained to the database error
    """
    if not migrations_dir.is_dir():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))
    logger.info("Applying %d migration(s) from %s", len(sql_files), migrations_dir)

    for sql_file in sql_files:
        try:
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())
        except psycopg.Error as e:
            logger.error("Migration %s failed: %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
        logger.info("Migration applied: %s", sql_file.name)
