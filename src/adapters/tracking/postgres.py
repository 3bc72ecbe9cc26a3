"""
PostgreSQL tracking store adapter - Implements TrackingStore protocol.

This module provides a PostgreSQL implementation of the domain's
tracking store port using psycopg3 with raw SQL.

Expiry Emulation:
-----------------
PostgreSQL has no native row TTL. Reads only return rows whose
``expires_at`` (epoch seconds) is still in the future, judged by
database time, so expired rows behave as if swept. Writes upsert on
the email key, mirroring put semantics of a keyed store; this adapter
never issues deletes.
"""

import logging
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import TrackingStoreUnavailable
from src.domain.models import VerificationRecord

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


class PostgresTrackingStore:
    """
    Implements TrackingStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_records(self, email: str) -> list[VerificationRecord]:
        sql = """
            SELECT email, token, sent_at, expires_at
            FROM verification_records
            WHERE email = %s
              AND expires_at > EXTRACT(EPOCH FROM NOW())
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                rows = cursor.fetchall()
        except psycopg.Error as e:
            raise TrackingStoreUnavailable(f"PostgreSQL query failed for {email}") from e

        return [
            VerificationRecord(email=row[0], token=row[1], sent_at=row[2], expires_at=int(row[3]))
            for row in rows
        ]

    def put_record(self, record: VerificationRecord) -> None:
        sql = """
            INSERT INTO verification_records (email, token, sent_at, expires_at)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (email) DO UPDATE
            SET token = EXCLUDED.token,
                sent_at = EXCLUDED.sent_at,
                expires_at = EXCLUDED.expires_at
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (record.email, record.token, record.sent_at, record.expires_at))
            conn.commit()


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> None:
    """Apply the idempotent schema scripts in filename order, in one transaction."""
    scripts = sorted(migrations_dir.glob("*.sql"))
    with pool.connection() as conn:
        for script in scripts:
            logger.info("Applying schema script %s", script.name)
            conn.execute(script.read_text())
