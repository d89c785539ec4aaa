"""PostgreSQL access for the read-only scan store."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import OperationalError
from psycopg2.extensions import connection as PGConnection

from .config import DatabaseConfig, get_database_config
from .logging_config import get_logger

log = get_logger(__name__)

if not get_database_config().password:
    log.warning("DB_PASSWORD environment variable not set. Database connection will likely fail.")


def _open(config: DatabaseConfig) -> PGConnection:
    conn = psycopg2.connect(
        dbname=config.dbname,
        user=config.user,
        password=config.password,
        host=config.host,
        port=config.port,
        options=config.options,
        connect_timeout=config.connect_timeout,
    )
    # The API only reads scans; the server rejects any accidental write.
    conn.set_session(readonly=True, autocommit=True)
    return conn


@contextmanager
def get_connection() -> Iterator[PGConnection]:
    """Yield a read-only connection to the scan store and close it afterwards.

    A connection that cannot be opened within ``DB_CONNECT_TIMEOUT`` seconds
    raises ``OperationalError`` instead of holding the request open.
    """

    config = get_database_config()
    try:
        conn = _open(config)
    except OperationalError:
        log.exception("Could not connect to scan store at %s:%s", config.host, config.port)
        raise

    try:
        yield conn
    finally:
        try:
            conn.close()
        except Exception:  # pragma: no cover - close failures are only logged
            log.exception("Failed to close database connection cleanly")
