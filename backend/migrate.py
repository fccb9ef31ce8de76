# backend/migrate.py
# Schema setup for PostgreSQL and SQLite
# Run: python -m backend.migrate

import logging

from backend.db import commit, execute_query, get_db_connection, is_postgres

logger = logging.getLogger(__name__)


POSTGRES_ASSETS_DDL = """
    CREATE TABLE IF NOT EXISTS assets (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        category VARCHAR(100),
        quantity INTEGER DEFAULT 1
    )
"""

# AUTOINCREMENT keeps SQLite from reusing the id of a deleted row
SQLITE_ASSETS_DDL = """
    CREATE TABLE IF NOT EXISTS assets (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name VARCHAR(255) NOT NULL,
        category VARCHAR(100),
        quantity INTEGER DEFAULT 1
    )
"""


def run_migrations() -> None:
    """
    Create the assets table if missing.
    Safe to run multiple times.
    """
    logger.info("[MIGRATE] Starting database migrations...")

    with get_db_connection() as conn:
        if is_postgres():
            logger.info("[MIGRATE] Running PostgreSQL migrations...")
            execute_query(conn, POSTGRES_ASSETS_DDL)
        else:
            logger.info("[MIGRATE] Running SQLite migrations...")
            execute_query(conn, SQLITE_ASSETS_DDL)
        commit(conn)

    logger.info("[MIGRATE] All migrations complete!")


if __name__ == "__main__":
    from backend.config import LOG_LEVEL
    from backend.logging_config import setup_logging

    setup_logging(LOG_LEVEL)
    run_migrations()
