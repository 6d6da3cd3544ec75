"""DuckDB connection management."""

from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL


def db_exists(db_path: str | Path) -> bool:
    """Check if database file exists."""
    return Path(db_path).exists()


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.debug("DB tables initialized")


def connect(db_path: str | Path) -> duckdb.DuckDBPyConnection:
    """Open (creating if needed) a cache database with its tables."""
    if not db_exists(db_path):
        logger.warning("DB not found: {}. Creating empty DB.", db_path)
    conn = duckdb.connect(str(db_path))
    init_tables(conn)
    logger.debug("DB connected: {}", db_path)
    return conn
