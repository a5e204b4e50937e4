# ---------- db_init.py ----------
"""Create and return the SQLite connection holding the product catalog.

The whole catalog lives in one table; row order is kept in ``position``
because the catalog has no other ordering and ids may repeat.
"""
import logging
import os
import sqlite3

logger = logging.getLogger(__name__)


def init_db(conn: sqlite3.Connection) -> None:
    """Create tables for a new database (safe to run on existing DB)."""
    cur = conn.cursor()
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS products (
            position INTEGER PRIMARY KEY,
            id TEXT NOT NULL,
            name TEXT NOT NULL,
            quantity INTEGER NOT NULL DEFAULT 0,
            price REAL NOT NULL DEFAULT 0
        )
        """
    )
    conn.commit()


def connect_sqlite(path: str) -> sqlite3.Connection:
    """Open the catalog database at ``path`` (ensures the parent dir exists)."""
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    conn = sqlite3.connect(path, check_same_thread=False)
    try:
        init_db(conn)
    except sqlite3.Error:
        conn.close()
        raise
    logger.debug("Opened catalog database %s", path)
    return conn
