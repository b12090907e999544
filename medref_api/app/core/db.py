"""
SQLite database integration and simple migration system.

This module resolves the configured connection string to a database
file (``resolve_database_path``), opens connections
(``get_connection``) and applies migrations (``init_db``).  It uses
SQLite as the durable backend; to switch to another DBMS you would
replace connection logic and adapt SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

SQLITE_URL_PREFIX = "sqlite:///"

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: users, medications and favorites
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            license_number TEXT,
            role TEXT NOT NULL DEFAULT 'user',
            created_at TIMESTAMP NOT NULL
        );

        CREATE TABLE IF NOT EXISTS medications (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            classification TEXT NOT NULL,
            alert_level TEXT NOT NULL
                CHECK (alert_level IN ('HIGH_ALERT', 'ELDER_ALERT', 'STANDARD')),
            category TEXT
                CHECK (category IS NULL OR category IN
                    ('analgesics', 'cardiac', 'respiratory', 'neurological', 'endocrine')),
            indications TEXT NOT NULL,
            contraindications TEXT NOT NULL,
            adult_dosage TEXT NOT NULL,
            pediatric_dosage TEXT,
            route_of_administration TEXT,
            onset_duration TEXT,
            special_considerations TEXT,
            side_effects TEXT,
            created_by INTEGER,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL,
            FOREIGN KEY(created_by) REFERENCES users(id) ON DELETE SET NULL
        );

        CREATE TABLE IF NOT EXISTS user_favorites (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            medication_id INTEGER NOT NULL,
            created_at TIMESTAMP NOT NULL,
            UNIQUE(user_id, medication_id),
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY(medication_id) REFERENCES medications(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: lookup indices for filtering and favorites
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_medications_name ON medications(name COLLATE NOCASE);
        CREATE INDEX IF NOT EXISTS idx_medications_alert_level ON medications(alert_level);
        CREATE INDEX IF NOT EXISTS idx_medications_category ON medications(category);
        CREATE INDEX IF NOT EXISTS idx_user_favorites_user_id ON user_favorites(user_id);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Accepts either a plain filesystem path or a ``sqlite:///`` URL.
    Absolute paths are used directly; relative paths are resolved
    against the project root.  Any other URL scheme raises
    ``ValueError``.
    """
    db_url = database_url.strip()
    if db_url.startswith(SQLITE_URL_PREFIX):
        db_url = db_url[len(SQLITE_URL_PREFIX):]
    elif "://" in db_url:
        scheme = db_url.split("://", 1)[0]
        raise ValueError(f"Unsupported database scheme '{scheme}'")
    if not db_url:
        raise ValueError("Empty database path")
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def casefold(value):
    if value is None:
        return None
    return str(value).casefold()


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name and
    enables foreign key enforcement, which SQLite leaves off by
    default.  Favorites cascade on user/medication deletion only when
    this pragma is on.

    A ``casefold(text)`` SQL function is registered as well; built‑in
    ``lower()`` and ``NOCASE`` only fold ASCII letters.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.create_function("casefold", 1, casefold, deterministic=True)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: str) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies any newer entries of
    ``MIGRATIONS``.  Returns the resulting schema version.
    """
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
        # Probe query; fails loudly if the schema is unusable.
        cursor.execute("SELECT id FROM users LIMIT 1").fetchall()
    return current_version
