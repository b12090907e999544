"""
SQLite backed record store.

Each operation opens a short‑lived connection, runs parameterized
statements and closes the connection again.  Connection and
operational failures are reported as ``StorageUnavailable``; they are
never retried and never fall back to another backend.

Favorites rely on the ``UNIQUE(user_id, medication_id)`` constraint
and on ``ON DELETE CASCADE`` foreign keys declared in ``core.db``.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from ..core.db import get_connection, init_db, resolve_database_path
from ..core.exceptions import ConflictError, InvalidReferenceError, StorageUnavailable
from ..schemas.favorite import FavoriteRead
from ..schemas.medication import (
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    MedicationCreate,
    MedicationFilters,
    MedicationRead,
    MedicationUpdate,
)
from ..schemas.user import DEFAULT_ROLE, UserCreate, UserRead
from .base import RecordStore, utcnow

logger = logging.getLogger(__name__)

MEDICATION_COLUMNS = REQUIRED_FIELDS + OPTIONAL_FIELDS
SEARCH_COLUMNS = ("name", "indications", "contraindications", "classification")


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _timestamp(value: datetime) -> str:
    return value.isoformat()


class SQLiteStorage(RecordStore):
    """``RecordStore`` implementation on top of a SQLite database file."""

    backend_name = "sqlite"

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    @classmethod
    def open(cls, database_url: str) -> "SQLiteStorage":
        """Resolve ``database_url``, apply migrations and return a store.

        Raises ``StorageUnavailable`` when the database cannot be
        opened or migrated, and ``ValueError`` for unsupported URLs.
        """
        db_path = resolve_database_path(database_url)
        try:
            version = init_db(db_path)
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"Cannot open database {db_path}: {exc}") from exc
        logger.info("SQLite database %s at schema version %s", db_path, version)
        return cls(db_path)

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = get_connection(self.db_path)
        except sqlite3.Error as exc:
            raise StorageUnavailable(str(exc)) from exc
        try:
            yield conn
        except sqlite3.OperationalError as exc:
            conn.rollback()
            raise StorageUnavailable(str(exc)) from exc
        finally:
            conn.close()

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> UserRead:
        return UserRead.model_validate(dict(row))

    @staticmethod
    def _row_to_medication(row: sqlite3.Row) -> MedicationRead:
        return MedicationRead.model_validate(dict(row))

    # Users

    async def get_user(self, user_id: int) -> Optional[UserRead]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return self._row_to_user(row) if row else None

    async def get_user_by_email(self, email: str) -> Optional[UserRead]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
            return self._row_to_user(row) if row else None

    async def create_user(self, data: UserCreate) -> UserRead:
        with self._connection() as conn:
            try:
                cursor = conn.execute(
                    """
                    INSERT INTO users (email, name, license_number, role, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        data.email,
                        data.name,
                        data.license_number,
                        data.role or DEFAULT_ROLE,
                        _timestamp(utcnow()),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise ConflictError("User already exists") from exc
            user_id = cursor.lastrowid
            conn.commit()
            logger.info("Created user %s", user_id)
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return self._row_to_user(row)

    async def delete_user(self, user_id: int) -> bool:
        with self._connection() as conn:
            # Cleared explicitly so the affected rows get a fresh updated_at.
            conn.execute(
                "UPDATE medications SET created_by = NULL, updated_at = MAX(updated_at, ?) WHERE created_by = ?",
                (_timestamp(utcnow()), user_id),
            )
            cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            affected = cursor.rowcount
            conn.commit()
        if affected:
            logger.info("Deleted user %s", user_id)
        return affected > 0

    # Medications

    async def get_medications(self, filters: Optional[MedicationFilters] = None) -> List[MedicationRead]:
        filters = filters or MedicationFilters()
        conditions = []
        params: list = []
        if filters.search:
            pattern = f"%{escape_like(filters.search.casefold())}%"
            conditions.append(
                "(" + " OR ".join(f"casefold({column}) LIKE ? ESCAPE '\\'" for column in SEARCH_COLUMNS) + ")"
            )
            params.extend([pattern] * len(SEARCH_COLUMNS))
        if filters.alert_level:
            conditions.append("alert_level = ?")
            params.append(filters.alert_level)
        if filters.category:
            conditions.append("category = ?")
            params.append(filters.category)
        query = "SELECT * FROM medications"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY casefold(name) ASC, name ASC, id ASC LIMIT ? OFFSET ?"
        params.extend([filters.limit, filters.offset])
        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
            return [self._row_to_medication(row) for row in rows]

    async def get_medication(self, medication_id: int) -> Optional[MedicationRead]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM medications WHERE id = ?", (medication_id,)).fetchone()
            return self._row_to_medication(row) if row else None

    @staticmethod
    def _require_user(conn: sqlite3.Connection, user_id: Optional[int]) -> None:
        if user_id is None:
            return
        if conn.execute("SELECT 1 FROM users WHERE id = ?", (user_id,)).fetchone() is None:
            raise InvalidReferenceError(f"User {user_id} not found")

    async def create_medication(self, data: MedicationCreate) -> MedicationRead:
        values = data.model_dump()
        now = _timestamp(utcnow())
        columns = MEDICATION_COLUMNS + ("created_at", "updated_at")
        with self._connection() as conn:
            self._require_user(conn, data.created_by)
            cursor = conn.execute(
                f"INSERT INTO medications ({', '.join(columns)}) "
                f"VALUES ({', '.join('?' for _ in columns)})",
                [values[column] for column in MEDICATION_COLUMNS] + [now, now],
            )
            medication_id = cursor.lastrowid
            conn.commit()
            logger.info("Created medication %s (%s)", medication_id, data.name)
            row = conn.execute("SELECT * FROM medications WHERE id = ?", (medication_id,)).fetchone()
            return self._row_to_medication(row)

    async def update_medication(self, medication_id: int, data: MedicationUpdate) -> Optional[MedicationRead]:
        changes = data.changes()
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM medications WHERE id = ?", (medication_id,)).fetchone()
            if not row:
                return None
            existing = self._row_to_medication(row)
            self._require_user(conn, changes.get("created_by"))
            changes["updated_at"] = _timestamp(max(utcnow(), existing.updated_at))
            # Keys come from the schema's field names, never from raw input.
            assignments = ", ".join(f"{column} = ?" for column in changes)
            conn.execute(
                f"UPDATE medications SET {assignments} WHERE id = ?",
                list(changes.values()) + [medication_id],
            )
            conn.commit()
            logger.info("Updated medication %s", medication_id)
            row = conn.execute("SELECT * FROM medications WHERE id = ?", (medication_id,)).fetchone()
            return self._row_to_medication(row)

    async def delete_medication(self, medication_id: int) -> bool:
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM medications WHERE id = ?", (medication_id,))
            affected = cursor.rowcount
            conn.commit()
        if affected:
            logger.info("Deleted medication %s", medication_id)
        return affected > 0

    # Favorites

    async def get_user_favorites(self, user_id: int) -> List[MedicationRead]:
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT m.* FROM user_favorites f
                JOIN medications m ON m.id = f.medication_id
                WHERE f.user_id = ?
                ORDER BY f.id
                """,
                (user_id,),
            ).fetchall()
            return [self._row_to_medication(row) for row in rows]

    async def add_favorite(self, user_id: int, medication_id: int) -> FavoriteRead:
        with self._connection() as conn:
            self._require_user(conn, user_id)
            if conn.execute("SELECT 1 FROM medications WHERE id = ?", (medication_id,)).fetchone() is None:
                raise InvalidReferenceError(f"Medication {medication_id} not found")
            # REPLACE drops any existing row for the pair before inserting.
            cursor = conn.execute(
                """
                INSERT OR REPLACE INTO user_favorites (user_id, medication_id, created_at)
                VALUES (?, ?, ?)
                """,
                (user_id, medication_id, _timestamp(utcnow())),
            )
            favorite_id = cursor.lastrowid
            conn.commit()
            logger.info("User %s favorited medication %s", user_id, medication_id)
            row = conn.execute("SELECT * FROM user_favorites WHERE id = ?", (favorite_id,)).fetchone()
            return FavoriteRead.model_validate(dict(row))

    async def remove_favorite(self, user_id: int, medication_id: int) -> bool:
        with self._connection() as conn:
            cursor = conn.execute(
                "DELETE FROM user_favorites WHERE user_id = ? AND medication_id = ?",
                (user_id, medication_id),
            )
            affected = cursor.rowcount
            conn.commit()
        if affected:
            logger.info("User %s removed favorite medication %s", user_id, medication_id)
        return affected > 0

    async def is_favorite(self, user_id: int, medication_id: int) -> bool:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM user_favorites WHERE user_id = ? AND medication_id = ? LIMIT 1",
                (user_id, medication_id),
            ).fetchone()
            return row is not None
