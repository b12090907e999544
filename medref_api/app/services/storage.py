"""
Backend selection for the record store.

``select_storage`` runs once at application startup.  It tries the
durable SQLite backend named by the connection string and falls back
to a seeded in‑memory store when the string is empty or the database
cannot be opened.  The choice holds for the life of the process;
requests never trigger a second attempt.
"""

import logging
from typing import Optional

from ..core.exceptions import StorageUnavailable
from .base import RecordStore
from .memory_storage import MemoryStorage
from .sqlite_storage import SQLiteStorage

logger = logging.getLogger(__name__)


async def build_fallback_storage() -> MemoryStorage:
    storage = MemoryStorage()
    await storage.seed_sample_data()
    return storage


async def select_storage(database_url: Optional[str]) -> RecordStore:
    """Return the record store to use for this process."""
    if not database_url:
        logger.warning("DATABASE_URL not provided; falling back to in-memory storage")
        return await build_fallback_storage()
    try:
        storage = SQLiteStorage.open(database_url)
    except (StorageUnavailable, ValueError, OSError) as exc:
        logger.warning("Falling back to in-memory storage: %s", exc)
        return await build_fallback_storage()
    logger.info("Using SQLite database storage")
    return storage
