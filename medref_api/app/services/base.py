"""
Record store contract shared by all storage backends.

Every backend owns three collections (users, medications and
favorites) and hands out fresh pydantic models, never references to
its internal state.  Methods are coroutines so that API handlers can
await them uniformly whichever backend is in use.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from ..schemas.favorite import FavoriteRead
from ..schemas.medication import (
    MedicationCreate,
    MedicationFilters,
    MedicationRead,
    MedicationUpdate,
)
from ..schemas.user import UserCreate, UserRead
from .sample_data import SAMPLE_MEDICATIONS

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore(ABC):
    """Abstract storage for users, medications and favorites."""

    backend_name = "abstract"

    # Users

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[UserRead]:
        """Return the user with ``user_id`` or ``None``."""

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserRead]:
        """Return the user with exactly this email (case‑sensitive) or ``None``."""

    @abstractmethod
    async def create_user(self, data: UserCreate) -> UserRead:
        """Insert a user.

        The role defaults to ``"user"``.  Email uniqueness is the
        caller's responsibility: look the email up first.
        """

    @abstractmethod
    async def delete_user(self, user_id: int) -> bool:
        """Delete a user along with their favorites.

        Medications the user created keep existing with ``created_by``
        cleared and ``updated_at`` stamped.  Returns ``False`` when there
        was no such user.
        """

    # Medications

    @abstractmethod
    async def get_medications(self, filters: Optional[MedicationFilters] = None) -> List[MedicationRead]:
        """Return medications matching ``filters``, sorted by name, then paginated."""

    @abstractmethod
    async def get_medication(self, medication_id: int) -> Optional[MedicationRead]:
        pass

    @abstractmethod
    async def create_medication(self, data: MedicationCreate) -> MedicationRead:
        """Insert a medication; ``created_at`` and ``updated_at`` start equal.

        Raises ``InvalidReferenceError`` if ``created_by`` names an unknown user.
        """

    @abstractmethod
    async def update_medication(self, medication_id: int, data: MedicationUpdate) -> Optional[MedicationRead]:
        """Merge the explicitly provided fields of ``data`` onto a record.

        Returns ``None`` if the record does not exist; never creates.
        """

    @abstractmethod
    async def delete_medication(self, medication_id: int) -> bool:
        pass

    # Favorites

    @abstractmethod
    async def get_user_favorites(self, user_id: int) -> List[MedicationRead]:
        """Return the medications a user has favorited (order unspecified)."""

    @abstractmethod
    async def add_favorite(self, user_id: int, medication_id: int) -> FavoriteRead:
        """Create or replace the favorite for this (user, medication) pair.

        Raises ``InvalidReferenceError`` if either side does not exist.
        """

    @abstractmethod
    async def remove_favorite(self, user_id: int, medication_id: int) -> bool:
        pass

    @abstractmethod
    async def is_favorite(self, user_id: int, medication_id: int) -> bool:
        pass

    async def seed_sample_data(self) -> int:
        """Load the demonstration medications into an empty store.

        Returns the number of records created; does nothing if any
        medication already exists.
        """
        if await self.get_medications(MedicationFilters(limit=1)):
            return 0
        for record in SAMPLE_MEDICATIONS:
            await self.create_medication(MedicationCreate(**record))
        logger.info("Seeded %s sample medications into %s storage", len(SAMPLE_MEDICATIONS), self.backend_name)
        return len(SAMPLE_MEDICATIONS)
