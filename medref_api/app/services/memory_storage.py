"""
In‑memory record store.

Used when no durable database is configured or reachable.  All
collections live in plain dictionaries guarded by one lock; id
counters start at 1 and are never reused within a process.  Every
method returns copies so callers cannot mutate stored records.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Tuple

from ..core.exceptions import InvalidReferenceError
from ..schemas.favorite import FavoriteRead
from ..schemas.medication import (
    MedicationCreate,
    MedicationFilters,
    MedicationRead,
    MedicationUpdate,
)
from ..schemas.user import DEFAULT_ROLE, UserCreate, UserRead
from .base import RecordStore, utcnow

logger = logging.getLogger(__name__)


def name_sort_key(medication: MedicationRead) -> tuple:
    """Case‑insensitive name order, ties broken by exact name then id."""
    return (medication.name.casefold(), medication.name, medication.id)


def matches_search(medication: MedicationRead, search: str) -> bool:
    needle = search.casefold()
    return any(
        needle in value.casefold()
        for value in (
            medication.name,
            medication.indications,
            medication.contraindications,
            medication.classification,
        )
    )


class MemoryStorage(RecordStore):
    """Dictionary backed implementation of ``RecordStore``."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: Dict[int, UserRead] = {}
        self._medications: Dict[int, MedicationRead] = {}
        self._favorites: Dict[Tuple[int, int], FavoriteRead] = {}
        self._next_user_id = 1
        self._next_medication_id = 1
        self._next_favorite_id = 1

    # Users

    async def get_user(self, user_id: int) -> Optional[UserRead]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    async def get_user_by_email(self, email: str) -> Optional[UserRead]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user.model_copy()
        return None

    async def create_user(self, data: UserCreate) -> UserRead:
        with self._lock:
            user = UserRead(
                id=self._next_user_id,
                email=data.email,
                name=data.name,
                license_number=data.license_number,
                role=data.role or DEFAULT_ROLE,
                created_at=utcnow(),
            )
            self._next_user_id += 1
            self._users[user.id] = user
        logger.info("Created user %s", user.id)
        return user.model_copy()

    async def delete_user(self, user_id: int) -> bool:
        with self._lock:
            if self._users.pop(user_id, None) is None:
                return False
            for key in [key for key in self._favorites if key[0] == user_id]:
                del self._favorites[key]
            for med_id, medication in self._medications.items():
                if medication.created_by == user_id:
                    self._medications[med_id] = medication.model_copy(
                        update={"created_by": None, "updated_at": max(utcnow(), medication.updated_at)}
                    )
        logger.info("Deleted user %s", user_id)
        return True

    # Medications

    async def get_medications(self, filters: Optional[MedicationFilters] = None) -> List[MedicationRead]:
        filters = filters or MedicationFilters()
        with self._lock:
            results = list(self._medications.values())
        if filters.search:
            results = [med for med in results if matches_search(med, filters.search)]
        if filters.alert_level:
            results = [med for med in results if med.alert_level == filters.alert_level]
        if filters.category:
            results = [med for med in results if med.category == filters.category]
        results.sort(key=name_sort_key)
        page = results[filters.offset:filters.offset + filters.limit]
        return [med.model_copy() for med in page]

    async def get_medication(self, medication_id: int) -> Optional[MedicationRead]:
        with self._lock:
            medication = self._medications.get(medication_id)
            return medication.model_copy() if medication else None

    async def create_medication(self, data: MedicationCreate) -> MedicationRead:
        with self._lock:
            if data.created_by is not None and data.created_by not in self._users:
                raise InvalidReferenceError(f"User {data.created_by} not found")
            now = utcnow()
            medication = MedicationRead(
                id=self._next_medication_id,
                created_at=now,
                updated_at=now,
                **data.model_dump(),
            )
            self._next_medication_id += 1
            self._medications[medication.id] = medication
        logger.info("Created medication %s (%s)", medication.id, medication.name)
        return medication.model_copy()

    async def update_medication(self, medication_id: int, data: MedicationUpdate) -> Optional[MedicationRead]:
        changes = data.changes()
        with self._lock:
            existing = self._medications.get(medication_id)
            if existing is None:
                return None
            created_by = changes.get("created_by")
            if created_by is not None and created_by not in self._users:
                raise InvalidReferenceError(f"User {created_by} not found")
            changes["updated_at"] = max(utcnow(), existing.updated_at)
            updated = MedicationRead.model_validate({**existing.model_dump(), **changes})
            self._medications[medication_id] = updated
        logger.info("Updated medication %s", medication_id)
        return updated.model_copy()

    async def delete_medication(self, medication_id: int) -> bool:
        with self._lock:
            if self._medications.pop(medication_id, None) is None:
                return False
            for key in [key for key in self._favorites if key[1] == medication_id]:
                del self._favorites[key]
        logger.info("Deleted medication %s", medication_id)
        return True

    # Favorites

    async def get_user_favorites(self, user_id: int) -> List[MedicationRead]:
        with self._lock:
            return [
                self._medications[medication_id].model_copy()
                for (owner_id, medication_id) in self._favorites
                if owner_id == user_id and medication_id in self._medications
            ]

    async def add_favorite(self, user_id: int, medication_id: int) -> FavoriteRead:
        with self._lock:
            if user_id not in self._users:
                raise InvalidReferenceError(f"User {user_id} not found")
            if medication_id not in self._medications:
                raise InvalidReferenceError(f"Medication {medication_id} not found")
            favorite = FavoriteRead(
                id=self._next_favorite_id,
                user_id=user_id,
                medication_id=medication_id,
                created_at=utcnow(),
            )
            self._next_favorite_id += 1
            # Keyed by the pair, so a repeat call replaces the earlier row.
            self._favorites[(user_id, medication_id)] = favorite
        logger.info("User %s favorited medication %s", user_id, medication_id)
        return favorite.model_copy()

    async def remove_favorite(self, user_id: int, medication_id: int) -> bool:
        with self._lock:
            removed = self._favorites.pop((user_id, medication_id), None) is not None
        if removed:
            logger.info("User %s removed favorite medication %s", user_id, medication_id)
        return removed

    async def is_favorite(self, user_id: int, medication_id: int) -> bool:
        with self._lock:
            return (user_id, medication_id) in self._favorites
