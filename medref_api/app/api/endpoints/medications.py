"""
Medication endpoints.

Listing supports free‑text search, alert level and category filters
and offset pagination; results are always ordered by name.  Single
records can be fetched, created, partially updated and deleted.

Query and path values are parsed leniently: an unknown alert level or
category simply matches nothing, a missing or non‑positive ``limit``
means the default page size, and an id that is not an integer cannot
name a record, so it is reported as not found.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...core.exceptions import NotFoundError
from ...schemas.medication import (
    DEFAULT_PAGE_SIZE,
    MedicationCreate,
    MedicationFilters,
    MedicationRead,
    MedicationUpdate,
)
from ...services.base import RecordStore
from ..deps import get_storage

router = APIRouter()


def parse_int(value: Optional[str]) -> Optional[int]:
    """Return ``value`` as an integer, or ``None`` if it is not one."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_medication_id(raw_id: str) -> int:
    medication_id = parse_int(raw_id)
    if medication_id is None:
        raise NotFoundError("Medication not found")
    return medication_id


@router.get("", response_model=List[MedicationRead])
async def list_medications(
    search: Optional[str] = Query(None),
    alert_level: Optional[str] = Query(None, alias="alertLevel"),
    category: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    storage: RecordStore = Depends(get_storage),
) -> List[MedicationRead]:
    """Return medications matching all given filters.

    ``search`` matches name, indications, contraindications or
    classification, ignoring case.
    """
    page_size = parse_int(limit)
    start = parse_int(offset)
    filters = MedicationFilters(
        search=search or None,
        alert_level=alert_level or None,
        category=category or None,
        limit=page_size if page_size and page_size > 0 else DEFAULT_PAGE_SIZE,
        offset=start if start and start > 0 else 0,
    )
    return await storage.get_medications(filters)


@router.get("/{medication_id}", response_model=MedicationRead)
async def get_medication(
    medication_id: str,
    storage: RecordStore = Depends(get_storage),
) -> MedicationRead:
    medication = await storage.get_medication(parse_medication_id(medication_id))
    if medication is None:
        raise NotFoundError("Medication not found")
    return medication


@router.post("", response_model=MedicationRead, status_code=status.HTTP_201_CREATED)
async def create_medication(
    medication_in: MedicationCreate,
    storage: RecordStore = Depends(get_storage),
) -> MedicationRead:
    return await storage.create_medication(medication_in)


@router.put("/{medication_id}", response_model=MedicationRead)
async def update_medication(
    medication_id: str,
    medication_in: MedicationUpdate,
    storage: RecordStore = Depends(get_storage),
) -> MedicationRead:
    """Apply the fields present in the body; omitted fields keep their values."""
    medication = await storage.update_medication(parse_medication_id(medication_id), medication_in)
    if medication is None:
        raise NotFoundError("Medication not found")
    return medication


@router.delete("/{medication_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_medication(
    medication_id: str,
    storage: RecordStore = Depends(get_storage),
) -> Response:
    deleted = await storage.delete_medication(parse_medication_id(medication_id))
    if not deleted:
        raise NotFoundError("Medication not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
