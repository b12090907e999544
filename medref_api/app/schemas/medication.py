"""
Pydantic schemas for medication records.

A medication carries its clinical alert level, an optional
therapeutic category and free‑text dosage information.  Enumerated
fields are stored as plain strings (``use_enum_values``) so records
can be written to SQLite and compared without conversion.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel

DEFAULT_PAGE_SIZE = 50


class AlertLevel(str, Enum):
    HIGH_ALERT = "HIGH_ALERT"
    ELDER_ALERT = "ELDER_ALERT"
    STANDARD = "STANDARD"


class MedicationCategory(str, Enum):
    ANALGESICS = "analgesics"
    CARDIAC = "cardiac"
    RESPIRATORY = "respiratory"
    NEUROLOGICAL = "neurological"
    ENDOCRINE = "endocrine"


class EnumModel(CamelModel):
    model_config = {**CamelModel.model_config, "use_enum_values": True}


# Fields that may never be null once a record exists.
REQUIRED_FIELDS = (
    "name",
    "classification",
    "alert_level",
    "indications",
    "contraindications",
    "adult_dosage",
)

OPTIONAL_FIELDS = (
    "category",
    "pediatric_dosage",
    "route_of_administration",
    "onset_duration",
    "special_considerations",
    "side_effects",
    "created_by",
)


class MedicationCreate(EnumModel):
    """Schema for creating a medication record."""

    name: str = Field(..., min_length=1, examples=["Naloxone/Narcan"])
    classification: str
    alert_level: AlertLevel
    category: Optional[MedicationCategory] = None
    indications: str
    contraindications: str
    adult_dosage: str
    pediatric_dosage: Optional[str] = None
    route_of_administration: Optional[str] = None
    onset_duration: Optional[str] = None
    special_considerations: Optional[str] = None
    side_effects: Optional[str] = None
    created_by: Optional[int] = Field(None, description="ID of the user who added the record")


class MedicationUpdate(EnumModel):
    """Schema for partially updating a medication.

    Only fields present in the request body are applied.  Optional
    fields may be cleared with an explicit ``null``; required fields
    may be changed but not cleared.
    """

    name: Optional[str] = Field(None, min_length=1)
    classification: Optional[str] = None
    alert_level: Optional[AlertLevel] = None
    category: Optional[MedicationCategory] = None
    indications: Optional[str] = None
    contraindications: Optional[str] = None
    adult_dosage: Optional[str] = None
    pediatric_dosage: Optional[str] = None
    route_of_administration: Optional[str] = None
    onset_duration: Optional[str] = None
    special_considerations: Optional[str] = None
    side_effects: Optional[str] = None
    created_by: Optional[int] = None

    @field_validator(*REQUIRED_FIELDS)
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("field may not be null")
        return value

    def changes(self) -> dict:
        """Return only the fields the caller explicitly provided."""
        return self.model_dump(exclude_unset=True)


class MedicationRead(EnumModel):
    """Schema for reading a medication record."""

    id: int
    name: str
    classification: str
    alert_level: AlertLevel
    category: Optional[MedicationCategory] = None
    indications: str
    contraindications: str
    adult_dosage: str
    pediatric_dosage: Optional[str] = None
    route_of_administration: Optional[str] = None
    onset_duration: Optional[str] = None
    special_considerations: Optional[str] = None
    side_effects: Optional[str] = None
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class MedicationFilters(EnumModel):
    """Filter and pagination options for listing medications.

    ``search`` is a case‑insensitive substring matched against name,
    indications, contraindications and classification (any of them).
    Distinct filters combine with AND.  Results are sorted by name
    before ``offset`` and ``limit`` are applied.  ``alert_level`` and
    ``category`` are exact matches; a value outside the enumerations
    matches no record.
    """

    search: Optional[str] = None
    alert_level: Optional[str] = None
    category: Optional[str] = None
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1)
    offset: int = Field(0, ge=0)
