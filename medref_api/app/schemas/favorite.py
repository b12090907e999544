"""Pydantic schemas for user favorites."""

from datetime import datetime

from .base import CamelModel


class FavoriteKey(CamelModel):
    """The (user, medication) pair that identifies a favorite."""

    user_id: int
    medication_id: int


class FavoriteRead(CamelModel):
    id: int
    user_id: int
    medication_id: int
    created_at: datetime


class FavoriteStatus(CamelModel):
    is_favorite: bool
