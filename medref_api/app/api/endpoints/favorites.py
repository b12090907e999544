"""
Favorite endpoints.

A favorite links one user to one medication and is identified by
that pair.  Adding the same pair twice leaves a single favorite.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...schemas.favorite import FavoriteKey, FavoriteRead, FavoriteStatus
from ...schemas.medication import MedicationRead
from ...services.base import RecordStore
from ..deps import get_storage

router = APIRouter()


@router.get("/users/{user_id}/favorites", response_model=List[MedicationRead])
async def list_user_favorites(
    user_id: int,
    storage: RecordStore = Depends(get_storage),
) -> List[MedicationRead]:
    """Return the full medication records a user has favorited."""
    return await storage.get_user_favorites(user_id)


@router.post("/favorites", response_model=FavoriteRead, status_code=status.HTTP_201_CREATED)
async def add_favorite(
    favorite_in: FavoriteKey,
    storage: RecordStore = Depends(get_storage),
) -> FavoriteRead:
    return await storage.add_favorite(favorite_in.user_id, favorite_in.medication_id)


@router.delete("/favorites", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    favorite_in: FavoriteKey,
    storage: RecordStore = Depends(get_storage),
) -> Response:
    removed = await storage.remove_favorite(favorite_in.user_id, favorite_in.medication_id)
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorite not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/favorites/check", response_model=FavoriteStatus)
async def check_favorite(
    user_id: int = Query(..., alias="userId"),
    medication_id: int = Query(..., alias="medicationId"),
    storage: RecordStore = Depends(get_storage),
) -> FavoriteStatus:
    return FavoriteStatus(is_favorite=await storage.is_favorite(user_id, medication_id))
