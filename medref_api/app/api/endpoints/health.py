"""Health endpoint reporting which storage backend is serving requests."""

from typing import Dict

from fastapi import APIRouter, Depends

from ...services.base import RecordStore
from ..deps import get_storage

router = APIRouter()


@router.get("/health", response_model=Dict[str, str])
async def health(storage: RecordStore = Depends(get_storage)) -> Dict[str, str]:
    return {"status": "ok", "storage": storage.backend_name}
