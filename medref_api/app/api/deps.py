"""FastAPI dependencies shared by the endpoint modules."""

from fastapi import Request

from ..services.base import RecordStore


def get_storage(request: Request) -> RecordStore:
    """Return the record store chosen at startup for this application."""
    return request.app.state.storage
