"""
Error types shared by the record store and the API layer.

Stores raise these; ``main.create_app`` registers handlers that turn
them into JSON responses with the matching status code.
"""


class RecordStoreError(Exception):
    """Base class for record store failures."""


class NotFoundError(RecordStoreError):
    """An id or (user, medication) pair does not resolve to a record."""


class ConflictError(RecordStoreError):
    """A record with the same unique key already exists."""


class StorageUnavailable(RecordStoreError):
    """The durable backend cannot be reached."""


class InvalidReferenceError(RecordStoreError):
    """A payload points at a user or medication that does not exist."""
