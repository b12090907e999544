"""
Application package initializer.

The project is organised into a few logical pieces: ``core`` holds
configuration, logging, error types and the SQLite schema; ``schemas``
holds the pydantic payload models; ``services`` holds the record
store contract and its two backends; ``api`` exposes the REST routes.
"""

from .main import app  # noqa: F401
