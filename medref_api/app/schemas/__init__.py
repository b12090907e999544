"""
Pydantic schema definitions for API payloads.

Each domain (users, medications, favorites) defines its own pydantic
models for request and response bodies.  Python attributes are
snake_case; the JSON wire format is camelCase through alias
generation, and both spellings are accepted on input.
"""
