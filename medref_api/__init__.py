"""
Top‑level package for the Medication Reference API.

This file makes ``medref_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``medref_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
