"""
Top‑level API router.

Aggregates the domain routers (auth, medications, favorites, health)
under a single router that ``main.create_app`` mounts at ``/api``.
"""

from fastapi import APIRouter

from .endpoints import auth, favorites, health, medications

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(medications.router, prefix="/medications", tags=["medications"])
# The favorites router defines both ``/favorites`` and
# ``/users/{user_id}/favorites``, so it is included without a prefix.
router.include_router(favorites.router, tags=["favorites"])
router.include_router(health.router, tags=["health"])
