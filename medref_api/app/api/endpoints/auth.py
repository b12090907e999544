"""
Authentication endpoints.

Sign‑up registers a user after checking the email is unused.  Sign‑in
is a plain lookup by email: any submitted password is ignored and no
token is issued.  Clients keep the returned user as their session
identity.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...core.exceptions import ConflictError
from ...schemas.user import AuthResponse, SignInRequest, UserCreate, UserSummary
from ...services.base import RecordStore
from ..deps import get_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/signup", response_model=AuthResponse)
async def signup(
    user_in: UserCreate,
    storage: RecordStore = Depends(get_storage),
) -> AuthResponse:
    """Register a new user.

    Returns HTTP 400 when a user with the same email already exists.
    """
    if await storage.get_user_by_email(user_in.email):
        raise ConflictError("User already exists")
    user = await storage.create_user(user_in)
    logger.info("Signed up user %s", user.id)
    return AuthResponse(user=UserSummary.model_validate(user))


@router.post("/signin", response_model=AuthResponse)
async def signin(
    credentials: SignInRequest,
    storage: RecordStore = Depends(get_storage),
) -> AuthResponse:
    """Look a user up by email.

    Returns HTTP 401 if no user has that email.
    """
    user = await storage.get_user_by_email(credentials.email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return AuthResponse(user=UserSummary.model_validate(user))
