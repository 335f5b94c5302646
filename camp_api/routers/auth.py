"""Auth router - current staff session.

Login itself (Google OAuth / invite codes) is handled by the frontend auth
layer, which issues the session cookie this service verifies.
"""

from fastapi import APIRouter, Depends

from camp_api.core.deps import get_current_user
from camp_api.schemas.auth import MeResponse

router = APIRouter(tags=["auth"])


@router.get("/me", response_model=MeResponse)
def get_me(user=Depends(get_current_user)):
    """Return the signed-in staff user."""
    return MeResponse.model_validate(user)
