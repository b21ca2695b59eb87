"""Endpoint confirming the caller is signed in."""

from fastapi import APIRouter, Depends

from tutorcenter.web.auth import require_user
from tutorcenter.web.schemas import ProtectedResponse

router = APIRouter(tags=["auth"])


@router.get("/protected", response_model=ProtectedResponse)
async def protected(user_id: str = Depends(require_user)) -> ProtectedResponse:
    """Confirm the request carries a valid identity."""
    return ProtectedResponse(message="You are authenticated!", user_id=user_id)
