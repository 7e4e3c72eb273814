"""User profile routes."""

from fastapi import APIRouter, Depends

from ...db.repositories import ProfileRepository
from ...models.identity import Identity
from ..deps import get_identity, get_profile_repo
from ..schemas import ProfileUpdate

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
async def get_profile(
    identity: Identity = Depends(get_identity),
    repo: ProfileRepository = Depends(get_profile_repo),
):
    """Get the caller's profile, creating it on first visit."""
    profile = await repo.get_or_create(identity)
    return {"profile": profile.to_dict()}


@router.put("")
async def save_profile(
    body: ProfileUpdate,
    identity: Identity = Depends(get_identity),
    repo: ProfileRepository = Depends(get_profile_repo),
):
    """Save or update the caller's username."""
    profile = await repo.update_username(identity, body.username)
    return {"profile": profile.to_dict()}
