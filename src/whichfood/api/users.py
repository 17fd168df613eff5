"""User registration and profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from whichfood.api.dependencies import current_user_id
from whichfood.api.schemas import UserCreate, UserUpdate  # noqa: TC001
from whichfood.api.serializers import serialize_profile

if TYPE_CHECKING:
    from whichfood.containers import AppContainer

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_user(
    request: Request,
    body: UserCreate,
) -> dict[str, object]:
    """Register a user and record their initial measurements."""
    container: AppContainer = request.app.state.container
    service = container.user_service
    profile = service.register(body.model_dump())
    return {
        "message": "User registered successfully",
        "user": serialize_profile(profile, service.health_summary(profile)),
    }


@router.get("/profile")
async def get_profile(
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return the caller's profile and health summary."""
    container: AppContainer = request.app.state.container
    service = container.user_service
    profile = service.get_profile(user_id)
    return serialize_profile(profile, service.health_summary(profile))


@router.put("/profile")
async def update_profile(
    request: Request,
    body: UserUpdate,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Apply a partial profile update."""
    container: AppContainer = request.app.state.container
    service = container.user_service
    profile = service.update_profile(user_id, body.model_dump(exclude_unset=True))
    return {
        "message": "Profile updated successfully",
        "user": serialize_profile(profile, service.health_summary(profile)),
    }
