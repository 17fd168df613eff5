"""Food search endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from whichfood.api.dependencies import current_user_id
from whichfood.api.serializers import serialize_candidate

if TYPE_CHECKING:
    from whichfood.containers import AppContainer

router = APIRouter(
    prefix="/api/food", tags=["food"], dependencies=[Depends(current_user_id)]
)


@router.get("/search")
async def search_food(
    request: Request,
    query: str | None = None,
) -> dict[str, object]:
    """Search the configured food database."""
    container: AppContainer = request.app.state.container
    if not query or not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )
    foods = await container.nutrition_service.search(
        query.strip(), limit=container.settings.search_page_size
    )
    return {"foods": [serialize_candidate(food) for food in foods]}
