"""Meal logging and recommendation endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from whichfood.api.dependencies import current_user_id
from whichfood.api.schemas import MealCreate, MealUpdate  # noqa: TC001
from whichfood.api.serializers import (
    serialize_meal,
    serialize_meal_stats,
    serialize_recommendations,
)
from whichfood.domain.meals import MealType  # noqa: TC001

if TYPE_CHECKING:
    from whichfood.containers import AppContainer

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_meal(
    request: Request,
    body: MealCreate,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Log a meal for the caller."""
    container: AppContainer = request.app.state.container
    meal = container.meal_log_service.log_meal(
        user_id,
        body.meal_type,
        [food.model_dump() for food in body.foods],
        logged_at=body.logged_at,
        notes=body.notes,
    )
    return {"message": "Meal logged successfully", "meal": serialize_meal(meal)}


@router.get("")
async def list_meals(
    request: Request,
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    meal_type: MealType | None = Query(default=None, alias="mealType"),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """List meals in a date range (defaults to today, UTC)."""
    container: AppContainer = request.app.state.container
    meals = container.meal_log_service.list_meals(
        user_id, start_date, end_date, meal_type
    )
    return {"meals": [serialize_meal(meal) for meal in meals]}


@router.get("/stats")
async def meal_stats(
    request: Request,
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Nutrient totals against goals for a period."""
    container: AppContainer = request.app.state.container
    profile = container.user_service.get_profile(user_id)
    totals = container.intake_service.period_totals(user_id, start_date, end_date)
    return serialize_meal_stats(totals, container.user_service.goals(profile))


@router.get("/recommendations")
async def recommendations(
    request: Request,
    meal_type: MealType | None = Query(default=None, alias="mealType"),
    limit: int | None = Query(default=None, ge=1, le=50),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Foods that close the caller's largest nutrient gap."""
    container: AppContainer = request.app.state.container
    result = await container.recommendation_service.recommend(
        user_id, meal_type=meal_type, limit=limit
    )
    return serialize_recommendations(result)


@router.get("/{meal_id}")
async def get_meal(
    request: Request,
    meal_id: UUID,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return serialize_meal(container.meal_log_service.get_meal(user_id, meal_id))


@router.put("/{meal_id}")
async def update_meal(
    request: Request,
    meal_id: UUID,
    body: MealUpdate,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Partially update a meal; totals are recomputed."""
    container: AppContainer = request.app.state.container
    meal = container.meal_log_service.update_meal(
        user_id, meal_id, body.model_dump(exclude_unset=True)
    )
    return {"message": "Meal updated successfully", "meal": serialize_meal(meal)}


@router.delete("/{meal_id}")
async def delete_meal(
    request: Request,
    meal_id: UUID,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.meal_log_service.delete_meal(user_id, meal_id)
    return {"message": "Meal deleted successfully"}
