"""Health metric endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from whichfood.api.dependencies import current_user_id
from whichfood.api.schemas import (  # noqa: TC001
    HealthMetricCreate,
    HealthMetricUpdate,
)
from whichfood.api.serializers import serialize_metric, serialize_metric_stats

if TYPE_CHECKING:
    from whichfood.containers import AppContainer

router = APIRouter(prefix="/api/health", tags=["health"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_metric(
    request: Request,
    body: HealthMetricCreate,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Record a health measurement."""
    container: AppContainer = request.app.state.container
    metric = container.health_metric_service.add_metric(
        user_id,
        body.type,
        body.value,
        unit=body.unit,
        recorded_at=body.recorded_at,
        notes=body.notes,
    )
    return {
        "message": "Health metric added successfully",
        "metric": serialize_metric(metric),
    }


@router.get("")
async def list_metrics(
    request: Request,
    metric_type: str | None = Query(default=None, alias="type"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    metrics = container.health_metric_service.list_metrics(
        user_id, metric_type, start_date, end_date
    )
    return {"metrics": [serialize_metric(metric) for metric in metrics]}


@router.get("/stats")
async def metric_stats(
    request: Request,
    metric_type: str = Query(alias="type"),
    period: str = "month",
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Summary statistics and trend for one metric type."""
    container: AppContainer = request.app.state.container
    stats = container.health_metric_service.stats(user_id, metric_type, period)
    return serialize_metric_stats(stats)


@router.get("/{metric_id}")
async def get_metric(
    request: Request,
    metric_id: UUID,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    metric = container.health_metric_service.get_metric(user_id, metric_id)
    return serialize_metric(metric)


@router.put("/{metric_id}")
async def update_metric(
    request: Request,
    metric_id: UUID,
    body: HealthMetricUpdate,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    metric = container.health_metric_service.update_metric(
        user_id, metric_id, body.model_dump(exclude_unset=True)
    )
    return {
        "message": "Health metric updated successfully",
        "metric": serialize_metric(metric),
    }


@router.delete("/{metric_id}")
async def delete_metric(
    request: Request,
    metric_id: UUID,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.health_metric_service.delete_metric(user_id, metric_id)
    return {"message": "Health metric deleted successfully"}
