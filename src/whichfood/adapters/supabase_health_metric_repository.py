"""Supabase repository for health metrics."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from whichfood.domain.health import BloodPressure, HealthMetric, MetricValue
from whichfood.services.health import HealthMetricRepository

_METRIC_COLUMNS = "id, user_id, type, value, unit, recorded_at, notes"


@dataclass
class SupabaseHealthMetricRepository(HealthMetricRepository):
    """Supabase implementation for health metrics; ``value`` is jsonb."""

    client: Client

    def create_metric(  # noqa: PLR0913
        self,
        user_id: UUID,
        metric_type: str,
        value: MetricValue,
        unit: str,
        recorded_at: datetime,
        notes: str | None,
    ) -> HealthMetric:
        """Create a metric row and return it."""
        response = (
            self.client.table("health_metrics")
            .insert(
                {
                    "user_id": str(user_id),
                    "type": metric_type,
                    "value": _serialize_value(value),
                    "unit": unit,
                    "recorded_at": recorded_at.isoformat(),
                    "notes": notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create health metric")
        return _parse_metric(response.data[0])

    def get_metric(self, metric_id: UUID) -> HealthMetric | None:
        """Return a metric by id."""
        response = (
            self.client.table("health_metrics")
            .select(_METRIC_COLUMNS)
            .eq("id", str(metric_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_metric(response.data[0])

    def list_metrics(
        self,
        user_id: UUID,
        metric_type: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[HealthMetric]:
        """Return a user's metrics, newest first."""
        query = (
            self.client.table("health_metrics")
            .select(_METRIC_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if metric_type:
            query = query.eq("type", metric_type)
        if start is not None:
            query = query.gte("recorded_at", start.isoformat())
        if end is not None:
            query = query.lte("recorded_at", end.isoformat())
        response = query.order("recorded_at", desc=True).execute()
        return [_parse_metric(row) for row in response.data or []]

    def update_metric(self, metric: HealthMetric) -> HealthMetric:
        """Update a metric row."""
        response = (
            self.client.table("health_metrics")
            .update(
                {
                    "type": metric.type,
                    "value": _serialize_value(metric.value),
                    "unit": metric.unit,
                    "recorded_at": metric.recorded_at.isoformat(),
                    "notes": metric.notes,
                }
            )
            .eq("id", str(metric.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update health metric")
        return _parse_metric(response.data[0])

    def delete_metric(self, metric_id: UUID) -> None:
        """Delete a metric row."""
        self.client.table("health_metrics").delete().eq(
            "id", str(metric_id)
        ).execute()


def _serialize_value(value: MetricValue) -> object:
    if isinstance(value, BloodPressure):
        return {"systolic": value.systolic, "diastolic": value.diastolic}
    return value


def _parse_value(raw: object) -> MetricValue:
    if isinstance(raw, dict):
        return BloodPressure(float(raw["systolic"]), float(raw["diastolic"]))
    return float(raw)


def _parse_metric(row: dict[str, object]) -> HealthMetric:
    return HealthMetric(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        type=str(row["type"]),
        value=_parse_value(row["value"]),
        unit=str(row.get("unit") or ""),
        recorded_at=datetime.fromisoformat(str(row["recorded_at"])),
        notes=row.get("notes"),
    )
