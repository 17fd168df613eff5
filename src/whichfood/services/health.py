"""Health measurement service."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from whichfood.domain.health import (
    DEFAULT_UNITS,
    BloodPressure,
    HealthMetric,
    MetricStats,
    MetricType,
    MetricValue,
)
from whichfood.errors import InvalidHealthMetric, NotFound

PERIOD_DAYS = {"week": 7}
DECEMBER = 12
MIN_TREND_POINTS = 2
DEFAULT_PERIOD = "month"
TREND_THRESHOLD_SHARE = 0.1


class HealthMetricRepository(Protocol):
    """Persistence interface for health metrics."""

    def create_metric(  # noqa: PLR0913
        self,
        user_id: UUID,
        metric_type: str,
        value: MetricValue,
        unit: str,
        recorded_at: datetime,
        notes: str | None,
    ) -> HealthMetric:
        """Insert a metric and return it."""

    def get_metric(self, metric_id: UUID) -> HealthMetric | None:
        """Return a metric by id."""

    def list_metrics(
        self,
        user_id: UUID,
        metric_type: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[HealthMetric]:
        """Return a user's metrics, newest first."""

    def update_metric(self, metric: HealthMetric) -> HealthMetric:
        """Persist a changed metric."""

    def delete_metric(self, metric_id: UUID) -> None:
        """Delete a metric."""


@dataclass
class HealthMetricService:
    """Service for recording and summarizing health measurements."""

    repository: HealthMetricRepository

    def add_metric(  # noqa: PLR0913
        self,
        user_id: UUID,
        metric_type: str,
        value: object,
        unit: str | None = None,
        recorded_at: datetime | None = None,
        notes: str | None = None,
    ) -> HealthMetric:
        """Validate and record a measurement."""
        parsed_type = parse_metric_type(metric_type)
        return self.repository.create_metric(
            user_id=user_id,
            metric_type=parsed_type,
            value=parse_metric_value(parsed_type, value),
            unit=unit or DEFAULT_UNITS[parsed_type],
            recorded_at=recorded_at or datetime.now(tz=UTC),
            notes=notes,
        )

    def list_metrics(
        self,
        user_id: UUID,
        metric_type: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[HealthMetric]:
        parsed_type = parse_metric_type(metric_type) if metric_type else None
        return self.repository.list_metrics(user_id, parsed_type, start, end)

    def get_metric(self, user_id: UUID, metric_id: UUID) -> HealthMetric:
        """Return a metric owned by the user."""
        metric = self.repository.get_metric(metric_id)
        if metric is None or metric.user_id != user_id:
            raise NotFound("Health metric not found or access denied")
        return metric

    def update_metric(
        self, user_id: UUID, metric_id: UUID, changes: dict[str, object]
    ) -> HealthMetric:
        """Apply a partial update and re-validate the value against its type."""
        metric = self.get_metric(user_id, metric_id)
        metric_type = (
            parse_metric_type(changes["type"]) if changes.get("type") else metric.type
        )
        raw_value = changes.get("value")
        if raw_value is None:
            raw_value = metric.value
        updated = HealthMetric(
            id=metric.id,
            user_id=metric.user_id,
            type=metric_type,
            value=parse_metric_value(metric_type, raw_value),
            unit=str(changes.get("unit") or metric.unit),
            recorded_at=changes.get("recorded_at") or metric.recorded_at,
            notes=changes["notes"] if "notes" in changes else metric.notes,
        )
        return self.repository.update_metric(updated)

    def delete_metric(self, user_id: UUID, metric_id: UUID) -> None:
        self.get_metric(user_id, metric_id)
        self.repository.delete_metric(metric_id)

    def stats(
        self,
        user_id: UUID,
        metric_type: str,
        period: str = DEFAULT_PERIOD,
        now: datetime | None = None,
    ) -> MetricStats:
        """Summarize one metric type over a week, month or year."""
        parsed_type = parse_metric_type(metric_type)
        end = now or datetime.now(tz=UTC)
        period = period.lower() if period else DEFAULT_PERIOD
        if period not in {"week", "month", "year"}:
            period = DEFAULT_PERIOD
        start = _period_start(end, period)
        metrics = sorted(
            self.repository.list_metrics(user_id, parsed_type, start, end),
            key=lambda metric: metric.recorded_at,
        )
        return summarize(parsed_type, period, metrics)


def parse_metric_type(value: object) -> str:
    try:
        return MetricType(value).value
    except ValueError as exc:
        raise InvalidHealthMetric(f"Invalid metric type: {value!r}") from exc


def parse_metric_value(metric_type: str, value: object) -> MetricValue:
    """Validate a raw value for its metric type."""
    if metric_type == MetricType.BLOOD_PRESSURE:
        if isinstance(value, BloodPressure):
            return value
        if isinstance(value, dict):
            systolic = value.get("systolic")
            diastolic = value.get("diastolic")
            if _is_number(systolic) and _is_number(diastolic):
                return BloodPressure(float(systolic), float(diastolic))
        raise InvalidHealthMetric(
            "Blood pressure requires systolic and diastolic values"
        )
    if not _is_number(value):
        raise InvalidHealthMetric(f"{metric_type} value must be a number")
    return float(value)


def summarize(
    metric_type: str, period: str, metrics: list[HealthMetric]
) -> MetricStats:
    """Compute count, latest, average, min, max and trend (chronological input)."""
    if not metrics:
        return MetricStats(
            type=metric_type,
            period=period,
            count=0,
            latest=None,
            average=None,
            minimum=None,
            maximum=None,
            trend="stable",
            data_points=[],
        )
    if metric_type == MetricType.BLOOD_PRESSURE:
        systolic = [metric.value.systolic for metric in metrics]
        diastolic = [metric.value.diastolic for metric in metrics]
        average: MetricValue = BloodPressure(
            sum(systolic) / len(systolic), sum(diastolic) / len(diastolic)
        )
        minimum: MetricValue = BloodPressure(min(systolic), min(diastolic))
        maximum: MetricValue = BloodPressure(max(systolic), max(diastolic))
        series = systolic
    else:
        series = [float(metric.value) for metric in metrics]
        average = sum(series) / len(series)
        minimum = min(series)
        maximum = max(series)
    return MetricStats(
        type=metric_type,
        period=period,
        count=len(metrics),
        latest=metrics[-1].value,
        average=average,
        minimum=minimum,
        maximum=maximum,
        trend=_trend(series),
        data_points=metrics,
    )


def _trend(series: list[float]) -> str:
    if len(series) < MIN_TREND_POINTS:
        return "stable"
    threshold = (max(series) - min(series)) * TREND_THRESHOLD_SHARE
    first, last = series[0], series[-1]
    if last > first + threshold:
        return "increasing"
    if last < first - threshold:
        return "decreasing"
    return "stable"


def _period_start(end: datetime, period: str) -> datetime:
    if period in PERIOD_DAYS:
        start = end - timedelta(days=PERIOD_DAYS[period])
    elif period == "year":
        start = _shift_months(end, -12)
    else:
        start = _shift_months(end, -1)
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def _shift_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, _days_in_month(year, month))
    return moment.replace(year=year, month=month, day=day)


def _days_in_month(year: int, month: int) -> int:
    if month == DECEMBER:
        return 31
    first = datetime(year, month, 1)
    following = datetime(year, month + 1, 1)
    return (following - first).days


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)
