"""Domain models for health measurements."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class MetricType(StrEnum):
    BLOOD_PRESSURE = "blood_pressure"
    BLOOD_GLUCOSE = "blood_glucose"
    CHOLESTEROL = "cholesterol"
    HEART_RATE = "heart_rate"
    WEIGHT = "weight"


DEFAULT_UNITS: dict[str, str] = {
    MetricType.BLOOD_PRESSURE: "mmHg",
    MetricType.BLOOD_GLUCOSE: "mg/dL",
    MetricType.CHOLESTEROL: "mg/dL",
    MetricType.HEART_RATE: "bpm",
    MetricType.WEIGHT: "kg",
}

# Inclusive (min, max) normal ranges; weight depends on the individual.
NORMAL_RANGES: dict[str, tuple[float, float] | None] = {
    MetricType.BLOOD_GLUCOSE: (70, 100),
    MetricType.CHOLESTEROL: (0, 200),
    MetricType.HEART_RATE: (60, 100),
    MetricType.WEIGHT: None,
}
SYSTOLIC_RANGE = (90, 120)
DIASTOLIC_RANGE = (60, 80)


@dataclass(frozen=True)
class BloodPressure:
    systolic: float
    diastolic: float


MetricValue = float | BloodPressure


@dataclass(frozen=True)
class HealthMetric:
    """A single measurement recorded by a user."""

    id: UUID
    user_id: UUID
    type: str
    value: MetricValue
    unit: str
    recorded_at: datetime
    notes: str | None = None

    def is_within_normal_range(self) -> bool | None:
        """Return whether the value is in range, or None when undefined."""
        if isinstance(self.value, BloodPressure):
            return (
                SYSTOLIC_RANGE[0] <= self.value.systolic <= SYSTOLIC_RANGE[1]
                and DIASTOLIC_RANGE[0] <= self.value.diastolic <= DIASTOLIC_RANGE[1]
            )
        bounds = NORMAL_RANGES.get(self.type)
        if bounds is None:
            return None
        return bounds[0] <= self.value <= bounds[1]


@dataclass(frozen=True)
class MetricStats:
    """Summary statistics for one metric type over a period."""

    type: str
    period: str
    count: int
    latest: MetricValue | None
    average: MetricValue | None
    minimum: MetricValue | None
    maximum: MetricValue | None
    trend: str
    data_points: list[HealthMetric]
