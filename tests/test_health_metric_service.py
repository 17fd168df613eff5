"""Tests for health metrics."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from tests.conftest import InMemoryHealthMetricRepository
from whichfood.domain.health import BloodPressure
from whichfood.errors import InvalidHealthMetric, NotFound
from whichfood.services.health import HealthMetricService

NOW = datetime(2026, 3, 31, 12, 0, tzinfo=UTC)


def test_add_metric_uses_default_unit() -> None:
    service = HealthMetricService(InMemoryHealthMetricRepository())

    metric = service.add_metric(uuid4(), "heart_rate", 72)

    assert metric.unit == "bpm"
    assert metric.is_within_normal_range() is True


def test_blood_pressure_requires_both_values() -> None:
    service = HealthMetricService(InMemoryHealthMetricRepository())

    with pytest.raises(InvalidHealthMetric):
        service.add_metric(uuid4(), "blood_pressure", {"systolic": 120})
    metric = service.add_metric(
        uuid4(), "blood_pressure", {"systolic": 135, "diastolic": 85}
    )
    assert metric.value == BloodPressure(135, 85)
    assert metric.is_within_normal_range() is False


def test_invalid_type_and_value() -> None:
    service = HealthMetricService(InMemoryHealthMetricRepository())

    with pytest.raises(InvalidHealthMetric):
        service.add_metric(uuid4(), "mood", 5)
    with pytest.raises(InvalidHealthMetric):
        service.add_metric(uuid4(), "weight", "heavy")


def test_weight_has_no_normal_range() -> None:
    service = HealthMetricService(InMemoryHealthMetricRepository())

    assert service.add_metric(uuid4(), "weight", 80).is_within_normal_range() is None


def test_stats_trend_and_summary() -> None:
    service = HealthMetricService(InMemoryHealthMetricRepository())
    user_id = uuid4()
    for days_ago, value in ((20, 90), (10, 95), (2, 110)):
        service.add_metric(
            user_id, "blood_glucose", value, recorded_at=NOW - timedelta(days=days_ago)
        )
    service.add_metric(
        user_id, "blood_glucose", 300, recorded_at=NOW - timedelta(days=90)
    )

    stats = service.stats(user_id, "blood_glucose", "month", now=NOW)

    assert stats.count == 3
    assert stats.latest == 110
    assert stats.average == pytest.approx(98.333, abs=0.001)
    assert stats.minimum == 90
    assert stats.maximum == 110
    assert stats.trend == "increasing"
    assert [point.value for point in stats.data_points] == [90, 95, 110]


def test_stats_blood_pressure_componentwise() -> None:
    service = HealthMetricService(InMemoryHealthMetricRepository())
    user_id = uuid4()
    service.add_metric(
        user_id,
        "blood_pressure",
        {"systolic": 140, "diastolic": 90},
        recorded_at=NOW - timedelta(days=3),
    )
    service.add_metric(
        user_id,
        "blood_pressure",
        {"systolic": 120, "diastolic": 80},
        recorded_at=NOW - timedelta(days=1),
    )

    stats = service.stats(user_id, "blood_pressure", "week", now=NOW)

    assert stats.average == BloodPressure(130, 85)
    assert stats.minimum == BloodPressure(120, 80)
    assert stats.trend == "decreasing"


def test_empty_stats_are_stable() -> None:
    service = HealthMetricService(InMemoryHealthMetricRepository())

    stats = service.stats(uuid4(), "weight", "decade", now=NOW)

    assert stats.period == "month"
    assert stats.count == 0
    assert stats.trend == "stable"


def test_update_and_ownership() -> None:
    service = HealthMetricService(InMemoryHealthMetricRepository())
    user_id = uuid4()
    metric = service.add_metric(user_id, "weight", 80)

    updated = service.update_metric(user_id, metric.id, {"value": 78.5})

    assert updated.value == 78.5
    with pytest.raises(NotFound):
        service.update_metric(uuid4(), metric.id, {"value": 70})
    with pytest.raises(InvalidHealthMetric):
        service.update_metric(user_id, metric.id, {"type": "blood_pressure"})
