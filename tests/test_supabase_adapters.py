"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from whichfood.adapters.supabase_health_metric_repository import (
    SupabaseHealthMetricRepository,
)
from whichfood.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from whichfood.adapters.supabase_user_repository import SupabaseUserRepository
from whichfood.domain.health import BloodPressure
from whichfood.domain.meals import FoodEntry
from whichfood.domain.nutrition import NutrientVector


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "select"
        self.last_filters = []
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        self.last_filters = []
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        self.last_filters = []
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _user_row(user_id: str) -> dict[str, object]:
    return {
        "id": user_id,
        "name": "Alex",
        "email": "alex@example.com",
        "password_hash": "hash",
        "age": 30,
        "gender": "male",
        "height_cm": 175,
        "weight_kg": 80,
        "activity_level": "sedentary",
        "target_weight_kg": None,
        "allergies": ["peanuts"],
        "dietary_restrictions": None,
        "health_conditions": ["asthma"],
        "medications": [],
        "created_at": "2026-03-01T10:00:00+00:00",
    }


def test_supabase_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = str(uuid4())
    users_table.queue("insert", [_user_row(user_id)])
    users_table.queue("select", [_user_row(user_id)])

    repository = SupabaseUserRepository(client)
    created = repository.create_user({"email": "alex@example.com"})
    fetched = repository.get_by_email("alex@example.com")

    assert str(created.id) == user_id
    assert fetched is not None
    assert fetched.allergies == frozenset({"peanuts"})
    assert fetched.dietary_restrictions == frozenset()
    assert fetched.health_conditions == ("asthma",)
    assert fetched.created_at == datetime(2026, 3, 1, 10, tzinfo=UTC)
    assert users_table.last_filters == [("eq", "email", "alex@example.com")]


def test_supabase_user_repository_missing_and_failed_insert() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseUserRepository(client)

    assert repository.get_by_id(uuid4()) is None
    with pytest.raises(RuntimeError):
        repository.create_user({"email": "x@example.com"})


def test_supabase_meal_log_repository_writes_foods_and_totals() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_logs")
    meal_id = str(uuid4())
    user_id = uuid4()
    logged_at = datetime(2026, 3, 10, 8, tzinfo=UTC)
    entry = FoodEntry("fdc-1", "Eggs", 2.0, NutrientVector(calories=70, protein=6))
    table.queue(
        "insert",
        [
            {
                "id": meal_id,
                "user_id": str(user_id),
                "meal_type": "breakfast",
                "logged_at": logged_at.isoformat(),
                "foods": [
                    {
                        "food_id": "fdc-1",
                        "name": "Eggs",
                        "quantity": 2.0,
                        "measure": "100g unit",
                        "nutrients": entry.nutrients.to_tagged(),
                    }
                ],
                "notes": None,
            }
        ],
    )

    repository = SupabaseMealLogRepository(client)
    meal = repository.create_meal(user_id, "breakfast", logged_at, [entry], None)

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["total_calories"] == 140
    assert table.last_payload["total_protein_g"] == 12
    assert table.last_payload["foods"][0]["nutrients"]["protein"] == {
        "value": 6,
        "unit": "g",
    }
    assert meal.foods == (entry,)
    assert meal.total_nutrients.calories == 140


def test_supabase_meal_log_repository_list_filters() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_logs")
    user_id = uuid4()
    start = datetime(2026, 3, 7, tzinfo=UTC)
    end = datetime(2026, 3, 10, tzinfo=UTC)

    repository = SupabaseMealLogRepository(client)
    assert repository.list_meals(user_id, start, end, "dinner") == []
    assert table.last_filters == [
        ("eq", "user_id", str(user_id)),
        ("gte", "logged_at", start.isoformat()),
        ("lte", "logged_at", end.isoformat()),
        ("eq", "meal_type", "dinner"),
    ]
    assert table.last_order == ("logged_at", True)


def test_supabase_health_metric_repository_blood_pressure() -> None:
    client = FakeSupabaseClient()
    table = client.table("health_metrics")
    metric_id = str(uuid4())
    user_id = uuid4()
    recorded_at = datetime(2026, 3, 10, 7, tzinfo=UTC)
    table.queue(
        "insert",
        [
            {
                "id": metric_id,
                "user_id": str(user_id),
                "type": "blood_pressure",
                "value": {"systolic": 120, "diastolic": 80},
                "unit": "mmHg",
                "recorded_at": recorded_at.isoformat(),
                "notes": None,
            }
        ],
    )
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "type": "weight",
                "value": 79.5,
                "unit": "kg",
                "recorded_at": recorded_at.isoformat(),
                "notes": "morning",
            }
        ],
    )

    repository = SupabaseHealthMetricRepository(client)
    created = repository.create_metric(
        user_id, "blood_pressure", BloodPressure(120, 80), "mmHg", recorded_at, None
    )
    assert table.last_payload["value"] == {"systolic": 120, "diastolic": 80}
    assert created.value == BloodPressure(120, 80)

    listed = repository.list_metrics(user_id, "weight")
    assert listed[0].value == 79.5
    assert listed[0].notes == "morning"
    assert table.last_order == ("recorded_at", True)
