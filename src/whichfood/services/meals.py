"""Meal logging service."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from whichfood.domain.meals import FoodEntry, LoggedMeal, MealType
from whichfood.domain.nutrition import NutrientVector
from whichfood.errors import InvalidMealLog, InvalidNutrients, NotFound


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_type: str,
        logged_at: datetime,
        foods: list[FoodEntry],
        notes: str | None,
    ) -> LoggedMeal:
        """Insert a meal with its totals and return it."""

    def get_meal(self, meal_id: UUID) -> LoggedMeal | None:
        """Return a meal by id."""

    def list_meals(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime,
        meal_type: str | None = None,
    ) -> list[LoggedMeal]:
        """Return a user's meals logged within [start, end], newest first."""

    def update_meal(self, meal: LoggedMeal) -> LoggedMeal:
        """Persist changed fields and recomputed totals."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal."""


@dataclass
class MealLogService:
    """Service that validates, totals and persists meal logs."""

    repository: MealLogRepository

    def log_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_type: str,
        foods: list[dict[str, object]],
        logged_at: datetime | None = None,
        notes: str | None = None,
    ) -> LoggedMeal:
        """Validate food entries and persist a new meal."""
        entries = parse_food_entries(foods)
        return self.repository.create_meal(
            user_id=user_id,
            meal_type=_parse_meal_type(meal_type),
            logged_at=_as_utc(logged_at) if logged_at else datetime.now(tz=UTC),
            foods=entries,
            notes=notes,
        )

    def list_meals(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: str | None = None,
        now: datetime | None = None,
    ) -> list[LoggedMeal]:
        """List meals in a range, defaulting to the current UTC day."""
        if start is None and end is None:
            start, end = utc_day_bounds(now or datetime.now(tz=UTC))
        start = _as_utc(start) if start else datetime.min.replace(tzinfo=UTC)
        end = _as_utc(end) if end else datetime.now(tz=UTC)
        return self.repository.list_meals(
            user_id,
            start,
            end,
            _parse_meal_type(meal_type) if meal_type else None,
        )

    def get_meal(self, user_id: UUID, meal_id: UUID) -> LoggedMeal:
        """Return a meal owned by the user."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id:
            raise NotFound("Meal log not found")
        return meal

    def update_meal(
        self, user_id: UUID, meal_id: UUID, changes: dict[str, object]
    ) -> LoggedMeal:
        """Apply a partial update; totals follow the new food list."""
        meal = self.get_meal(user_id, meal_id)
        foods = meal.foods
        if changes.get("foods") is not None:
            foods = tuple(parse_food_entries(changes["foods"]))
        logged_at = changes.get("logged_at")
        meal_type = changes.get("meal_type")
        updated = LoggedMeal(
            id=meal.id,
            user_id=meal.user_id,
            meal_type=_parse_meal_type(meal_type) if meal_type else meal.meal_type,
            logged_at=_as_utc(logged_at) if logged_at else meal.logged_at,
            foods=foods,
            notes=changes["notes"] if "notes" in changes else meal.notes,
        )
        return self.repository.update_meal(updated)

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a meal owned by the user."""
        self.get_meal(user_id, meal_id)
        self.repository.delete_meal(meal_id)


def parse_food_entries(foods: object) -> list[FoodEntry]:
    """Validate raw food payloads into entries."""
    if not isinstance(foods, list) or not foods:
        raise InvalidMealLog("Please provide at least one food item")
    return [_parse_food_entry(item) for item in foods]


def utc_day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Return the first and last instant of the UTC calendar day."""
    start = _as_utc(moment).replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1) - timedelta(microseconds=1)


def _parse_food_entry(item: object) -> FoodEntry:
    if not isinstance(item, dict):
        raise InvalidMealLog("Each food item must be an object")
    name = str(item.get("name") or "").strip()
    if not name:
        raise InvalidMealLog("Each food item needs a name")
    quantity = item.get("quantity")
    if (
        isinstance(quantity, bool)
        or not isinstance(quantity, int | float)
        or quantity <= 0
    ):
        raise InvalidMealLog(f"Quantity for {name!r} must be greater than zero")
    try:
        nutrients = NutrientVector.from_mapping(item.get("nutrients"))
    except InvalidNutrients as exc:
        raise InvalidMealLog(f"Invalid nutrients for {name!r}: {exc.message}") from exc
    return FoodEntry(
        food_id=str(item.get("food_id") or ""),
        name=name,
        quantity=float(quantity),
        nutrients=nutrients,
        measure=str(item.get("measure") or "100g unit"),
    )


def _parse_meal_type(value: object) -> str:
    try:
        return MealType(value).value
    except ValueError as exc:
        raise InvalidMealLog(f"Unknown meal type: {value!r}") from exc


def _as_utc(value: object) -> datetime:
    if not isinstance(value, datetime):
        raise InvalidMealLog(f"Expected a datetime, got {value!r}")
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
