"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from whichfood.domain.meals import FoodEntry, LoggedMeal
from whichfood.domain.nutrition import NutrientVector
from whichfood.services.meals import MealLogRepository

_MEAL_COLUMNS = "id, user_id, meal_type, logged_at, foods, notes"


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs.

    Food entries are stored in a ``foods`` jsonb column; the ``total_*``
    columns are a denormalized copy refreshed on every write.
    """

    client: Client

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_type: str,
        logged_at: datetime,
        foods: list[FoodEntry],
        notes: str | None,
    ) -> LoggedMeal:
        """Create a meal log row and return it."""
        row = {
            "user_id": str(user_id),
            "meal_type": meal_type,
            "logged_at": logged_at.isoformat(),
            "foods": [_serialize_entry(entry) for entry in foods],
            "notes": notes,
        }
        row.update(_totals_columns(foods))
        response = self.client.table("meal_logs").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal log")
        return _parse_meal(response.data[0])

    def get_meal(self, meal_id: UUID) -> LoggedMeal | None:
        """Return a meal log by id."""
        response = (
            self.client.table("meal_logs")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime,
        meal_type: str | None = None,
    ) -> list[LoggedMeal]:
        """Return meals in [start, end], newest first."""
        query = (
            self.client.table("meal_logs")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lte("logged_at", end.isoformat())
        )
        if meal_type:
            query = query.eq("meal_type", meal_type)
        response = query.order("logged_at", desc=True).execute()
        return [_parse_meal(row) for row in response.data or []]

    def update_meal(self, meal: LoggedMeal) -> LoggedMeal:
        """Update a meal log and its totals."""
        row = {
            "meal_type": meal.meal_type,
            "logged_at": meal.logged_at.isoformat(),
            "foods": [_serialize_entry(entry) for entry in meal.foods],
            "notes": meal.notes,
        }
        row.update(_totals_columns(list(meal.foods)))
        response = (
            self.client.table("meal_logs")
            .update(row)
            .eq("id", str(meal.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal log")
        return _parse_meal(response.data[0])

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal log."""
        self.client.table("meal_logs").delete().eq("id", str(meal_id)).execute()


def _serialize_entry(entry: FoodEntry) -> dict[str, object]:
    return {
        "food_id": entry.food_id,
        "name": entry.name,
        "quantity": entry.quantity,
        "measure": entry.measure,
        "nutrients": entry.nutrients.to_tagged(),
    }


def _totals_columns(foods: list[FoodEntry]) -> dict[str, float]:
    total = NutrientVector()
    for entry in foods:
        total = total + entry.total_nutrients
    return {
        "total_calories": total.calories,
        "total_protein_g": total.protein,
        "total_fat_g": total.fat,
        "total_carbs_g": total.carbs,
        "total_fiber_g": total.fiber,
    }


def _parse_meal(row: dict[str, object]) -> LoggedMeal:
    return LoggedMeal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_type=str(row["meal_type"]),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
        foods=tuple(_parse_entry(item) for item in row.get("foods") or []),
        notes=row.get("notes"),
    )


def _parse_entry(item: dict[str, object]) -> FoodEntry:
    return FoodEntry(
        food_id=str(item.get("food_id") or ""),
        name=str(item.get("name") or ""),
        quantity=float(item.get("quantity", 1.0)),
        nutrients=NutrientVector.from_mapping(item.get("nutrients")),
        measure=str(item.get("measure") or "100g unit"),
    )
