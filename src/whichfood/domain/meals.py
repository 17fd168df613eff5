"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from whichfood.domain.nutrition import NutrientVector


class MealType(StrEnum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodEntry:
    """A food in a meal: per-unit nutrients times a quantity multiplier."""

    food_id: str
    name: str
    quantity: float
    nutrients: NutrientVector
    measure: str = "100g unit"

    @property
    def total_nutrients(self) -> NutrientVector:
        return self.nutrients.scaled(self.quantity)


@dataclass(frozen=True)
class LoggedMeal:
    """A user's meal with its ordered food entries."""

    id: UUID
    user_id: UUID
    meal_type: str
    logged_at: datetime
    foods: tuple[FoodEntry, ...]
    notes: str | None = None

    @property
    def total_nutrients(self) -> NutrientVector:
        """Componentwise sum of the entries, recomputed on every read."""
        total = NutrientVector()
        for entry in self.foods:
            total = total + entry.total_nutrients
        return total
