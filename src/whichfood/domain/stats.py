"""Domain models for intake statistics."""

from dataclasses import dataclass
from datetime import date, datetime

from whichfood.domain.meals import LoggedMeal
from whichfood.domain.nutrition import NutrientVector


@dataclass(frozen=True)
class DailyTotals:
    """Summed nutrients for one calendar day."""

    day: date
    nutrients: NutrientVector
    meal_count: int


@dataclass(frozen=True)
class IntakeSummary:
    """Average daily intake over a lookback window."""

    start: datetime
    end: datetime
    daily: list[DailyTotals]
    average: NutrientVector

    @property
    def days_with_data(self) -> int:
        return len(self.daily)


@dataclass(frozen=True)
class PeriodTotals:
    """Summed intake and the meals within an explicit period."""

    start: datetime
    end: datetime
    total: NutrientVector
    meals: list[LoggedMeal]
