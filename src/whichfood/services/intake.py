"""Intake aggregation over logged meals."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from uuid import UUID

from whichfood.domain.meals import LoggedMeal
from whichfood.domain.nutrition import NutrientVector
from whichfood.domain.stats import DailyTotals, IntakeSummary, PeriodTotals
from whichfood.services.meals import MealLogRepository, utc_day_bounds

DEFAULT_LOOKBACK_DAYS = 3


@dataclass
class IntakeService:
    """Computes average and period intake from meal logs (UTC days)."""

    repository: MealLogRepository
    lookback_days: int = DEFAULT_LOOKBACK_DAYS

    def average_daily_intake(
        self, user_id: UUID, now: datetime | None = None
    ) -> IntakeSummary:
        """Average per-day totals over [now - lookback, now].

        Only days with at least one meal count towards the average; with no
        meals at all the average is all zeros.
        """
        end = (now or datetime.now(tz=UTC)).astimezone(UTC)
        start = end - timedelta(days=self.lookback_days)
        meals = self.repository.list_meals(user_id, start, end)
        daily = group_by_day(meals)
        return IntakeSummary(
            start=start, end=end, daily=daily, average=average_intake(daily)
        )

    def period_totals(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> PeriodTotals:
        """Sum intake over a period, defaulting to the current UTC day."""
        day_start, day_end = utc_day_bounds(now or datetime.now(tz=UTC))
        start = start.astimezone(UTC) if start else day_start
        end = end.astimezone(UTC) if end else day_end
        meals = self.repository.list_meals(user_id, start, end)
        total = NutrientVector()
        for meal in meals:
            total = total + meal.total_nutrients
        return PeriodTotals(
            start=start,
            end=end,
            total=total,
            meals=sorted(meals, key=lambda meal: meal.logged_at),
        )


def group_by_day(meals: list[LoggedMeal]) -> list[DailyTotals]:
    """Sum meals per UTC calendar date, oldest day first."""
    totals: dict[date, NutrientVector] = defaultdict(NutrientVector)
    counts: dict[date, int] = defaultdict(int)
    for meal in meals:
        day = meal.logged_at.astimezone(UTC).date()
        totals[day] = totals[day] + meal.total_nutrients
        counts[day] += 1
    return [
        DailyTotals(day=day, nutrients=totals[day], meal_count=counts[day])
        for day in sorted(totals)
    ]


def average_intake(daily: list[DailyTotals]) -> NutrientVector:
    """Mean of per-day totals; zeros when there are no days."""
    if not daily:
        return NutrientVector()
    total = NutrientVector()
    for entry in daily:
        total = total + entry.nutrients
    return total.scaled(1 / len(daily))
