"""Conversion of domain objects into camelCase JSON payloads."""

from whichfood.domain.health import BloodPressure, HealthMetric, MetricStats
from whichfood.domain.meals import FoodEntry, LoggedMeal
from whichfood.domain.nutrition import FoodCandidate, NutrientGoals, NutrientVector
from whichfood.domain.profiles import HealthSummary, UserProfile
from whichfood.domain.stats import PeriodTotals
from whichfood.services.recommendations import RecommendationResult


def serialize_profile(
    profile: UserProfile, summary: HealthSummary
) -> dict[str, object]:
    """Profile without the credential hash, plus derived health figures."""
    return {
        "id": str(profile.id),
        "name": profile.name,
        "email": profile.email,
        "age": profile.age,
        "gender": profile.gender,
        "height": profile.height_cm,
        "weight": profile.weight_kg,
        "targetWeight": profile.target_weight_kg,
        "activityLevel": profile.activity_level,
        "allergies": sorted(profile.allergies),
        "dietaryRestrictions": sorted(profile.dietary_restrictions),
        "healthConditions": list(profile.health_conditions),
        "medications": list(profile.medications),
        "createdAt": profile.created_at.isoformat() if profile.created_at else None,
        "healthSummary": {
            "bmi": summary.bmi,
            "bmr": summary.bmr,
            "dailyCalories": summary.daily_calories,
        },
    }


def serialize_goals(goals: NutrientGoals) -> dict[str, float]:
    return {
        "calorieGoal": goals.calories,
        "proteinGoal": goals.protein,
        "fatGoal": goals.fat,
        "carbGoal": goals.carbs,
        "fiberGoal": goals.fiber,
    }


def serialize_nutrients(
    nutrients: NutrientVector, digits: int | None = None
) -> dict[str, float]:
    return nutrients.as_dict(digits)


def serialize_food_entry(entry: FoodEntry) -> dict[str, object]:
    return {
        "foodId": entry.food_id,
        "name": entry.name,
        "quantity": entry.quantity,
        "measure": entry.measure,
        "nutrients": entry.nutrients.as_dict(),
    }


def serialize_meal(meal: LoggedMeal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "userId": str(meal.user_id),
        "mealType": meal.meal_type,
        "date": meal.logged_at.isoformat(),
        "foods": [serialize_food_entry(entry) for entry in meal.foods],
        "totalNutrients": meal.total_nutrients.as_dict(1),
        "notes": meal.notes,
    }


def serialize_meal_stats(
    totals: PeriodTotals, goals: NutrientGoals
) -> dict[str, object]:
    return {
        "period": {"start": totals.start.isoformat(), "end": totals.end.isoformat()},
        "totals": totals.total.as_dict(1),
        "goals": serialize_goals(goals),
        "mealCount": len(totals.meals),
        "meals": [serialize_meal(meal) for meal in totals.meals],
    }


def serialize_metric_value(value: object) -> object:
    if isinstance(value, BloodPressure):
        return {"systolic": value.systolic, "diastolic": value.diastolic}
    return value


def serialize_metric(metric: HealthMetric) -> dict[str, object]:
    return {
        "id": str(metric.id),
        "userId": str(metric.user_id),
        "type": metric.type,
        "value": serialize_metric_value(metric.value),
        "unit": metric.unit,
        "date": metric.recorded_at.isoformat(),
        "notes": metric.notes,
        "isWithinNormalRange": metric.is_within_normal_range(),
    }


def serialize_metric_stats(stats: MetricStats) -> dict[str, object]:
    return {
        "type": stats.type,
        "period": stats.period,
        "count": stats.count,
        "latest": serialize_metric_value(stats.latest),
        "average": serialize_metric_value(stats.average),
        "min": serialize_metric_value(stats.minimum),
        "max": serialize_metric_value(stats.maximum),
        "trend": stats.trend,
        "dataPoints": [serialize_metric(metric) for metric in stats.data_points],
    }


def serialize_candidate(candidate: FoodCandidate) -> dict[str, object]:
    return {
        "id": candidate.id,
        "name": candidate.name,
        "brand": candidate.brand,
        "category": candidate.category,
        "nutrients": candidate.nutrients.as_dict(),
        "source": candidate.source,
    }


def serialize_recommendations(result: RecommendationResult) -> dict[str, object]:
    """Recommendation response with the nutritional context behind it."""
    context = result.context
    payload: dict[str, object] = {
        "recommendations": [
            {**serialize_candidate(item.candidate), "reason": item.reason}
            for item in result.recommendations
        ],
        "nutritionalContext": {
            **serialize_goals(context.goals),
            "currentIntake": context.current_intake.as_dict(1),
            "nutritionalGaps": context.gaps.as_dict(1),
            "primaryNutrient": context.primary_nutrient.value,
            "daysWithData": context.days_with_data,
        },
        "message": result.message,
        "searchTerms": result.search_terms,
        "failedTerms": result.failed_terms,
    }
    if result.fallback_suggestions:
        payload["fallbackSuggestions"] = result.fallback_suggestions
    return payload
