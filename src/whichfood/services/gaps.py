"""Nutrient gap computation and primary-focus classification."""

from whichfood.domain.nutrition import (
    NutrientGaps,
    NutrientGoals,
    NutrientVector,
    PrimaryNutrient,
)
from whichfood.errors import InvalidGoal

GAP_THRESHOLD = 0.20

# Evaluated in order; the first nutrient over the threshold wins.
_PRIORITY: tuple[tuple[str, PrimaryNutrient, PrimaryNutrient], ...] = (
    ("protein", PrimaryNutrient.HIGH_PROTEIN, PrimaryNutrient.LOW_PROTEIN),
    ("fat", PrimaryNutrient.HIGH_FAT, PrimaryNutrient.LOW_FAT),
    ("carbs", PrimaryNutrient.HIGH_CARB, PrimaryNutrient.LOW_CARB),
)


def compute_gaps(goals: NutrientGoals, intake: NutrientVector) -> NutrientGaps:
    """Goal minus intake for every nutrient."""
    return NutrientGaps(
        calories=goals.calories - intake.calories,
        protein=goals.protein - intake.protein,
        fat=goals.fat - intake.fat,
        carbs=goals.carbs - intake.carbs,
        fiber=goals.fiber - intake.fiber,
    )


def classify_primary_nutrient(
    goals: NutrientGoals, gaps: NutrientGaps, threshold: float = GAP_THRESHOLD
) -> PrimaryNutrient:
    """Pick the first macro whose relative gap exceeds the threshold."""
    for name, _, _ in _PRIORITY:
        if getattr(goals, name) <= 0:
            raise InvalidGoal(f"{name} goal must be positive to compare intake")
    for name, deficit_label, surplus_label in _PRIORITY:
        gap = getattr(gaps, name)
        if abs(gap / getattr(goals, name)) > threshold:
            return deficit_label if gap > 0 else surplus_label
    return PrimaryNutrient.BALANCED
