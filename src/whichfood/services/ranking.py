"""Relevance ranking for recommendation candidates."""

from collections.abc import Iterable

from whichfood.domain.nutrition import FoodCandidate, PrimaryNutrient

RECOMMENDATION_REASONS: dict[PrimaryNutrient, str] = {
    PrimaryNutrient.HIGH_PROTEIN: "Recommended to help meet your protein goals",
    PrimaryNutrient.LOW_PROTEIN: "Recommended to balance your protein intake",
    PrimaryNutrient.HIGH_FAT: "Recommended to increase healthy fat intake",
    PrimaryNutrient.LOW_FAT: "Recommended to reduce fat intake",
    PrimaryNutrient.HIGH_CARB: "Recommended to increase your energy intake",
    PrimaryNutrient.LOW_CARB: "Recommended to balance your carbohydrate intake",
    PrimaryNutrient.BALANCED: "Recommended for a balanced diet",
}

# focus -> (nutrient field, sign)
_SCORE_FIELDS: dict[PrimaryNutrient, tuple[str, int]] = {
    PrimaryNutrient.HIGH_PROTEIN: ("protein", 1),
    PrimaryNutrient.LOW_PROTEIN: ("protein", -1),
    PrimaryNutrient.HIGH_FAT: ("fat", 1),
    PrimaryNutrient.LOW_FAT: ("fat", -1),
    PrimaryNutrient.HIGH_CARB: ("carbs", 1),
    PrimaryNutrient.LOW_CARB: ("carbs", -1),
}

DEFAULT_RESULT_LIMIT = 10


def recommendation_reason(focus: PrimaryNutrient) -> str:
    return RECOMMENDATION_REASONS[PrimaryNutrient(focus)]


def relevance_score(candidate: FoodCandidate, focus: PrimaryNutrient) -> float:
    """Focus-specific score; higher is more relevant."""
    nutrients = candidate.nutrients
    scored = _SCORE_FIELDS.get(PrimaryNutrient(focus))
    if scored is None:
        return nutrients.protein + nutrients.fiber
    field, sign = scored
    return sign * getattr(nutrients, field)


def dedupe_candidates(candidates: Iterable[FoodCandidate]) -> list[FoodCandidate]:
    """Keep the first candidate seen for each id."""
    seen: set[str] = set()
    unique: list[FoodCandidate] = []
    for candidate in candidates:
        if candidate.id in seen:
            continue
        seen.add(candidate.id)
        unique.append(candidate)
    return unique


def rank_candidates(
    candidates: Iterable[FoodCandidate],
    focus: PrimaryNutrient,
    limit: int = DEFAULT_RESULT_LIMIT,
) -> list[FoodCandidate]:
    """Dedupe, sort by score descending (stable) and truncate."""
    unique = dedupe_candidates(candidates)
    ordered = sorted(
        unique, key=lambda candidate: relevance_score(candidate, focus), reverse=True
    )
    return ordered[: max(limit, 0)]
