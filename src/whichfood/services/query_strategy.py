"""Map a nutrient focus and user preferences to food search keywords."""

from collections.abc import Iterable

from whichfood.domain.meals import MealType
from whichfood.domain.nutrition import PrimaryNutrient

# Slot ``None`` is used when no meal type filter was requested.
_MAIN = "main"
_SLOTS: dict[str | None, str | None] = {
    MealType.BREAKFAST: MealType.BREAKFAST,
    MealType.LUNCH: _MAIN,
    MealType.DINNER: _MAIN,
    MealType.SNACK: MealType.SNACK,
    None: None,
}

SEARCH_KEYWORDS: dict[tuple[PrimaryNutrient, str | None], tuple[str, ...]] = {
    (PrimaryNutrient.HIGH_PROTEIN, MealType.BREAKFAST): (
        "eggs",
        "greek yogurt",
        "protein pancakes",
        "cottage cheese",
    ),
    (PrimaryNutrient.HIGH_PROTEIN, _MAIN): (
        "chicken breast",
        "salmon",
        "turkey",
        "lean beef",
        "tofu",
    ),
    (PrimaryNutrient.HIGH_PROTEIN, MealType.SNACK): (
        "protein bar",
        "nuts",
        "jerky",
        "protein shake",
    ),
    (PrimaryNutrient.HIGH_PROTEIN, None): (
        "chicken breast",
        "salmon",
        "greek yogurt",
        "eggs",
        "tofu",
    ),
    (PrimaryNutrient.LOW_PROTEIN, MealType.BREAKFAST): (
        "oatmeal",
        "fruit",
        "toast",
        "cereal",
    ),
    (PrimaryNutrient.LOW_PROTEIN, _MAIN): ("rice", "pasta", "vegetables", "potatoes"),
    (PrimaryNutrient.LOW_PROTEIN, MealType.SNACK): ("fruit", "crackers", "pretzels"),
    (PrimaryNutrient.LOW_PROTEIN, None): ("rice", "fruits", "vegetables", "bread"),
    (PrimaryNutrient.HIGH_FAT, MealType.BREAKFAST): (
        "avocado toast",
        "nut butter",
        "whole eggs",
    ),
    (PrimaryNutrient.HIGH_FAT, _MAIN): ("salmon", "avocado", "olive oil", "nuts"),
    (PrimaryNutrient.HIGH_FAT, MealType.SNACK): ("nuts", "cheese", "avocado"),
    (PrimaryNutrient.HIGH_FAT, None): ("avocado", "nuts", "olive oil", "cheese"),
    (PrimaryNutrient.LOW_FAT, MealType.BREAKFAST): (
        "egg whites",
        "low fat yogurt",
        "fruit",
    ),
    (PrimaryNutrient.LOW_FAT, _MAIN): (
        "chicken breast",
        "turkey",
        "white fish",
        "vegetables",
    ),
    (PrimaryNutrient.LOW_FAT, MealType.SNACK): (
        "fruit",
        "low fat yogurt",
        "rice cakes",
    ),
    (PrimaryNutrient.LOW_FAT, None): ("lean meat", "vegetables", "fruits", "grains"),
    (PrimaryNutrient.HIGH_CARB, MealType.BREAKFAST): (
        "oatmeal",
        "banana",
        "toast",
        "cereal",
    ),
    (PrimaryNutrient.HIGH_CARB, _MAIN): ("pasta", "rice", "potatoes", "beans"),
    (PrimaryNutrient.HIGH_CARB, MealType.SNACK): ("fruit", "granola bar", "crackers"),
    (PrimaryNutrient.HIGH_CARB, None): ("pasta", "rice", "potatoes", "oats", "bananas"),
    (PrimaryNutrient.LOW_CARB, MealType.BREAKFAST): (
        "eggs",
        "avocado",
        "bacon",
        "sausage",
    ),
    (PrimaryNutrient.LOW_CARB, _MAIN): ("chicken", "beef", "fish", "leafy greens"),
    (PrimaryNutrient.LOW_CARB, MealType.SNACK): ("nuts", "cheese", "jerky"),
    (PrimaryNutrient.LOW_CARB, None): ("leafy greens", "meat", "fish", "eggs"),
    (PrimaryNutrient.BALANCED, MealType.BREAKFAST): (
        "eggs",
        "oatmeal",
        "yogurt",
        "fruit",
    ),
    (PrimaryNutrient.BALANCED, _MAIN): ("chicken", "fish", "vegetables", "rice"),
    (PrimaryNutrient.BALANCED, MealType.SNACK): ("fruit", "nuts", "yogurt"),
    (PrimaryNutrient.BALANCED, None): (
        "balanced meal",
        "vegetables",
        "fruits",
        "lean protein",
    ),
}

FALLBACK_SUGGESTIONS: dict[PrimaryNutrient, tuple[str, ...]] = {
    PrimaryNutrient.HIGH_PROTEIN: (
        "grilled chicken breast",
        "greek yogurt with berries",
        "lentil soup",
        "hard-boiled eggs",
    ),
    PrimaryNutrient.LOW_PROTEIN: (
        "vegetable stir-fry with rice",
        "fruit salad",
        "whole grain toast",
    ),
    PrimaryNutrient.HIGH_FAT: ("avocado salad", "mixed nuts", "salmon with olive oil"),
    PrimaryNutrient.LOW_FAT: ("steamed vegetables", "fresh fruit", "baked white fish"),
    PrimaryNutrient.HIGH_CARB: (
        "oatmeal with banana",
        "brown rice bowl",
        "baked potato",
    ),
    PrimaryNutrient.LOW_CARB: (
        "leafy green salad with eggs",
        "grilled fish",
        "roasted vegetables",
    ),
    PrimaryNutrient.BALANCED: (
        "mixed green salad",
        "grilled chicken with vegetables",
        "whole grain wrap",
        "fruit and yogurt",
    ),
}

MEAT_TERMS = (
    "chicken",
    "meat",
    "fish",
    "salmon",
    "beef",
    "turkey",
    "jerky",
    "bacon",
    "sausage",
)
PLANT_PROTEINS = ("tofu", "lentils", "beans", "chickpeas")
PLANT_BASED_MARKERS = ("vegetarian", "vegan")

DEFAULT_MAX_QUERIES = 3


def base_keywords(focus: PrimaryNutrient, meal_type: str | None) -> list[str]:
    """Return the table row for a focus and optional meal type."""
    slot = _SLOTS.get(meal_type)
    return list(SEARCH_KEYWORDS[(PrimaryNutrient(focus), slot)])


def filter_allergens(keywords: Iterable[str], allergies: Iterable[str]) -> list[str]:
    """Drop keywords containing an allergen or its singular, case-insensitively."""
    allergens = _allergen_terms(allergies)
    return [
        keyword
        for keyword in keywords
        if not any(allergen in keyword.lower() for allergen in allergens)
    ]


def is_plant_based(restrictions: Iterable[str]) -> bool:
    return any(
        marker in restriction.lower()
        for restriction in restrictions
        for marker in PLANT_BASED_MARKERS
    )


def apply_dietary_restrictions(
    keywords: Iterable[str], restrictions: Iterable[str]
) -> list[str]:
    """Swap animal-protein keywords for plant proteins for plant-based diets."""
    result = list(keywords)
    if not is_plant_based(restrictions):
        return result
    result = [
        keyword
        for keyword in result
        if not any(term in keyword.lower() for term in MEAT_TERMS)
    ]
    return _unique([*result, *PLANT_PROTEINS])


def select_search_keywords(
    focus: PrimaryNutrient,
    meal_type: str | None,
    allergies: Iterable[str] = (),
    restrictions: Iterable[str] = (),
    max_queries: int = DEFAULT_MAX_QUERIES,
) -> list[str]:
    """Build the ranked, filtered and capped keyword list for a focus."""
    allergies = list(allergies)
    keywords = apply_dietary_restrictions(base_keywords(focus, meal_type), restrictions)
    keywords = filter_allergens(_unique(keywords), allergies)
    return keywords[: max(max_queries, 0)]


def fallback_suggestions(
    focus: PrimaryNutrient,
    allergies: Iterable[str] = (),
    restrictions: Iterable[str] = (),
) -> list[str]:
    """Generic suggestions used when no live recommendations are available."""
    suggestions = list(FALLBACK_SUGGESTIONS[PrimaryNutrient(focus)])
    if is_plant_based(restrictions):
        suggestions = [
            item
            for item in suggestions
            if not any(term in item.lower() for term in MEAT_TERMS)
        ]
    return filter_allergens(suggestions, allergies)


def _unique(keywords: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for keyword in keywords:
        if keyword not in seen:
            seen.add(keyword)
            result.append(keyword)
    return result


def _allergen_terms(allergies: Iterable[str]) -> list[str]:
    terms: list[str] = []
    for allergy in allergies:
        term = allergy.strip().lower() if allergy else ""
        if not term:
            continue
        terms.append(term)
        singular = _singular(term)
        if singular != term:
            terms.append(singular)
    return terms


def _singular(term: str) -> str:
    if term.endswith("ies") and len(term) > 3:
        return term[:-3] + "y"
    if term.endswith("oes"):
        return term[:-2]
    if term.endswith("s") and not term.endswith("ss"):
        return term[:-1]
    return term
