"""Nutrition domain models."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import StrEnum

from whichfood.errors import InvalidNutrients

NUTRIENT_UNITS: dict[str, str] = {
    "calories": "kcal",
    "protein": "g",
    "fat": "g",
    "carbs": "g",
    "fiber": "g",
}

# Provider nutrient codes and spelled-out aliases accepted at ingestion.
_NUTRIENT_ALIASES: dict[str, str] = {
    "ENERC_KCAL": "calories",
    "PROCNT": "protein",
    "FAT": "fat",
    "CHOCDF": "carbs",
    "FIBTG": "fiber",
    "carbohydrate": "carbs",
    "carbohydrates": "carbs",
}


class PrimaryNutrient(StrEnum):
    """Single-label focus derived from the largest relative nutrient gap."""

    BALANCED = "balanced"
    HIGH_PROTEIN = "high-protein"
    LOW_PROTEIN = "low-protein"
    HIGH_FAT = "high-fat"
    LOW_FAT = "low-fat"
    HIGH_CARB = "high-carb"
    LOW_CARB = "low-carb"


@dataclass(frozen=True)
class NutrientVector:
    """Non-negative nutrient amounts with fixed unit tags (kcal, g)."""

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if (
                isinstance(value, bool)
                or not isinstance(value, int | float)
                or not math.isfinite(value)
                or value < 0
            ):
                raise InvalidNutrients(
                    f"{field.name} must be a non-negative number, got {value!r}"
                )

    @property
    def units(self) -> dict[str, str]:
        """Unit tag per nutrient field."""
        return dict(NUTRIENT_UNITS)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> "NutrientVector":
        """Build a vector from bare numbers or ``{value, unit}`` objects.

        Keys may be canonical names or provider codes such as ``PROCNT``.
        Missing nutrients default to zero; a unit that does not match the
        canonical unit for its nutrient is rejected.
        """
        if data is None:
            return cls()
        values: dict[str, float] = {}
        for raw_key, raw_value in data.items():
            key = _NUTRIENT_ALIASES.get(raw_key, raw_key)
            if key not in NUTRIENT_UNITS:
                continue
            values[key] = _coerce_amount(key, raw_value)
        return cls(**values)

    def scaled(self, factor: float) -> "NutrientVector":
        """Return the vector multiplied by a non-negative factor."""
        return NutrientVector(
            calories=self.calories * factor,
            protein=self.protein * factor,
            fat=self.fat * factor,
            carbs=self.carbs * factor,
            fiber=self.fiber * factor,
        )

    def __add__(self, other: "NutrientVector") -> "NutrientVector":
        return NutrientVector(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            fat=self.fat + other.fat,
            carbs=self.carbs + other.carbs,
            fiber=self.fiber + other.fiber,
        )

    def as_dict(self, digits: int | None = None) -> dict[str, float]:
        """Return plain amounts keyed by nutrient name."""
        return {
            name: round(getattr(self, name), digits)
            if digits is not None
            else getattr(self, name)
            for name in NUTRIENT_UNITS
        }

    def to_tagged(self) -> dict[str, dict[str, object]]:
        """Return ``{name: {value, unit}}`` for storage."""
        return {
            name: {"value": getattr(self, name), "unit": unit}
            for name, unit in NUTRIENT_UNITS.items()
        }


@dataclass(frozen=True)
class NutrientGoals:
    """Daily nutrient targets derived from a profile."""

    calories: float
    protein: float
    fat: float
    carbs: float
    fiber: float

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in NUTRIENT_UNITS}


@dataclass(frozen=True)
class NutrientGaps:
    """Goal minus average intake; positive is a deficit, negative a surplus."""

    calories: float
    protein: float
    fat: float
    carbs: float
    fiber: float

    def as_dict(self, digits: int = 1) -> dict[str, float]:
        return {name: round(getattr(self, name), digits) for name in NUTRIENT_UNITS}


@dataclass(frozen=True)
class FoodCandidate:
    """Normalized food search result."""

    id: str
    name: str
    brand: str | None
    category: str | None
    nutrients: NutrientVector
    source: str


def _coerce_amount(key: str, raw_value: object) -> float:
    unit: object = None
    value = raw_value
    if isinstance(raw_value, Mapping):
        value = raw_value.get("value", 0)
        unit = raw_value.get("unit")
    if value is None:
        value = 0
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidNutrients(f"{key} must be numeric, got {value!r}")
    if unit is not None and str(unit).lower() != NUTRIENT_UNITS[key]:
        raise InvalidNutrients(
            f"{key} must be in {NUTRIENT_UNITS[key]}, got {unit!r}"
        )
    return float(value)
