"""Body-metric formulas: BMI, BMR (Mifflin-St Jeor) and TDEE."""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from whichfood.domain.profiles import ActivityLevel, Gender, UserProfile
from whichfood.errors import InvalidActivityLevel, InvalidProfile

ACTIVITY_MULTIPLIERS = MappingProxyType(
    {
        ActivityLevel.SEDENTARY: 1.2,
        ActivityLevel.LIGHT: 1.375,
        ActivityLevel.MODERATE: 1.55,
        ActivityLevel.ACTIVE: 1.725,
        ActivityLevel.VERY_ACTIVE: 1.9,
    }
)

MALE_BMR_OFFSET = 5.0
FEMALE_BMR_OFFSET = -161.0


class OtherGenderPolicy(StrEnum):
    """Which Mifflin-St Jeor offset applies to gender ``other``."""

    FEMALE = "female"
    MALE = "male"
    MIDPOINT = "midpoint"


@dataclass(frozen=True)
class ProfileBounds:
    """Physiologically plausible ranges for body metrics (inclusive)."""

    min_age: int = 2
    max_age: int = 120
    min_height_cm: float = 50.0
    max_height_cm: float = 272.0
    min_weight_kg: float = 20.0
    max_weight_kg: float = 500.0

    def validate(  # noqa: PLR0913
        self,
        *,
        age: object,
        gender: object,
        height_cm: object,
        weight_kg: object,
        activity_level: object,
        target_weight_kg: object = None,
    ) -> None:
        """Raise when any body metric is missing or out of range."""
        _require_range("age", age, self.min_age, self.max_age)
        _require_range("height", height_cm, self.min_height_cm, self.max_height_cm)
        _require_range("weight", weight_kg, self.min_weight_kg, self.max_weight_kg)
        if target_weight_kg is not None:
            _require_range(
                "target weight",
                target_weight_kg,
                self.min_weight_kg,
                self.max_weight_kg,
            )
        if gender not in set(Gender):
            raise InvalidProfile(f"Unknown gender: {gender!r}")
        activity_multiplier(activity_level)


def bmi(height_cm: float, weight_kg: float) -> float:
    """Body mass index, kg/m^2."""
    if height_cm <= 0 or weight_kg <= 0:
        raise InvalidProfile("Height and weight must be positive")
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmr(
    weight_kg: float,
    height_cm: float,
    age_years: int,
    gender: str,
    other_policy: OtherGenderPolicy = OtherGenderPolicy.FEMALE,
) -> float:
    """Basal metabolic rate in kcal/day via Mifflin-St Jeor."""
    if height_cm <= 0 or weight_kg <= 0:
        raise InvalidProfile("Height and weight must be positive")
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    return base + gender_offset(gender, other_policy)


def gender_offset(
    gender: str, other_policy: OtherGenderPolicy = OtherGenderPolicy.FEMALE
) -> float:
    """Return the Mifflin-St Jeor constant for a gender."""
    if gender == Gender.MALE:
        return MALE_BMR_OFFSET
    if gender == Gender.FEMALE:
        return FEMALE_BMR_OFFSET
    if gender == Gender.OTHER:
        if other_policy == OtherGenderPolicy.MALE:
            return MALE_BMR_OFFSET
        if other_policy == OtherGenderPolicy.MIDPOINT:
            return (MALE_BMR_OFFSET + FEMALE_BMR_OFFSET) / 2
        return FEMALE_BMR_OFFSET
    raise InvalidProfile(f"Unknown gender: {gender!r}")


def activity_multiplier(activity_level: object) -> float:
    """Look up the TDEE multiplier; unknown levels are an error."""
    try:
        return ACTIVITY_MULTIPLIERS[ActivityLevel(activity_level)]
    except (ValueError, KeyError) as exc:
        raise InvalidActivityLevel(
            f"Unknown activity level: {activity_level!r}"
        ) from exc


def daily_calories(bmr_kcal: float, activity_level: str) -> float:
    """Total daily energy expenditure: BMR times the activity multiplier."""
    return bmr_kcal * activity_multiplier(activity_level)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, matching calorie display rules."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def tdee_for_profile(
    profile: UserProfile, other_policy: OtherGenderPolicy = OtherGenderPolicy.FEMALE
) -> int:
    """Whole-kcal TDEE for a stored profile."""
    basal = bmr(
        profile.weight_kg,
        profile.height_cm,
        profile.age,
        profile.gender,
        other_policy,
    )
    return round_half_up(daily_calories(basal, profile.activity_level))


def _require_range(name: str, value: object, low: float, high: float) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidProfile(f"{name} is required and must be a number")
    if not low <= value <= high:
        raise InvalidProfile(f"{name} must be between {low:g} and {high:g}")
