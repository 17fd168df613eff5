"""Calorie and macro targets derived from a profile."""

from dataclasses import dataclass

from whichfood.domain.nutrition import NutrientGoals
from whichfood.domain.profiles import UserProfile
from whichfood.services.anthropometrics import (
    OtherGenderPolicy,
    round_half_up,
    tdee_for_profile,
)


@dataclass(frozen=True)
class GoalPolicy:
    """Goal adjustment factors and macro split constants."""

    weight_loss_factor: float = 0.85
    weight_gain_factor: float = 1.15
    protein_calorie_share: float = 0.25
    fat_calorie_share: float = 0.30
    carb_calorie_share: float = 0.45
    protein_kcal_per_g: float = 4.0
    fat_kcal_per_g: float = 9.0
    carb_kcal_per_g: float = 4.0
    fiber_g_per_1000_kcal: float = 14.0
    other_gender: OtherGenderPolicy = OtherGenderPolicy.FEMALE


DEFAULT_GOAL_POLICY = GoalPolicy()


def calorie_goal(
    tdee: float,
    weight_kg: float,
    target_weight_kg: float | None,
    policy: GoalPolicy = DEFAULT_GOAL_POLICY,
) -> float:
    """Apply a deficit or surplus when a target weight is set."""
    if target_weight_kg is not None and target_weight_kg < weight_kg:
        return float(round_half_up(tdee * policy.weight_loss_factor))
    if target_weight_kg is not None and target_weight_kg > weight_kg:
        return float(round_half_up(tdee * policy.weight_gain_factor))
    return float(tdee)


def macro_targets(
    calories: float, policy: GoalPolicy = DEFAULT_GOAL_POLICY
) -> NutrientGoals:
    """Split a calorie goal into whole-gram macro targets."""
    return NutrientGoals(
        calories=calories,
        protein=float(
            round_half_up(
                calories * policy.protein_calorie_share / policy.protein_kcal_per_g
            )
        ),
        fat=float(
            round_half_up(calories * policy.fat_calorie_share / policy.fat_kcal_per_g)
        ),
        carbs=float(
            round_half_up(
                calories * policy.carb_calorie_share / policy.carb_kcal_per_g
            )
        ),
        fiber=float(round_half_up(calories / 1000 * policy.fiber_g_per_1000_kcal)),
    )


def goals_for_profile(
    profile: UserProfile, policy: GoalPolicy = DEFAULT_GOAL_POLICY
) -> NutrientGoals:
    """Compute fresh daily goals for a stored profile."""
    tdee = tdee_for_profile(profile, policy.other_gender)
    calories = calorie_goal(
        tdee, profile.weight_kg, profile.target_weight_kg, policy
    )
    return macro_targets(calories, policy)
