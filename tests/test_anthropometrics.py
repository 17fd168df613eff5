"""Tests for body-metric formulas."""

import pytest

from tests.conftest import make_profile
from whichfood.errors import InvalidActivityLevel, InvalidProfile
from whichfood.services.anthropometrics import (
    ACTIVITY_MULTIPLIERS,
    OtherGenderPolicy,
    ProfileBounds,
    bmi,
    bmr,
    daily_calories,
    round_half_up,
    tdee_for_profile,
)


def test_bmr_mifflin_st_jeor_male() -> None:
    assert bmr(80, 175, 30, "male") == pytest.approx(1748.75)


def test_bmr_female_offset() -> None:
    assert bmr(80, 175, 30, "female") == pytest.approx(1582.75)


def test_other_gender_policy_is_explicit() -> None:
    assert bmr(80, 175, 30, "other") == bmr(80, 175, 30, "female")
    assert bmr(80, 175, 30, "other", OtherGenderPolicy.MALE) == bmr(
        80, 175, 30, "male"
    )
    assert bmr(80, 175, 30, "other", OtherGenderPolicy.MIDPOINT) == pytest.approx(
        1665.75
    )


def test_unknown_gender_rejected() -> None:
    with pytest.raises(InvalidProfile):
        bmr(80, 175, 30, "robot")


def test_daily_calories_increases_with_activity() -> None:
    values = [daily_calories(1500, level) for level in ACTIVITY_MULTIPLIERS]
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_unknown_activity_level() -> None:
    with pytest.raises(InvalidActivityLevel):
        daily_calories(1500, "couch")


def test_tdee_rounds_half_up() -> None:
    # 1748.75 * 1.2 = 2098.5
    assert tdee_for_profile(make_profile()) == 2099


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_bmi() -> None:
    assert bmi(175, 80) == pytest.approx(26.12, abs=0.01)


def test_profile_bounds_reject_out_of_range() -> None:
    bounds = ProfileBounds()
    valid = {
        "age": 30,
        "gender": "male",
        "height_cm": 175,
        "weight_kg": 80,
        "activity_level": "moderate",
    }
    bounds.validate(**valid)
    with pytest.raises(InvalidProfile):
        bounds.validate(**{**valid, "height_cm": 20})
    with pytest.raises(InvalidProfile):
        bounds.validate(**{**valid, "age": None})
    with pytest.raises(InvalidProfile):
        bounds.validate(**{**valid, "target_weight_kg": 900})
    with pytest.raises(InvalidActivityLevel):
        bounds.validate(**{**valid, "activity_level": "extreme"})
