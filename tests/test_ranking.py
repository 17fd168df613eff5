"""Tests for candidate ranking."""

from tests.conftest import make_candidate
from whichfood.domain.nutrition import PrimaryNutrient
from whichfood.services.ranking import (
    dedupe_candidates,
    rank_candidates,
    recommendation_reason,
)


def test_high_protein_sorts_by_protein_descending() -> None:
    ranked = rank_candidates(
        [
            make_candidate("a", protein=5),
            make_candidate("b", protein=30),
            make_candidate("c", protein=12),
        ],
        PrimaryNutrient.HIGH_PROTEIN,
    )

    assert [item.id for item in ranked] == ["b", "c", "a"]


def test_low_fat_prefers_leaner_foods() -> None:
    ranked = rank_candidates(
        [make_candidate("fatty", fat=20), make_candidate("lean", fat=1)],
        PrimaryNutrient.LOW_FAT,
    )

    assert [item.id for item in ranked] == ["lean", "fatty"]


def test_balanced_scores_protein_plus_fiber() -> None:
    ranked = rank_candidates(
        [
            make_candidate("a", protein=10, fiber=0),
            make_candidate("b", protein=4, fiber=8),
        ],
        PrimaryNutrient.BALANCED,
    )

    assert [item.id for item in ranked] == ["b", "a"]


def test_ties_keep_merge_order() -> None:
    ranked = rank_candidates(
        [make_candidate("first", carbs=10), make_candidate("second", carbs=10)],
        PrimaryNutrient.HIGH_CARB,
    )

    assert [item.id for item in ranked] == ["first", "second"]


def test_dedupe_keeps_first_occurrence() -> None:
    unique = dedupe_candidates(
        [
            make_candidate("x", name="from eggs"),
            make_candidate("y"),
            make_candidate("x", name="from yogurt"),
        ]
    )

    assert [item.name for item in unique] == ["from eggs", "y"]


def test_limit_truncates() -> None:
    candidates = [make_candidate(str(index), protein=index) for index in range(15)]

    assert len(rank_candidates(candidates, PrimaryNutrient.HIGH_PROTEIN)) == 10
    assert len(rank_candidates(candidates, PrimaryNutrient.HIGH_PROTEIN, 3)) == 3


def test_reason_per_focus() -> None:
    assert (
        recommendation_reason(PrimaryNutrient.HIGH_PROTEIN)
        == "Recommended to help meet your protein goals"
    )
