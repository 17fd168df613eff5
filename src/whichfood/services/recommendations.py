"""Nutrient-gap food recommendation engine.

Pipeline per request: profile goals -> average recent intake -> gaps ->
primary nutrient focus -> search keywords -> concurrent provider lookups ->
dedupe and rank. Nothing is shared between requests.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from whichfood.domain.nutrition import (
    FoodCandidate,
    NutrientGaps,
    NutrientGoals,
    NutrientVector,
    PrimaryNutrient,
)
from whichfood.errors import ExternalLookupExhausted, ExternalLookupFailure
from whichfood.services.gaps import (
    GAP_THRESHOLD,
    classify_primary_nutrient,
    compute_gaps,
)
from whichfood.services.intake import IntakeService
from whichfood.services.nutrition import NutritionService
from whichfood.services.query_strategy import (
    DEFAULT_MAX_QUERIES,
    fallback_suggestions,
    select_search_keywords,
)
from whichfood.services.ranking import (
    DEFAULT_RESULT_LIMIT,
    dedupe_candidates,
    rank_candidates,
    recommendation_reason,
)
from whichfood.services.users import UserService

_logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Food recommendations generated successfully"
EXHAUSTED_MESSAGE = (
    "Could not fetch recommendations right now. Here are some general suggestions."
)
NO_TERMS_MESSAGE = "No search terms matched your dietary profile."


@dataclass(frozen=True)
class RecommendationPolicy:
    """Cost and latency bounds for a recommendation request."""

    max_queries: int = DEFAULT_MAX_QUERIES
    page_size: int = 5
    result_limit: int = DEFAULT_RESULT_LIMIT
    lookup_timeout_seconds: float = 8.0
    lookup_concurrency: int = 3
    gap_threshold: float = GAP_THRESHOLD


@dataclass(frozen=True)
class Recommendation:
    candidate: FoodCandidate
    reason: str


@dataclass(frozen=True)
class NutritionalContext:
    """Goals, intake and gaps behind a recommendation."""

    goals: NutrientGoals
    current_intake: NutrientVector
    gaps: NutrientGaps
    primary_nutrient: PrimaryNutrient
    days_with_data: int


@dataclass(frozen=True)
class RecommendationResult:
    recommendations: list[Recommendation]
    context: NutritionalContext
    message: str
    search_terms: list[str]
    failed_terms: list[str] = field(default_factory=list)
    fallback_suggestions: list[str] = field(default_factory=list)


@dataclass
class RecommendationService:
    """Builds ranked food recommendations from a user's nutrient gaps."""

    user_service: UserService
    intake_service: IntakeService
    nutrition_service: NutritionService
    policy: RecommendationPolicy = field(default_factory=RecommendationPolicy)

    async def recommend(
        self,
        user_id: UUID,
        meal_type: str | None = None,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> RecommendationResult:
        """Recommend foods for a user, degrading instead of failing on lookups."""
        profile = self.user_service.get_profile(user_id)
        goals = self.user_service.goals(profile)
        intake = self.intake_service.average_daily_intake(user_id, now)
        gaps = compute_gaps(goals, intake.average)
        focus = classify_primary_nutrient(goals, gaps, self.policy.gap_threshold)
        context = NutritionalContext(
            goals=goals,
            current_intake=intake.average,
            gaps=gaps,
            primary_nutrient=focus,
            days_with_data=intake.days_with_data,
        )
        keywords = select_search_keywords(
            focus,
            meal_type,
            allergies=profile.allergies,
            restrictions=profile.dietary_restrictions,
            max_queries=self.policy.max_queries,
        )
        fallback = fallback_suggestions(
            focus, profile.allergies, profile.dietary_restrictions
        )
        if not keywords:
            return RecommendationResult(
                recommendations=[],
                context=context,
                message=NO_TERMS_MESSAGE,
                search_terms=[],
                fallback_suggestions=fallback,
            )

        try:
            candidates, failed = await self.lookup(keywords)
        except ExternalLookupExhausted as exc:
            _logger.warning("All food lookups failed for user %s: %s", user_id, exc)
            return RecommendationResult(
                recommendations=[],
                context=context,
                message=EXHAUSTED_MESSAGE,
                search_terms=keywords,
                failed_terms=list(keywords),
                fallback_suggestions=fallback,
            )

        reason = recommendation_reason(focus)
        ranked = rank_candidates(
            candidates,
            focus,
            self.policy.result_limit if limit is None else limit,
        )
        return RecommendationResult(
            recommendations=[Recommendation(item, reason) for item in ranked],
            context=context,
            message=SUCCESS_MESSAGE,
            search_terms=keywords,
            failed_terms=failed,
        )

    async def lookup(
        self, keywords: list[str]
    ) -> tuple[list[FoodCandidate], list[str]]:
        """Search every keyword concurrently and merge in keyword order.

        Returns deduplicated candidates plus the keywords whose lookup failed.
        Raises ExternalLookupExhausted when every lookup failed.
        """
        semaphore = asyncio.Semaphore(max(self.policy.lookup_concurrency, 1))

        async def fetch(keyword: str) -> list[FoodCandidate]:
            async with semaphore:
                try:
                    return await asyncio.wait_for(
                        self.nutrition_service.search(
                            keyword, limit=self.policy.page_size
                        ),
                        timeout=self.policy.lookup_timeout_seconds,
                    )
                except TimeoutError as exc:
                    raise ExternalLookupFailure(keyword, "timed out") from exc

        results = await asyncio.gather(
            *(fetch(keyword) for keyword in keywords), return_exceptions=True
        )
        candidates: list[FoodCandidate] = []
        failed: list[str] = []
        for keyword, result in zip(keywords, results, strict=True):
            if isinstance(result, ExternalLookupFailure):
                _logger.warning("Skipping keyword %r: %s", keyword, result.reason)
                failed.append(keyword)
                continue
            if isinstance(result, BaseException):
                raise result
            candidates.extend(result)
        if keywords and len(failed) == len(keywords):
            raise ExternalLookupExhausted(
                f"All {len(keywords)} food lookups failed: {', '.join(failed)}"
            )
        return dedupe_candidates(candidates), failed
