"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from whichfood.adapters.edamam_client import EdamamFoodProvider, HttpxEdamamClient
from whichfood.adapters.fdc_client import FdcFoodProvider, HttpxFdcClient
from whichfood.adapters.supabase_health_metric_repository import (
    SupabaseHealthMetricRepository,
)
from whichfood.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from whichfood.adapters.supabase_user_repository import SupabaseUserRepository
from whichfood.config import Settings, missing_provider_credentials
from whichfood.services.anthropometrics import OtherGenderPolicy
from whichfood.services.cache import InMemoryCache
from whichfood.services.goals import GoalPolicy
from whichfood.services.health import HealthMetricService
from whichfood.services.intake import IntakeService
from whichfood.services.meals import MealLogService
from whichfood.services.nutrition import FoodProvider, NutritionService
from whichfood.services.recommendations import (
    RecommendationPolicy,
    RecommendationService,
)
from whichfood.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    meal_log_service: MealLogService
    health_metric_service: HealthMetricService
    intake_service: IntakeService
    nutrition_service: NutritionService
    recommendation_service: RecommendationService
    close_resources: Callable[[], Awaitable[None]]


def build_food_provider(settings: Settings) -> FoodProvider:
    """Create the food provider selected by settings."""
    missing = missing_provider_credentials(settings)
    if missing:
        raise RuntimeError(
            f"Food provider {settings.food_provider!r} is missing settings: "
            f"{', '.join(missing)}"
        )
    if settings.food_provider == "edamam":
        return EdamamFoodProvider(
            HttpxEdamamClient.create(
                app_id=settings.edamam_app_id,
                app_key=settings.edamam_app_key,
                base_url=settings.edamam_base_url,
                timeout_seconds=settings.lookup_timeout_seconds,
            )
        )
    return FdcFoodProvider(
        HttpxFdcClient.create(
            api_key=settings.fdc_api_key,
            base_url=settings.fdc_base_url,
            timeout_seconds=settings.lookup_timeout_seconds,
        )
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    provider = build_food_provider(resolved_settings)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    meal_log_repository = SupabaseMealLogRepository(supabase_client)
    health_metric_repository = SupabaseHealthMetricRepository(supabase_client)

    health_metric_service = HealthMetricService(health_metric_repository)
    user_service = UserService(
        user_repository,
        health_metric_service,
        goal_policy=GoalPolicy(
            other_gender=OtherGenderPolicy(resolved_settings.other_gender_bmr)
        ),
    )
    meal_log_service = MealLogService(meal_log_repository)
    intake_service = IntakeService(
        meal_log_repository,
        lookback_days=resolved_settings.recommendation_lookback_days,
    )
    nutrition_service = NutritionService(
        provider=provider,
        cache=InMemoryCache(),
        search_ttl_seconds=resolved_settings.search_cache_ttl_seconds,
    )
    recommendation_service = RecommendationService(
        user_service=user_service,
        intake_service=intake_service,
        nutrition_service=nutrition_service,
        policy=RecommendationPolicy(
            max_queries=resolved_settings.recommendation_max_queries,
            page_size=resolved_settings.recommendation_page_size,
            result_limit=resolved_settings.recommendation_result_limit,
            lookup_timeout_seconds=resolved_settings.lookup_timeout_seconds,
            lookup_concurrency=resolved_settings.lookup_concurrency,
        ),
    )

    async def close_resources() -> None:
        await provider.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        meal_log_service=meal_log_service,
        health_metric_service=health_metric_service,
        intake_service=intake_service,
        nutrition_service=nutrition_service,
        recommendation_service=recommendation_service,
        close_resources=close_resources,
    )
