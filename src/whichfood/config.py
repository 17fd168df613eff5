"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    food_provider: Literal["fdc", "edamam"] = "fdc"
    fdc_api_key: str | None = None
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    edamam_app_id: str | None = None
    edamam_app_key: str | None = None
    edamam_base_url: str = "https://api.edamam.com/api/food-database/v2"
    other_gender_bmr: Literal["female", "male", "midpoint"] = "female"
    recommendation_lookback_days: int = 3
    recommendation_max_queries: int = 3
    recommendation_page_size: int = 5
    recommendation_result_limit: int = 10
    lookup_timeout_seconds: float = 8.0
    lookup_concurrency: int = 3
    search_page_size: int = 20
    search_cache_ttl_seconds: int = 3600
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def missing_provider_credentials(settings: Settings) -> list[str]:
    """Return the env variable names the selected food provider still needs."""
    if settings.food_provider == "edamam":
        required = {
            "EDAMAM_APP_ID": settings.edamam_app_id,
            "EDAMAM_APP_KEY": settings.edamam_app_key,
        }
    else:
        required = {"FDC_API_KEY": settings.fdc_api_key}
    return [name for name, value in required.items() if not value]
