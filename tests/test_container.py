"""Tests for container wiring."""

import asyncio

import pytest

from whichfood.adapters.edamam_client import EdamamFoodProvider
from whichfood.adapters.fdc_client import FdcFoodProvider
from whichfood.config import Settings
from whichfood.containers import build_container, build_food_provider


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert isinstance(container.nutrition_service.provider, FdcFoodProvider)
    assert container.recommendation_service.policy.max_queries == 3
    assert container.intake_service.lookback_days == 3
    asyncio.run(container.close_resources())


def test_edamam_provider_selected(settings: Settings) -> None:
    edamam = settings.model_copy(
        update={
            "food_provider": "edamam",
            "edamam_app_id": "id",
            "edamam_app_key": "key",
        }
    )

    provider = build_food_provider(edamam)

    assert isinstance(provider, EdamamFoodProvider)
    asyncio.run(provider.close())


def test_missing_provider_credentials_fail_fast(settings: Settings) -> None:
    broken = settings.model_copy(update={"food_provider": "edamam"})

    with pytest.raises(RuntimeError, match="EDAMAM_APP_ID"):
        build_container(broken)
