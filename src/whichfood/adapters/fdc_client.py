"""USDA FoodData Central API client and food provider."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from whichfood.domain.nutrition import FoodCandidate, NutrientVector
from whichfood.errors import ExternalLookupFailure, InvalidNutrients

_logger = logging.getLogger(__name__)

DEFAULT_DATA_TYPES = ("Branded", "Foundation", "SR Legacy")

# FDC nutrient ids; amounts are per 100 g.
_NUTRIENT_IDS = {
    1008: "calories",
    1003: "protein",
    1004: "fat",
    1005: "carbs",
    1079: "fiber",
}


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search_foods(
        self,
        query: str,
        page_size: int = 10,
        data_types: list[str] | None = None,
    ) -> dict[str, object]:
        """Search foods by query and return raw API data."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 10.0
    ) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_foods(
        self,
        query: str,
        page_size: int = 10,
        data_types: list[str] | None = None,
    ) -> dict[str, object]:
        """Search foods by query."""
        url = f"{self.base_url}/foods/search"
        response = await self.http_client.post(
            url,
            params={"api_key": self.api_key},
            json={
                "query": query,
                "pageSize": page_size,
                "dataType": data_types or list(DEFAULT_DATA_TYPES),
            },
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


@dataclass
class FdcFoodProvider:
    """Food provider normalizing FDC search results."""

    client: FdcClient
    name: str = "fdc"

    async def search(
        self,
        query: str,
        page_size: int = 10,
        category_filter: list[str] | None = None,
    ) -> list[FoodCandidate]:
        """Search FDC; category_filter maps to FDC data types.

        Items that cannot be normalized are skipped; a response that cannot
        be decoded at all fails the whole lookup.
        """
        try:
            payload = await self.client.search_foods(
                query, page_size=page_size, data_types=category_filter
            )
        except (httpx.HTTPError, ValueError) as exc:
            raise ExternalLookupFailure(query, _describe(exc)) from exc
        if not isinstance(payload, dict):
            raise ExternalLookupFailure(query, "unexpected response body")
        foods = payload.get("foods")
        if foods is None:
            return []
        if not isinstance(foods, list):
            raise ExternalLookupFailure(query, "unexpected response body")

        candidates: list[FoodCandidate] = []
        for food in foods:
            if not isinstance(food, dict) or not food.get("fdcId"):
                _logger.warning("Skipping FDC item without an id for %r", query)
                continue
            try:
                candidates.append(_to_candidate(food))
            except InvalidNutrients as exc:
                _logger.warning(
                    "Skipping FDC food %s for %r: %s", food["fdcId"], query, exc.message
                )
        return candidates

    async def close(self) -> None:
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()


def _to_candidate(food: dict[str, object]) -> FoodCandidate:
    brand = food.get("brandOwner") or food.get("brandName")
    category = food.get("dataType")
    return FoodCandidate(
        id=str(food["fdcId"]),
        name=str(food.get("description") or ""),
        brand=str(brand) if brand else None,
        category=str(category) if category else None,
        nutrients=_extract_nutrients(food.get("foodNutrients")),
        source="fdc",
    )


def _extract_nutrients(food_nutrients: object) -> NutrientVector:
    """Pick calories, protein, fat, carbs and fiber out of FDC nutrients."""
    values: dict[str, float] = {}
    if not isinstance(food_nutrients, list):
        return NutrientVector()
    for nutrient in food_nutrients:
        if not isinstance(nutrient, dict):
            continue
        nutrient_info = nutrient.get("nutrient")
        nutrient_id = nutrient.get("nutrientId")
        if nutrient_id is None and isinstance(nutrient_info, dict):
            nutrient_id = nutrient_info.get("id")
        if not isinstance(nutrient_id, int):
            continue
        field = _NUTRIENT_IDS.get(nutrient_id)
        amount = nutrient.get("value", nutrient.get("amount"))
        if field is not None and isinstance(amount, int | float):
            values[field] = float(amount)
    return NutrientVector(**values)


def _describe(exc: Exception) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}"
    if isinstance(exc, ValueError):
        return "invalid JSON body"
    return type(exc).__name__
