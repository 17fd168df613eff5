"""Edamam Food Database API client and food provider."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from whichfood.domain.nutrition import FoodCandidate, NutrientVector
from whichfood.errors import ExternalLookupFailure, InvalidNutrients

_logger = logging.getLogger(__name__)


class EdamamClient(Protocol):
    """Interface for Edamam food-database parser interactions."""

    async def parse(
        self, ingredient: str, categories: list[str] | None = None
    ) -> dict[str, object]:
        """Run the food parser and return raw API data."""


@dataclass
class HttpxEdamamClient(EdamamClient):
    """HTTPX-backed Edamam client."""

    app_id: str
    app_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls,
        app_id: str,
        app_key: str,
        base_url: str,
        timeout_seconds: float = 10.0,
    ) -> "HttpxEdamamClient":
        """Create an Edamam client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_key=app_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def parse(
        self, ingredient: str, categories: list[str] | None = None
    ) -> dict[str, object]:
        params: list[tuple[str, str]] = [
            ("app_id", self.app_id),
            ("app_key", self.app_key),
            ("ingr", ingredient),
        ]
        params.extend(("category", category) for category in categories or [])
        response = await self.http_client.get(
            f"{self.base_url}/parser",
            params=params,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


@dataclass
class EdamamFoodProvider:
    """Food provider normalizing Edamam parser hints."""

    client: EdamamClient
    name: str = "edamam"

    async def search(
        self,
        query: str,
        page_size: int = 10,
        category_filter: list[str] | None = None,
    ) -> list[FoodCandidate]:
        """Search Edamam; the parser has no page size so results are sliced.

        Hints that cannot be normalized are skipped; a response that cannot
        be decoded at all fails the whole lookup.
        """
        try:
            payload = await self.client.parse(query, categories=category_filter)
        except (httpx.HTTPError, ValueError) as exc:
            raise ExternalLookupFailure(query, _describe(exc)) from exc
        if not isinstance(payload, dict):
            raise ExternalLookupFailure(query, "unexpected response body")
        hints = payload.get("hints")
        if hints is None:
            return []
        if not isinstance(hints, list):
            raise ExternalLookupFailure(query, "unexpected response body")

        candidates: list[FoodCandidate] = []
        for hint in hints:
            food = hint.get("food") if isinstance(hint, dict) else None
            if not isinstance(food, dict) or not food.get("foodId"):
                _logger.warning("Skipping Edamam hint without a food for %r", query)
                continue
            try:
                candidates.append(_to_candidate(food))
            except InvalidNutrients as exc:
                _logger.warning(
                    "Skipping Edamam food %s for %r: %s",
                    food["foodId"],
                    query,
                    exc.message,
                )
                continue
            if len(candidates) >= page_size:
                break
        return candidates

    async def close(self) -> None:
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()


def _to_candidate(food: dict[str, object]) -> FoodCandidate:
    nutrients = food.get("nutrients")
    if nutrients is not None and not isinstance(nutrients, dict):
        raise InvalidNutrients(f"nutrients must be an object, got {nutrients!r}")
    brand = food.get("brand")
    category = food.get("category")
    return FoodCandidate(
        id=str(food["foodId"]),
        name=str(food.get("label") or ""),
        brand=str(brand) if brand else None,
        category=str(category) if category else None,
        nutrients=NutrientVector.from_mapping(nutrients),
        source="edamam",
    )


def _describe(exc: Exception) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}"
    if isinstance(exc, ValueError):
        return "invalid JSON body"
    return type(exc).__name__
