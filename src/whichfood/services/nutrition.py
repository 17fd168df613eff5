"""Food search through the configured provider, with caching and retry."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from whichfood.domain.nutrition import FoodCandidate
from whichfood.services.cache import Cache

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class FoodProvider(Protocol):
    """Third-party food database normalized into FoodCandidate."""

    name: str

    async def search(
        self,
        query: str,
        page_size: int = 10,
        category_filter: list[str] | None = None,
    ) -> list[FoodCandidate]:
        """Search foods by keyword."""

    async def close(self) -> None:
        """Release the underlying HTTP client."""


@dataclass
class NutritionService:
    """Service for provider lookups with caching."""

    provider: FoodProvider
    cache: Cache
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(
        self,
        query: str,
        limit: int = 5,
        category_filter: list[str] | None = None,
    ) -> list[FoodCandidate]:
        """Search the provider, serving repeated queries from cache."""
        categories = ",".join(sorted(category_filter or []))
        cache_key = (
            f"{self.provider.name}:search:{query.lower()}:{limit}:{categories}"
        )
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        foods = await self._call_with_retry(
            lambda: self.provider.search(
                query, page_size=limit, category_filter=category_filter
            ),
            action=f"search:{query}",
        )
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        _logger.debug(
            "Food search %s: query=%s results=%s",
            self.provider.name,
            query,
            len(foods),
        )
        return foods

    async def _call_with_retry(
        self,
        func: "Callable[[], Awaitable[list[FoodCandidate]]]",
        *,
        action: str,
    ) -> list[FoodCandidate]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Food %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None) or getattr(
        exc.__cause__, "response", None
    )
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
