"""Spoonacular API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from nutrition_compare.domain.errors import MissingCredentialsError


class SpoonacularClient(Protocol):
    """Interface for Spoonacular nutrition endpoints."""

    async def guess_nutrition(self, title: str) -> dict[str, object]:
        """Estimate nutrition from a dish title."""

    async def search_ingredients(
        self, query: str, number: int = 1
    ) -> dict[str, object]:
        """Search ingredients by name."""

    async def ingredient_information(
        self, ingredient_id: int, amount: float = 100, unit: str = "g"
    ) -> dict[str, object]:
        """Fetch an ingredient's nutrient breakdown for an amount."""


@dataclass
class HttpxSpoonacularClient(SpoonacularClient):
    """HTTPX-backed Spoonacular client."""

    api_key: str | None
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, *, api_key: str | None, base_url: str, timeout: float
    ) -> "HttpxSpoonacularClient":
        """Create a Spoonacular client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(timeout=timeout),
        )

    async def guess_nutrition(self, title: str) -> dict[str, object]:
        """Call ``recipes/guessNutrition``."""
        return await self._get("/recipes/guessNutrition", {"title": title})

    async def search_ingredients(
        self, query: str, number: int = 1
    ) -> dict[str, object]:
        """Call ``food/ingredients/search``."""
        return await self._get(
            "/food/ingredients/search", {"query": query, "number": number}
        )

    async def ingredient_information(
        self, ingredient_id: int, amount: float = 100, unit: str = "g"
    ) -> dict[str, object]:
        """Call ``food/ingredients/{id}/information``."""
        return await self._get(
            f"/food/ingredients/{ingredient_id}/information",
            {"amount": amount, "unit": unit},
        )

    async def _get(self, path: str, params: dict[str, object]) -> dict[str, object]:
        if not self.api_key:
            raise MissingCredentialsError("Spoonacular API key is not set")
        response = await self.http_client.get(
            f"{self.base_url}{path}",
            params={**params, "apiKey": self.api_key},
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
