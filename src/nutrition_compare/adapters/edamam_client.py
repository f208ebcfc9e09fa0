"""Edamam Nutrition Analysis and Food Database API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from nutrition_compare.domain.errors import MissingCredentialsError


class EdamamClient(Protocol):
    """Interface for Edamam API interactions."""

    async def nutrition_data(self, ingredient: str) -> dict[str, object]:
        """Analyze a free-text ingredient line and return raw API data."""

    async def parse_food(self, ingredient: str) -> dict[str, object]:
        """Run the food database parser and return raw API data."""


@dataclass
class HttpxEdamamClient(EdamamClient):
    """HTTPX-backed Edamam client.

    The two Edamam products use separate application credentials.
    """

    nutrition_app_id: str | None
    nutrition_app_key: str | None
    food_app_id: str | None
    food_app_key: str | None
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        *,
        nutrition_app_id: str | None,
        nutrition_app_key: str | None,
        food_app_id: str | None,
        food_app_key: str | None,
        base_url: str,
        timeout: float,
    ) -> "HttpxEdamamClient":
        """Create an Edamam client with a managed httpx session."""
        return cls(
            nutrition_app_id=nutrition_app_id,
            nutrition_app_key=nutrition_app_key,
            food_app_id=food_app_id,
            food_app_key=food_app_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(timeout=timeout),
        )

    async def nutrition_data(self, ingredient: str) -> dict[str, object]:
        """Call the nutrition-data endpoint."""
        if not self.nutrition_app_id or not self.nutrition_app_key:
            raise MissingCredentialsError("Edamam nutrition credentials are not set")
        response = await self.http_client.get(
            f"{self.base_url}/api/nutrition-data",
            params={
                "app_id": self.nutrition_app_id,
                "app_key": self.nutrition_app_key,
                "nutrition-type": "logging",
                "ingr": ingredient,
            },
        )
        response.raise_for_status()
        return response.json()

    async def parse_food(self, ingredient: str) -> dict[str, object]:
        """Call the food database parser endpoint."""
        if not self.food_app_id or not self.food_app_key:
            raise MissingCredentialsError("Edamam food credentials are not set")
        response = await self.http_client.get(
            f"{self.base_url}/api/food-database/v2/parser",
            params={
                "app_id": self.food_app_id,
                "app_key": self.food_app_key,
                "ingr": ingredient,
            },
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
