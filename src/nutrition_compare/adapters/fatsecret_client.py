"""FatSecret Platform API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from nutrition_compare.domain.errors import MissingCredentialsError


class FatSecretClient(Protocol):
    """Interface for FatSecret API interactions."""

    async def fetch_token(self) -> dict[str, object]:
        """Exchange client credentials for a bearer token payload."""

    async def search_foods(self, token: str, query: str) -> dict[str, object]:
        """Search foods by free text and return raw API data."""

    async def get_food(self, token: str, food_id: str) -> dict[str, object]:
        """Fetch full food detail and return raw API data."""


@dataclass
class HttpxFatSecretClient(FatSecretClient):
    """HTTPX-backed FatSecret client using the client-credentials grant."""

    client_id: str | None
    client_secret: str | None
    token_url: str
    api_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        *,
        client_id: str | None,
        client_secret: str | None,
        token_url: str,
        api_url: str,
        timeout: float,
    ) -> "HttpxFatSecretClient":
        """Create a FatSecret client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            token_url=token_url,
            api_url=api_url,
            http_client=httpx.AsyncClient(timeout=timeout),
        )

    async def fetch_token(self) -> dict[str, object]:
        """Request an access token."""
        if not self.client_id or not self.client_secret:
            raise MissingCredentialsError("FatSecret client credentials are not set")
        response = await self.http_client.post(
            self.token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
        )
        response.raise_for_status()
        return response.json()

    async def search_foods(self, token: str, query: str) -> dict[str, object]:
        """Call ``foods.search``."""
        return await self._call(
            token,
            {"method": "foods.search", "search_expression": query, "format": "json"},
        )

    async def get_food(self, token: str, food_id: str) -> dict[str, object]:
        """Call ``food.get.v2``."""
        return await self._call(
            token, {"method": "food.get.v2", "food_id": food_id, "format": "json"}
        )

    async def _call(self, token: str, params: dict[str, str]) -> dict[str, object]:
        response = await self.http_client.get(
            self.api_url,
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
