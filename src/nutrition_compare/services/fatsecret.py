"""FatSecret nutrition provider (token, search, detail)."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import NoReturn

from nutrition_compare.adapters.fatsecret_client import FatSecretClient
from nutrition_compare.domain.errors import ProviderError
from nutrition_compare.domain.nutrition import NutritionRecord
from nutrition_compare.services.parsing import build_record
from nutrition_compare.services.providers import first_item, provider_errors

_logger = logging.getLogger(__name__)


@dataclass
class FatSecretProvider:
    """Three-call lookup against the FatSecret Platform API.

    Each call depends on the previous one, so a failure stops the chain and
    the raised error names the stage: ``token``, ``search`` or ``detail``.
    """

    client: FatSecretClient
    strict_nutrients: bool = False
    name: str = "fatsecret"

    async def lookup(self, dish_name: str) -> NutritionRecord:
        """Return the first serving of the first matching food."""
        token = await self._fetch_token()
        food_id = await self._search(token, dish_name)
        serving = await self._first_serving(token, food_id)
        values = {
            "calories": serving.get("calories"),
            "protein": serving.get("protein"),
            "carbs": serving.get("carbohydrate"),
            "fat": serving.get("fat"),
        }
        return build_record(self.name, values, strict=self.strict_nutrients)

    async def _fetch_token(self) -> str:
        with provider_errors(self.name, stage="token"):
            payload = await self.client.fetch_token()
            token = payload.get("access_token")
            if not token:
                self._fail("token", "no access token returned", payload)
            return str(token)

    async def _search(self, token: str, dish_name: str) -> str:
        with provider_errors(self.name, stage="search"):
            payload = await self.client.search_foods(token, dish_name)
            self._raise_on_api_error("search", payload)
            foods = payload.get("foods") or {}
            food = first_item(
                foods.get("food") if isinstance(foods, Mapping) else foods
            ) or {}
            food_id = food.get("food_id") or food.get("id")
            if not food_id:
                self._fail("search", f"no food found for {dish_name!r}", payload)
            return str(food_id)

    async def _first_serving(self, token: str, food_id: str) -> Mapping[str, object]:
        with provider_errors(self.name, stage="detail"):
            payload = await self.client.get_food(token, food_id)
            self._raise_on_api_error("detail", payload)
            food = payload.get("food") or {}
            servings = food.get("servings") or {}
            serving = first_item(servings.get("serving"))
            if serving is None:
                self._fail("detail", f"no serving data for food {food_id}", payload)
            return serving

    def _raise_on_api_error(self, stage: str, payload: Mapping[str, object]) -> None:
        error = payload.get("error")
        if error:
            message = error.get("message") if isinstance(error, Mapping) else error
            self._fail(stage, f"API error: {message}", payload)

    def _fail(self, stage: str, message: str, payload: object) -> NoReturn:
        _logger.warning("FatSecret %s failed: %s payload=%s", stage, message, payload)
        raise ProviderError(self.name, message, stage=stage, detail=str(payload))
