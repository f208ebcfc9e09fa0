"""Edamam nutrition providers."""

import logging
from dataclasses import dataclass

from nutrition_compare.adapters.edamam_client import EdamamClient
from nutrition_compare.domain.errors import ProviderError
from nutrition_compare.domain.nutrition import NutritionRecord
from nutrition_compare.services.parsing import build_record, coerce_amount
from nutrition_compare.services.providers import first_item, provider_errors

_NUTRIENT_CODES = {
    "calories": "ENERC_KCAL",
    "protein": "PROCNT",
    "carbs": "CHOCDF",
    "fat": "FAT",
}

_logger = logging.getLogger(__name__)


@dataclass
class EdamamNutritionProvider:
    """Nutrition Analysis API lookup (``nutrition-data``)."""

    client: EdamamClient
    strict_nutrients: bool = False
    name: str = "edamam-nutrition"

    async def lookup(self, dish_name: str) -> NutritionRecord:
        """Analyze the dish name as a single ingredient line."""
        with provider_errors(self.name):
            payload = await self.client.nutrition_data(dish_name)
            total = payload.get("totalNutrients") or {}
            # An unknown food comes back as zero calories with no nutrients.
            if not total and not coerce_amount(payload.get("calories")):
                _logger.info("Edamam nutrition had no data for %r", dish_name)
                raise ProviderError(self.name, f"no nutrition data for {dish_name!r}")
            values: dict[str, object] = {"calories": payload.get("calories")}
            for field in ("protein", "carbs", "fat"):
                nutrient = total.get(_NUTRIENT_CODES[field]) or {}
                values[field] = nutrient.get("quantity")
            return build_record(self.name, values, strict=self.strict_nutrients)


@dataclass
class EdamamFoodDatabaseProvider:
    """Food Database parser lookup, preferring exact parses over hints."""

    client: EdamamClient
    strict_nutrients: bool = False
    name: str = "edamam-food-database"

    async def lookup(self, dish_name: str) -> NutritionRecord:
        """Return nutrients of the first parsed food, else the first hint."""
        with provider_errors(self.name):
            payload = await self.client.parse_food(dish_name)
            match = first_item(payload.get("parsed")) or first_item(
                payload.get("hints")
            )
            food = match.get("food") if match else None
            if not food:
                raise ProviderError(self.name, f"food not found for {dish_name!r}")
            nutrients = food.get("nutrients") or {}
            values = {
                field: nutrients.get(code) for field, code in _NUTRIENT_CODES.items()
            }
            return build_record(self.name, values, strict=self.strict_nutrients)
