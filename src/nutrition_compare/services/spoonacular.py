"""Spoonacular nutrition provider with an ingredient fallback."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from nutrition_compare.adapters.spoonacular_client import SpoonacularClient
from nutrition_compare.domain.errors import ProviderError
from nutrition_compare.domain.nutrition import NutritionRecord
from nutrition_compare.services.parsing import build_record, coerce_amount
from nutrition_compare.services.providers import first_item, provider_errors

_REFERENCE_GRAMS = 100

_NUTRIENT_NAMES = {
    "calories": "calories",
    "protein": "protein",
    "carbs": "carbohydrate",
    "fat": "fat",
}

_logger = logging.getLogger(__name__)


@dataclass
class SpoonacularProvider:
    """Dish-title estimate, falling back to a raw ingredient lookup.

    ``guessNutrition`` often has no data for prepared dishes; the ingredient
    endpoints are more complete for single foods.
    """

    client: SpoonacularClient
    strict_nutrients: bool = False
    name: str = "spoonacular"

    async def lookup(self, dish_name: str) -> NutritionRecord:
        """Try the title estimate first, then the ingredient breakdown."""
        with provider_errors(self.name, stage="guess"):
            guess = await self.client.guess_nutrition(dish_name)
            if coerce_amount(guess.get("calories")) is not None:
                return build_record(self.name, guess, strict=self.strict_nutrients)

        _logger.info("Spoonacular guess had no calories for %r", dish_name)
        ingredient_id = await self._find_ingredient(dish_name)
        with provider_errors(self.name, stage="ingredient_information"):
            info = await self.client.ingredient_information(
                ingredient_id, amount=_REFERENCE_GRAMS, unit="g"
            )
            nutrients = (info.get("nutrition") or {}).get("nutrients") or []
            values = {
                field: find_nutrient(nutrients, search)
                for field, search in _NUTRIENT_NAMES.items()
            }
            return build_record(self.name, values, strict=self.strict_nutrients)

    async def _find_ingredient(self, dish_name: str) -> int:
        with provider_errors(self.name, stage="ingredient_search"):
            payload = await self.client.search_ingredients(dish_name, number=1)
            match = first_item(payload.get("results"))
            if match is None or match.get("id") is None:
                raise ProviderError(
                    self.name,
                    f"ingredient not found for {dish_name!r}",
                    stage="ingredient_search",
                    detail=str(payload),
                )
            return int(match["id"])


def find_nutrient(nutrients: list[Mapping[str, object]], search: str) -> object:
    """Find a nutrient amount by case-insensitive name.

    An exact name wins over a prefix match, which wins over a substring
    match, so ``fat`` does not pick up ``Saturated Fat`` when ``Fat`` exists.
    """
    search = search.lower()
    named = [
        (str(nutrient["name"]).lower(), nutrient)
        for nutrient in nutrients
        if isinstance(nutrient, Mapping) and nutrient.get("name")
    ]
    for matches in (
        lambda name: name == search,
        lambda name: name.startswith(search),
        lambda name: search in name,
    ):
        for name, nutrient in named:
            if matches(name):
                return nutrient.get("amount")
    return None
