"""Open Food Facts nutrition provider."""

from collections.abc import Mapping
from dataclasses import dataclass

from nutrition_compare.adapters.openfoodfacts_client import OpenFoodFactsClient
from nutrition_compare.domain.errors import ProviderError
from nutrition_compare.domain.nutrition import NutritionRecord
from nutrition_compare.services.parsing import build_record, coerce_amount
from nutrition_compare.services.providers import first_item, provider_errors

# Per-100 g keys first, then the older unsuffixed spellings.
_NUTRIMENT_KEYS = {
    "calories": ("energy-kcal_100g", "energy-kcal", "energy_kcal"),
    "protein": ("proteins_100g", "proteins"),
    "carbs": ("carbohydrates_100g", "carbohydrates"),
    "fat": ("fat_100g", "fat"),
}


@dataclass
class OpenFoodFactsProvider:
    """Unauthenticated product search; reads the first product's nutriments."""

    client: OpenFoodFactsClient
    strict_nutrients: bool = False
    name: str = "openfoodfacts"

    async def lookup(self, dish_name: str) -> NutritionRecord:
        """Return nutriments of the best-ranked product."""
        with provider_errors(self.name):
            payload = await self.client.search_products(dish_name, page_size=1)
            product = first_item(payload.get("products"))
            if product is None:
                raise ProviderError(self.name, f"no product found for {dish_name!r}")
            nutriments = product.get("nutriments") or {}
            values = {
                field: _first_present(nutriments, keys)
                for field, keys in _NUTRIMENT_KEYS.items()
            }
            return build_record(self.name, values, strict=self.strict_nutrients)


def _first_present(nutriments: Mapping[str, object], keys: tuple[str, ...]) -> object:
    for key in keys:
        value = nutriments.get(key)
        if coerce_amount(value) is not None:
            return value
    return None
