"""Nutrition domain models."""

from dataclasses import dataclass
from enum import IntEnum

from nutrition_compare.domain.errors import ClientInputError


@dataclass(frozen=True)
class NutritionRecord:
    """Macronutrient estimate per 100 g of a named food."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    dish_name: str | None = None


@dataclass(frozen=True)
class AnalysisResult:
    """Dish name paired with the nutrition record found for it."""

    dish_name: str
    nutrition: NutritionRecord


class ProviderSelector(IntEnum):
    """Tab numbers exposed to clients, one per nutrition provider."""

    EDAMAM_NUTRITION = 1
    EDAMAM_FOOD_DATABASE = 2
    FATSECRET = 3
    OPEN_FOOD_FACTS = 4
    SPOONACULAR = 5
    OPENAI = 6

    @classmethod
    def parse(cls, raw: object) -> "ProviderSelector":
        """Convert a raw tab value from a request into a selector."""
        if isinstance(raw, bool):
            raise ClientInputError("Invalid tab (must be 1-6)")
        if isinstance(raw, str):
            raw = raw.strip()
            if not raw.isdigit():
                raise ClientInputError("Invalid tab (must be 1-6)")
            raw = int(raw)
        if not isinstance(raw, int):
            raise ClientInputError("Invalid tab (must be 1-6)")
        try:
            return cls(raw)
        except ValueError as exc:
            raise ClientInputError("Invalid tab (must be 1-6)") from exc
