"""LLM nutrition estimate by dish name."""

from dataclasses import dataclass

from nutrition_compare.domain.nutrition import NutritionRecord
from nutrition_compare.services.parsing import build_record, extract_json_object
from nutrition_compare.services.providers import provider_errors
from nutrition_compare.services.vision import TextGenerationClient

NAME_NUTRITION_PROMPT = """Provide nutrition estimates PER 100g for "{dish_name}".
Return strictly valid JSON:
{{ "calories": number, "protein": number, "carbs": number, "fat": number }}
Round numbers to one decimal place."""


@dataclass
class OpenAINutritionEstimator:
    """Text-only macro estimate from the language model."""

    client: TextGenerationClient
    model: str
    temperature: float = 0.0
    strict_nutrients: bool = False
    name: str = "openai"

    async def lookup(self, dish_name: str) -> NutritionRecord:
        """Ask the model for per-100 g macros of a named dish."""
        with provider_errors(self.name):
            text = await self.client.generate(
                model=self.model,
                prompt=NAME_NUTRITION_PROMPT.format(dish_name=dish_name),
                temperature=self.temperature,
            )
        payload = extract_json_object(text or "", self.name)
        return build_record(self.name, payload, strict=self.strict_nutrients)
