"""Dish recognition and image-based nutrition estimation using LLMs."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx
from openai import OpenAIError

from nutrition_compare.domain.errors import MissingCredentialsError, RecognitionError
from nutrition_compare.domain.nutrition import NutritionRecord
from nutrition_compare.services.image_codec import ImagePayload
from nutrition_compare.services.parsing import build_record, extract_json_object
from nutrition_compare.services.providers import provider_errors

PROVIDER_NAME = "openai"

RECOGNITION_PROMPT = (
    "Identify the primary food or dish in this image. "
    "Reply with a short name only, e.g. 'chicken curry with rice'. "
    "No extra explanation."
)

IMAGE_NUTRITION_PROMPT = """You will be given a food image. Identify the dish and \
visible ingredients, then estimate nutrition values PER 100g for: calories, \
protein (g), carbs (g), fat (g).
Return strictly valid JSON with these keys:
{ "foodName": "short name", "calories": number, "protein": number, \
"carbs": number, "fat": number }
Round numbers to one decimal place (or integer for calories).
If unsure, make a reasonable estimate."""

_logger = logging.getLogger(__name__)


class TextGenerationClient(Protocol):
    """Interface for single-turn LLM text generation."""

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        image_data_url: str | None = None,
    ) -> str:
        """Return the model's text answer, with an optional inline image."""


@dataclass
class VisionService:
    """Service that prepares vision prompts and validates results."""

    client: TextGenerationClient
    model: str
    temperature: float = 0.0
    strict_nutrients: bool = False

    async def recognize(self, image: ImagePayload) -> str:
        """Return a short dish name for the food in the image."""
        try:
            text = await self.client.generate(
                model=self.model,
                prompt=RECOGNITION_PROMPT,
                temperature=self.temperature,
                image_data_url=image.data_url,
            )
        except (OpenAIError, httpx.HTTPError, MissingCredentialsError) as exc:
            _logger.warning("Vision recognition failed: %s", exc)
            raise RecognitionError("Vision recognition failed") from exc
        dish_name = (text or "").strip()
        if not dish_name:
            raise RecognitionError("Vision recognition returned no dish name")
        return dish_name

    async def recognize_with_nutrition(self, image: ImagePayload) -> NutritionRecord:
        """Name the dish and estimate its macros from pixels in one call."""
        with provider_errors(PROVIDER_NAME, stage="image_nutrition"):
            text = await self.client.generate(
                model=self.model,
                prompt=IMAGE_NUTRITION_PROMPT,
                temperature=self.temperature,
                image_data_url=image.data_url,
            )
        payload = extract_json_object(text or "", PROVIDER_NAME)
        food_name = payload.get("foodName")
        return build_record(
            PROVIDER_NAME,
            payload,
            strict=self.strict_nutrients,
            dish_name=food_name.strip() if isinstance(food_name, str) else None,
        )
