"""Two-stage pipeline: recognize the dish, then look up its nutrition."""

import logging
from dataclasses import dataclass, replace

from nutrition_compare.domain.errors import ClientInputError
from nutrition_compare.domain.nutrition import AnalysisResult, ProviderSelector
from nutrition_compare.services.image_codec import ImagePayload
from nutrition_compare.services.providers import ProviderRegistry
from nutrition_compare.services.vision import VisionService

_logger = logging.getLogger(__name__)


@dataclass
class AnalysisService:
    """Chains dish recognition into the provider selected by tab."""

    vision_service: VisionService
    registry: ProviderRegistry

    async def analyze(
        self, image: ImagePayload | str | None, tab: object
    ) -> AnalysisResult:
        """Recognize the dish in ``image`` and look it up with provider ``tab``.

        Input is validated before any upstream call. The OpenAI tab estimates
        macros from the image in a second, independent vision call, so its
        record may carry a different dish name than the recognized one.
        """
        if not image or tab is None or tab == "":
            raise ClientInputError("Missing image or tab")
        selector = ProviderSelector.parse(tab)
        payload = _as_payload(image)

        dish_name = await self.vision_service.recognize(payload)
        _logger.info("Recognized dish %r (tab=%s)", dish_name, int(selector))

        if selector is ProviderSelector.OPENAI:
            nutrition = await self.vision_service.recognize_with_nutrition(payload)
            if not nutrition.dish_name:
                nutrition = replace(nutrition, dish_name=dish_name)
            return AnalysisResult(dish_name=dish_name, nutrition=nutrition)

        nutrition = await self.registry.get(selector).lookup(dish_name)
        return AnalysisResult(dish_name=dish_name, nutrition=nutrition)

    async def lookup_by_name(
        self, dish_name: str | None, tab: object
    ) -> AnalysisResult:
        """Look up a known dish name, skipping recognition."""
        if not dish_name or not dish_name.strip():
            raise ClientInputError("Missing query param q (food name)")
        selector = ProviderSelector.parse(tab)
        provider = self.registry.get(selector)
        nutrition = await provider.lookup(dish_name.strip())
        return AnalysisResult(dish_name=dish_name.strip(), nutrition=nutrition)

    async def recognize(self, image: ImagePayload | str | None) -> str:
        """Return only the recognized dish name."""
        if not image:
            raise ClientInputError("Missing image")
        return await self.vision_service.recognize(_as_payload(image))


def _as_payload(image: ImagePayload | str) -> ImagePayload:
    if isinstance(image, ImagePayload):
        return image
    return ImagePayload.from_base64(image)
