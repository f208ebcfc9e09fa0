"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_compare.adapters.edamam_client import HttpxEdamamClient
from nutrition_compare.adapters.fatsecret_client import HttpxFatSecretClient
from nutrition_compare.adapters.openai_client import OpenAITextClient
from nutrition_compare.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from nutrition_compare.adapters.spoonacular_client import HttpxSpoonacularClient
from nutrition_compare.config import Settings
from nutrition_compare.domain.nutrition import ProviderSelector
from nutrition_compare.services.analysis import AnalysisService
from nutrition_compare.services.cache import Cache, CachedProvider, InMemoryCache
from nutrition_compare.services.edamam import (
    EdamamFoodDatabaseProvider,
    EdamamNutritionProvider,
)
from nutrition_compare.services.estimate import OpenAINutritionEstimator
from nutrition_compare.services.fatsecret import FatSecretProvider
from nutrition_compare.services.openfoodfacts import OpenFoodFactsProvider
from nutrition_compare.services.providers import NutritionProvider, ProviderRegistry
from nutrition_compare.services.spoonacular import SpoonacularProvider
from nutrition_compare.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    vision_service: VisionService
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_registry(
    providers: dict[ProviderSelector, NutritionProvider],
    cache: Cache | None = None,
    ttl_seconds: int = 0,
) -> ProviderRegistry:
    """Build the selector dispatch table, wrapping providers in a cache."""
    if cache is None or ttl_seconds <= 0:
        return ProviderRegistry(providers)
    return ProviderRegistry(
        {
            selector: CachedProvider(provider, cache, ttl_seconds=ttl_seconds)
            for selector, provider in providers.items()
        }
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved = settings or Settings()
    strict = resolved.strict_nutrients
    timeout = resolved.http_timeout_seconds

    openai_client = OpenAITextClient.create(resolved.openai_api_key)
    edamam_client = HttpxEdamamClient.create(
        nutrition_app_id=resolved.edamam_nutrition_id,
        nutrition_app_key=resolved.edamam_nutrition_key,
        food_app_id=resolved.edamam_food_id,
        food_app_key=resolved.edamam_food_key,
        base_url=resolved.edamam_base_url,
        timeout=timeout,
    )
    fatsecret_client = HttpxFatSecretClient.create(
        client_id=resolved.fatsecret_client_id,
        client_secret=resolved.fatsecret_client_secret,
        token_url=resolved.fatsecret_token_url,
        api_url=resolved.fatsecret_api_url,
        timeout=timeout,
    )
    openfoodfacts_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved.openfoodfacts_base_url,
        user_agent=resolved.openfoodfacts_user_agent,
        timeout=timeout,
    )
    spoonacular_client = HttpxSpoonacularClient.create(
        api_key=resolved.spoonacular_key,
        base_url=resolved.spoonacular_base_url,
        timeout=timeout,
    )

    vision_service = VisionService(
        client=openai_client,
        model=resolved.openai_model,
        temperature=resolved.openai_temperature,
        strict_nutrients=strict,
    )
    registry = build_registry(
        {
            ProviderSelector.EDAMAM_NUTRITION: EdamamNutritionProvider(
                edamam_client, strict_nutrients=strict
            ),
            ProviderSelector.EDAMAM_FOOD_DATABASE: EdamamFoodDatabaseProvider(
                edamam_client, strict_nutrients=strict
            ),
            ProviderSelector.FATSECRET: FatSecretProvider(
                fatsecret_client, strict_nutrients=strict
            ),
            ProviderSelector.OPEN_FOOD_FACTS: OpenFoodFactsProvider(
                openfoodfacts_client, strict_nutrients=strict
            ),
            ProviderSelector.SPOONACULAR: SpoonacularProvider(
                spoonacular_client, strict_nutrients=strict
            ),
            ProviderSelector.OPENAI: OpenAINutritionEstimator(
                openai_client,
                model=resolved.openai_model,
                temperature=resolved.openai_temperature,
                strict_nutrients=strict,
            ),
        },
        cache=InMemoryCache(max_entries=resolved.nutrition_cache_max_entries),
        ttl_seconds=resolved.nutrition_cache_ttl_seconds,
    )
    analysis_service = AnalysisService(vision_service=vision_service, registry=registry)

    async def close_resources() -> None:
        await openai_client.close()
        await edamam_client.close()
        await fatsecret_client.close()
        await openfoodfacts_client.close()
        await spoonacular_client.close()

    return AppContainer(
        settings=resolved,
        vision_service=vision_service,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
