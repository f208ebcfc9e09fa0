"""Shared test fixtures."""

import pytest

from nutrition_compare.config import Settings
from nutrition_compare.containers import AppContainer, build_registry
from nutrition_compare.services.analysis import AnalysisService
from nutrition_compare.services.vision import VisionService
from tests.fakes import FakeClients


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="openai-key",
        edamam_nutrition_id="edamam-id",
        edamam_nutrition_key="edamam-key",
        edamam_food_id="food-id",
        edamam_food_key="food-key",
        fatsecret_client_id="fs-id",
        fatsecret_client_secret="fs-secret",
        spoonacular_key="spoon-key",
    )


@pytest.fixture
def clients() -> FakeClients:
    return FakeClients()


@pytest.fixture
def vision_service(settings: Settings, clients: FakeClients) -> VisionService:
    return VisionService(client=clients.text, model=settings.openai_model)


@pytest.fixture
def analysis_service(
    vision_service: VisionService, clients: FakeClients
) -> AnalysisService:
    return AnalysisService(
        vision_service=vision_service,
        registry=build_registry(clients.providers()),
    )


@pytest.fixture
def container(
    settings: Settings,
    vision_service: VisionService,
    analysis_service: AnalysisService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        vision_service=vision_service,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
