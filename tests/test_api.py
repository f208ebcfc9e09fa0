"""Tests for the HTTP endpoints."""

import base64

import httpx
from fastapi.testclient import TestClient

from nutrition_compare.api.app import create_app
from nutrition_compare.containers import AppContainer, build_registry
from nutrition_compare.domain.nutrition import ProviderSelector
from nutrition_compare.services.analysis import AnalysisService
from tests.fakes import JPEG_BYTES, CountingProvider, FakeClients

IMAGE = base64.b64encode(JPEG_BYTES).decode()


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_image_returns_food_and_nutrition(
    container: AppContainer, clients: FakeClients
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-image", json={"image": IMAGE, "tab": 2})

    assert response.status_code == 200
    assert response.json() == {
        "foodName": "chicken curry",
        "nutrition": {"calories": 150.0, "protein": 10.2, "carbs": 8.1, "fat": 7.5},
    }
    assert clients.edamam.calls == ["parse_food:chicken curry"]


def test_analyze_image_openai_tab_includes_estimate_name(
    container: AppContainer, clients: FakeClients
) -> None:
    clients.text.responses = [
        "chicken curry",
        '{"foodName": "butter chicken", "calories": 150, "protein": 12,'
        ' "carbs": 6, "fat": 9}',
    ]
    client = TestClient(create_app(container))

    response = client.post(
        "/api/analyze-image",
        json={"image": f"data:image/jpeg;base64,{IMAGE}", "tab": "6"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["foodName"] == "chicken curry"
    assert data["nutrition"] == {
        "foodName": "butter chicken",
        "calories": 150.0,
        "protein": 12.0,
        "carbs": 6.0,
        "fat": 9.0,
    }


def test_analyze_image_missing_fields(
    container: AppContainer, clients: FakeClients
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-image", json={"tab": 1})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing image or tab"}
    assert clients.network_calls() == 0


def test_analyze_image_invalid_tab(
    container: AppContainer, clients: FakeClients
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-image", json={"image": IMAGE, "tab": 9})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid tab (must be 1-6)"}
    assert clients.network_calls() == 0


def test_analyze_image_malformed_body(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/analyze-image",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_analyze_image_provider_failure_hides_upstream_body(
    container: AppContainer, clients: FakeClients
) -> None:
    clients.fatsecret.token_payload = {"error": "invalid_client", "secret": "s3cr3t"}
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-image", json={"image": IMAGE, "tab": 3})

    assert response.status_code == 502
    error = response.json()["error"]
    assert error.startswith("fatsecret failed at token")
    assert "s3cr3t" not in error
    assert clients.fatsecret.calls == ["token"]


def test_analyze_image_recognition_failure(
    container: AppContainer, clients: FakeClients
) -> None:
    clients.text.responses = [""]
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-image", json={"image": IMAGE, "tab": 1})

    assert response.status_code == 502
    assert "error" in response.json()
    assert clients.provider_calls() == 0


def test_analyze_image_hides_upstream_error_text(
    container: AppContainer, clients: FakeClients
) -> None:
    clients.text.error = httpx.ConnectError("upstream body api_key=sk-SECRET123")
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-image", json={"image": IMAGE, "tab": 1})

    assert response.status_code == 502
    assert response.json() == {"error": "Vision recognition failed"}
    assert "sk-SECRET123" not in response.text


def test_nutrition_by_name(container: AppContainer, clients: FakeClients) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api/nutrition/5", params={"q": "chicken curry"})

    assert response.status_code == 200
    assert response.json() == {
        "foodName": "chicken curry",
        "nutrition": {"calories": 520.0, "protein": 30.0, "carbs": 40.0, "fat": 22.0},
    }
    assert clients.text.calls == []


def test_nutrition_by_name_requires_query(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api/nutrition/1")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing query param q (food name)"}


def test_nutrition_by_name_invalid_tab(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api/nutrition/abc", params={"q": "rice"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid tab (must be 1-6)"}


def test_vision_upload_returns_food_name(
    container: AppContainer, clients: FakeClients
) -> None:
    client = TestClient(create_app(container))
    png = b"\x89PNG\r\n\x1a\n" + b"pixels"

    response = client.post(
        "/api/openai/vision", files={"image": ("meal.png", png, "image/png")}
    )

    assert response.status_code == 200
    assert response.json() == {"foodName": "chicken curry"}
    image_url = str(clients.text.calls[0]["image_data_url"])
    assert image_url == "data:image/png;base64," + base64.b64encode(png).decode()


def test_vision_upload_missing_file(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/openai/vision")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing file"}


def test_unexpected_error_returns_generic_500(container: AppContainer) -> None:
    providers = {selector: CountingProvider() for selector in ProviderSelector}
    providers[ProviderSelector.OPEN_FOOD_FACTS] = CountingProvider(
        error=RuntimeError("database password in message")
    )
    container.analysis_service = AnalysisService(
        vision_service=container.vision_service,
        registry=build_registry(providers),
    )
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get("/api/nutrition/4", params={"q": "rice"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
