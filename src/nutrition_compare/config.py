"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Provider credentials are optional. A provider without credentials fails
    when it is called, the rest of the service keeps working.
    """

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.0
    edamam_nutrition_id: str | None = None
    edamam_nutrition_key: str | None = None
    edamam_food_id: str | None = None
    edamam_food_key: str | None = None
    edamam_base_url: str = "https://api.edamam.com"
    fatsecret_client_id: str | None = None
    fatsecret_client_secret: str | None = None
    fatsecret_token_url: str = "https://oauth.fatsecret.com/connect/token"
    fatsecret_api_url: str = "https://platform.fatsecret.com/rest/server.api"
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org"
    openfoodfacts_user_agent: str = "nutrition-compare/0.1 (food photo comparison)"
    spoonacular_key: str | None = None
    spoonacular_base_url: str = "https://api.spoonacular.com"
    http_timeout_seconds: float = 15.0
    strict_nutrients: bool = False
    nutrition_cache_ttl_seconds: int = 3600
    nutrition_cache_max_entries: int = 1024
    cors_allow_origins: str = "*"
    static_dir: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
