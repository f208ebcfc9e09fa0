"""Request and response models for the HTTP API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from nutrition_compare.domain.nutrition import AnalysisResult, NutritionRecord


class AnalyzeRequest(BaseModel):
    """Body of ``POST /api/analyze-image``.

    Both fields are optional here so that missing values are reported as
    client errors by the analysis service.
    """

    image: str | None = None
    tab: Any = None


class NutritionPayload(BaseModel):
    """Nutrition record as exposed to clients."""

    model_config = ConfigDict(populate_by_name=True)

    food_name: str | None = Field(default=None, alias="foodName")
    calories: float
    protein: float
    carbs: float
    fat: float

    @classmethod
    def from_record(cls, record: NutritionRecord) -> "NutritionPayload":
        """Map a domain record onto the camelCase client shape."""
        return cls(
            food_name=record.dish_name,
            calories=record.calories,
            protein=record.protein_g,
            carbs=record.carbs_g,
            fat=record.fat_g,
        )


class AnalyzeResponse(BaseModel):
    """Recognized dish name with its nutrition."""

    model_config = ConfigDict(populate_by_name=True)

    food_name: str = Field(alias="foodName")
    nutrition: NutritionPayload

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalyzeResponse":
        """Build the response for a recognized dish and its nutrition."""
        return cls(
            food_name=result.dish_name,
            nutrition=NutritionPayload.from_record(result.nutrition),
        )


class RecognitionResponse(BaseModel):
    """Dish name recognized from an uploaded image."""

    model_config = ConfigDict(populate_by_name=True)

    food_name: str = Field(alias="foodName")
