"""Helpers that turn raw provider payloads into nutrition records."""

import json
import logging
from collections.abc import Mapping

from nutrition_compare.domain.errors import NutritionParseError, ProviderError
from nutrition_compare.domain.nutrition import NutritionRecord

_logger = logging.getLogger(__name__)

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat")


def extract_json_object(text: str, provider: str) -> dict[str, object]:
    """Parse the span between the first ``{`` and the last ``}`` in ``text``.

    Models often wrap their JSON in prose; anything outside the span is
    ignored.
    """
    first = text.find("{")
    last = text.rfind("}")
    if first < 0 or last < first:
        _logger.warning("%s returned no JSON object: %r", provider, text)
        raise NutritionParseError(
            provider, "response did not contain a JSON object", detail=text
        )
    try:
        parsed = json.loads(text[first : last + 1])
    except json.JSONDecodeError as exc:
        _logger.warning("%s returned invalid JSON: %r", provider, text)
        raise NutritionParseError(
            provider, "response JSON could not be parsed", detail=text
        ) from exc
    if not isinstance(parsed, dict):
        raise NutritionParseError(
            provider, "response JSON was not an object", detail=text
        )
    return parsed


def coerce_amount(value: object) -> float | None:
    """Read a numeric amount from a number, a numeric string or a wrapper.

    Wrappers are mappings carrying ``value`` or ``amount``.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    if isinstance(value, Mapping):
        if "value" in value:
            return coerce_amount(value["value"])
        if "amount" in value:
            return coerce_amount(value["amount"])
    return None


def build_record(
    provider: str,
    values: Mapping[str, object],
    *,
    strict: bool = False,
    dish_name: str | None = None,
) -> NutritionRecord:
    """Build a record from ``calories/protein/carbs/fat`` values.

    Missing values become zero unless ``strict`` is set.
    """
    amounts = {field: coerce_amount(values.get(field)) for field in NUTRIENT_FIELDS}
    missing = [field for field, amount in amounts.items() if amount is None]
    if missing and strict:
        raise ProviderError(
            provider, f"missing nutrient values: {', '.join(missing)}"
        )
    return NutritionRecord(
        calories=amounts["calories"] or 0.0,
        protein_g=amounts["protein"] or 0.0,
        carbs_g=amounts["carbs"] or 0.0,
        fat_g=amounts["fat"] or 0.0,
        dish_name=dish_name,
    )
