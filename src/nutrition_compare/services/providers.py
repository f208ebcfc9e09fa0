"""Shared provider interface, error handling and the selector registry."""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

import httpx
from openai import OpenAIError

from nutrition_compare.domain.errors import MissingCredentialsError, ProviderError
from nutrition_compare.domain.nutrition import NutritionRecord, ProviderSelector

_logger = logging.getLogger(__name__)


class NutritionProvider(Protocol):
    """A nutrition data source that normalizes its answers."""

    name: str

    async def lookup(self, dish_name: str) -> NutritionRecord:
        """Return a per-100 g nutrition record for a dish name."""


@contextmanager
def provider_errors(provider: str, stage: str | None = None) -> Iterator[None]:
    """Convert transport, shape and credential failures into ProviderError."""
    try:
        yield
    except ProviderError:
        raise
    except MissingCredentialsError as exc:
        _logger.warning("%s is not configured: %s", provider, exc)
        raise ProviderError(provider, str(exc), stage=stage) from exc
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code
        body = exc.response.text
        _logger.warning(
            "%s request failed (stage=%s, status=%s): %s",
            provider,
            stage or "n/a",
            status_code,
            body,
        )
        raise ProviderError(
            provider,
            f"upstream returned HTTP {status_code}",
            stage=stage,
            detail=body,
        ) from exc
    except (httpx.HTTPError, OpenAIError) as exc:
        _logger.warning(
            "%s transport error (stage=%s): %s", provider, stage or "n/a", exc
        )
        raise ProviderError(
            provider, "upstream request failed", stage=stage, detail=str(exc)
        ) from exc
    except (KeyError, TypeError, ValueError, AttributeError, IndexError) as exc:
        _logger.warning(
            "%s returned an unexpected payload (stage=%s): %r",
            provider,
            stage or "n/a",
            exc,
        )
        raise ProviderError(
            provider, "unexpected response shape", stage=stage, detail=repr(exc)
        ) from exc


def first_item(value: object) -> Mapping[str, object] | None:
    """Return the first mapping of a list, or the value itself if a mapping."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, Mapping):
        return value
    return None


@dataclass
class ProviderRegistry:
    """Dispatch table from selector to provider."""

    providers: Mapping[ProviderSelector, NutritionProvider]

    def __post_init__(self) -> None:
        missing = set(ProviderSelector) - set(self.providers)
        if missing:
            names = ", ".join(selector.name for selector in sorted(missing))
            raise ValueError(f"No provider registered for: {names}")

    def get(self, selector: ProviderSelector) -> NutritionProvider:
        """Return the provider registered for a selector."""
        return self.providers[selector]

    def selectors(self) -> list[ProviderSelector]:
        """Return the registered selectors in tab order."""
        return sorted(self.providers)
