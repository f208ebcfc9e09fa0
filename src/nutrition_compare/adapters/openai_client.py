"""OpenAI Responses API client for dish recognition and estimates."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from nutrition_compare.domain.errors import MissingCredentialsError
from nutrition_compare.services.vision import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text generation client backed by the OpenAI Responses API.

    ``client`` is ``None`` when no API key is configured; calls then fail
    with ``MissingCredentialsError`` instead of breaking startup.
    """

    client: AsyncOpenAI | None

    @classmethod
    def create(cls, api_key: str | None) -> "OpenAITextClient":
        """Create an OpenAI client, deferring missing-key errors to call time."""
        if not api_key:
            return cls(client=None)
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        image_data_url: str | None = None,
    ) -> str:
        """Send a single user turn and return the output text."""
        if self.client is None:
            raise MissingCredentialsError("OpenAI API key is not set")
        content: list[dict[str, str]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        response = await self.client.responses.create(
            model=model,
            input=[{"role": "user", "content": content}],
            temperature=temperature,
        )
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.client is not None:
            await self.client.close()
