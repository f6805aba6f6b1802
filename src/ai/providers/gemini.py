"""Google Gemini provider (google-genai SDK)."""

import logging

from src.ai.providers.base import MAX_TOKENS, TEMPERATURE, AIProvider
from src.core.errors import ProviderError

logger = logging.getLogger(__name__)


class GeminiProvider(AIProvider):
    """Completion backend using the Google Gemini API (google-genai SDK)."""

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return "gemini-1.5-flash"

    @property
    def env_var(self) -> str:
        return "GEMINI_API_KEY"

    async def complete(self, prompt: str) -> str:
        try:
            from google import genai
            from google.genai import types as genai_types
        except ImportError:
            msg = (
                "google-genai is required for the Gemini provider. "
                "Install with: pip install google-genai"
            )
            raise ImportError(msg) from None

        client = genai.Client(api_key=self._api_key)

        logger.info("Sending prompt to Gemini API (%s)...", self._model)
        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(
                    temperature=TEMPERATURE,
                    max_output_tokens=MAX_TOKENS,
                ),
            )
        finally:
            await client.aio.aclose()

        if not response.text:
            msg = "Gemini API returned an empty response"
            raise ProviderError(msg)
        return response.text  # type: ignore[no-any-return]
