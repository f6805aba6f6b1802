"""Groq provider (OpenAI-compatible API)."""

import logging

from src.ai.providers.base import MAX_TOKENS, TEMPERATURE, AIProvider
from src.core.errors import ProviderError

logger = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class GroqProvider(AIProvider):
    """Fast Llama inference on Groq via the openai SDK."""

    @property
    def name(self) -> str:
        return "groq"

    @property
    def default_model(self) -> str:
        return "llama-3.1-70b-versatile"

    @property
    def env_var(self) -> str:
        return "GROQ_API_KEY"

    async def complete(self, prompt: str) -> str:
        try:
            import openai
        except ImportError:
            msg = (
                "openai is required for the Groq provider. "
                "Install with: pip install openai"
            )
            raise ImportError(msg) from None

        logger.info("Sending prompt to Groq (%s)...", self._model)
        async with openai.AsyncOpenAI(api_key=self._api_key, base_url=GROQ_BASE_URL) as client:
            response = await client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )

        if not response.choices or not response.choices[0].message.content:
            msg = "Groq API returned an empty response"
            raise ProviderError(msg)
        return response.choices[0].message.content  # type: ignore[no-any-return]
