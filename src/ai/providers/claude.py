"""Anthropic Claude provider."""

import logging

from src.ai.providers.base import MAX_TOKENS, TEMPERATURE, AIProvider
from src.core.errors import ProviderError

logger = logging.getLogger(__name__)


class ClaudeProvider(AIProvider):
    """Completion backend using the Anthropic Messages API."""

    @property
    def name(self) -> str:
        return "claude"

    @property
    def default_model(self) -> str:
        return "claude-3-5-sonnet-20241022"

    @property
    def env_var(self) -> str:
        return "CLAUDE_API_KEY"

    async def complete(self, prompt: str) -> str:
        try:
            import anthropic
        except ImportError:
            msg = (
                "anthropic is required for the Claude provider. "
                "Install with: pip install anthropic"
            )
            raise ImportError(msg) from None

        logger.info("Sending prompt to Anthropic API (%s)...", self._model)
        async with anthropic.AsyncAnthropic(api_key=self._api_key) as client:
            message = await client.messages.create(
                model=self._model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                messages=[{"role": "user", "content": prompt}],
            )

        # First text block; tool-use or thinking blocks are ignored.
        for block in message.content:
            if getattr(block, "type", None) == "text" and block.text:
                return block.text  # type: ignore[no-any-return]

        msg = "Claude API returned no text content"
        raise ProviderError(msg)
