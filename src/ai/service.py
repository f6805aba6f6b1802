"""AI service: provider registry plus ordered fallback across backends.

The service owns a name → provider mapping built from ``AIConfig``. Every
operation walks a per-call trial order (preferred, default, then the static
``PROVIDER_ORDER``) and returns the first success together with the name of
the provider that produced it. Per-attempt failures are logged and collected;
only total exhaustion propagates, as ``AllProvidersFailedError``.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from src.ai.providers import AIProvider, create_provider
from src.core.config import DEFAULT_PROVIDER, PROVIDER_ORDER, AIConfig
from src.core.errors import AllProvidersFailedError
from src.core.schemas import EmailDraft, EmailDraftContext, JobDetails, ResumeAnalysis

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProviderFactory = Callable[[str, str, str | None], AIProvider]


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    """Payload of a successful operation and the provider that produced it."""

    data: T
    provider: str


def trial_order(preferred: str | None, default: str | None) -> list[str]:
    """Preferred, then default, then the static order; first occurrence wins."""
    order: list[str] = []
    for name in (preferred, default, *PROVIDER_ORDER):
        if name and name not in order:
            order.append(name)
    return order


class AIService:
    """Registry of configured providers with ordered fallback.

    Reconfiguration swaps in a new mapping rather than mutating the current
    one, so a call already iterating its snapshot is unaffected.
    """

    def __init__(
        self,
        config: AIConfig | None = None,
        *,
        provider_factory: ProviderFactory = create_provider,
    ) -> None:
        config = config or AIConfig()
        self._factory = provider_factory
        self._providers: dict[str, AIProvider] = {}
        self._default_provider = DEFAULT_PROVIDER
        self._attempt_timeout_s = config.attempt_timeout_s
        self._apply(config)

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def update_config(self, config: AIConfig) -> None:
        """Merge a partial config: only blocks present with a key are replaced."""
        self._apply(config)
        logger.info("AI providers reconfigured: %s", ", ".join(self._providers) or "none")

    def _apply(self, config: AIConfig) -> None:
        providers = dict(self._providers)
        for name, block in config.provider_blocks().items():
            if not block.is_configured:
                continue
            providers[name] = self._factory(name, block.api_key, block.model)
        self._providers = providers

        if config.default_provider:
            self._default_provider = config.default_provider
        if "attempt_timeout_s" in config.model_fields_set:
            self._attempt_timeout_s = config.attempt_timeout_s

    @property
    def default_provider(self) -> str:
        return self._default_provider

    def has_provider(self) -> bool:
        return bool(self._providers)

    def configured_providers(self) -> list[str]:
        return list(self._providers)

    def get_provider(self, name: str | None = None) -> AIProvider | None:
        """Exact lookup by name, else the default, else any registered provider."""
        providers = self._providers
        if name:
            return providers.get(name)
        if self._default_provider in providers:
            return providers[self._default_provider]
        return next(iter(providers.values()), None)

    # ------------------------------------------------------------------
    # Fallback executor
    # ------------------------------------------------------------------

    async def _execute_with_fallback(
        self,
        operation: Callable[[AIProvider], Awaitable[T]],
        preferred: str | None = None,
    ) -> ProviderResult[T]:
        providers = self._providers
        timeout = self._attempt_timeout_s
        errors: list[str] = []

        for name in trial_order(preferred, self._default_provider):
            provider = providers.get(name)
            if provider is None or not provider.is_configured():
                continue

            deadline = asyncio.timeout(timeout)
            try:
                async with deadline:
                    result = await operation(provider)
            except Exception as e:
                # A backend's own TimeoutError keeps its message; only the
                # attempt deadline is reported as a timeout.
                if isinstance(e, TimeoutError) and deadline.expired():
                    errors.append(f"{name}: timed out after {timeout:g}s")
                    logger.warning("Provider %s timed out after %gs", name, timeout)
                else:
                    errors.append(f"{name}: {e}")
                    logger.warning("Provider %s failed: %s", name, e, exc_info=True)
            else:
                return ProviderResult(data=result, provider=name)

        raise AllProvidersFailedError(errors)

    async def generate_text(
        self, prompt: str, preferred: str | None = None
    ) -> ProviderResult[str]:
        return await self._execute_with_fallback(lambda p: p.complete(prompt), preferred)

    async def extract_job_details(
        self, text: str, preferred: str | None = None
    ) -> ProviderResult[JobDetails]:
        return await self._execute_with_fallback(
            lambda p: p.extract_job_details(text), preferred
        )

    async def analyze_resume(
        self, job_description: str, resume_text: str, preferred: str | None = None
    ) -> ProviderResult[ResumeAnalysis]:
        return await self._execute_with_fallback(
            lambda p: p.analyze_resume(job_description, resume_text), preferred
        )

    async def draft_email(
        self, context: EmailDraftContext, preferred: str | None = None
    ) -> ProviderResult[EmailDraft]:
        return await self._execute_with_fallback(lambda p: p.draft_email(context), preferred)


def describe_providers(service: AIService) -> Iterable[str]:
    """Yield one ``name (model)`` line per configured provider, in trial order."""
    for name in trial_order(None, service.default_provider):
        provider = service.get_provider(name)
        if provider is not None:
            yield f"{name} ({provider.model})"
