"""Abstract base class for completion backends and the shared task logic."""

import logging
from abc import ABC, abstractmethod
from typing import TypeVar

from pydantic import BaseModel

from src.ai.parsing import parse_response
from src.ai.prompts import analyze_resume_prompt, draft_email_prompt, extract_job_details_prompt
from src.core.schemas import EmailDraft, EmailDraftContext, JobDetails, ResumeAnalysis

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_TOKENS = 4096


class AIProvider(ABC):
    """Base class that every completion backend must implement.

    Subclasses only talk to their API in ``complete``; the structured
    operations are built on top of it here so every backend prompts and
    parses identically.
    """

    def __init__(self, api_key: str, model: str | None = None) -> None:
        self._api_key = api_key
        self._model = model or self.default_model

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this provider (e.g. 'groq')."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """The model ID used when no override is configured."""

    @property
    @abstractmethod
    def env_var(self) -> str:
        """Environment variable holding the API key."""

    @property
    def model(self) -> str:
        return self._model

    def is_configured(self) -> bool:
        return bool(self._api_key)

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Send a single user prompt and return the raw response text.

        Raises:
            ProviderError: On an empty reply.
            Exception: Any SDK transport or HTTP status error, unchanged.
        """

    async def extract_job_details(self, text: str) -> JobDetails:
        raw = await self.complete(extract_job_details_prompt(text))
        return self._parse(raw, JobDetails)

    async def analyze_resume(self, job_description: str, resume_text: str) -> ResumeAnalysis:
        raw = await self.complete(analyze_resume_prompt(job_description, resume_text))
        return self._parse(raw, ResumeAnalysis)

    async def draft_email(self, context: EmailDraftContext) -> EmailDraft:
        raw = await self.complete(draft_email_prompt(context))
        return self._parse(raw, EmailDraft)

    def _parse(self, raw: str, model: type[T]) -> T:
        parsed = parse_response(raw, model)
        if not parsed.ok:
            logger.debug("%s returned unparseable response: %r", self.name, raw[:500])
        return parsed.unwrap()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self._model!r})"
