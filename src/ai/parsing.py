"""Parse backend replies into typed payloads.

Backends are asked for bare JSON but frequently wrap it in a markdown fence.
Parsing never raises on bad input: it returns a ``ParsedResponse`` carrying
either the payload or the reason it was rejected.
"""

import json
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from src.core.errors import ResponseParseError

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class ParsedResponse(Generic[T]):
    data: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.data is not None

    def unwrap(self) -> T:
        """Return the payload or raise ResponseParseError with the reason."""
        if self.data is None:
            raise ResponseParseError(self.error or "empty response")
        return self.data


def strip_code_fences(raw_text: str) -> str:
    """Remove an optional leading ```json / ``` and trailing ``` marker."""
    cleaned = raw_text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[len("```"):]
    if cleaned.endswith("```"):
        cleaned = cleaned[: -len("```")]
    return cleaned.strip()


def parse_response(raw_text: str, model: type[T]) -> ParsedResponse[T]:
    """Parse raw backend text into ``model``.

    Rejects non-JSON text, JSON that is not an object, and objects with
    missing or mistyped fields.
    """
    cleaned = strip_code_fences(raw_text)
    if not cleaned:
        return ParsedResponse(error="Empty response from provider")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        return ParsedResponse(error=f"Failed to parse AI response as JSON: {e}")

    if not isinstance(data, dict):
        kind = type(data).__name__
        return ParsedResponse(error=f"Expected a JSON object, got {kind}")

    try:
        return ParsedResponse(data=model.model_validate(data))
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return ParsedResponse(
            error=f"AI response does not match {model.__name__} (invalid: {fields})"
        )
