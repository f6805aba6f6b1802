"""Structured payloads exchanged with the completion backends.

All models are frozen and use camelCase field names on the wire
(``matchScore``, ``recipientName``) while exposing snake_case attributes.
Backend replies are validated with strict scalar types: ``"85"`` is not a
score. Request bodies (``EmailDraftContext``) stay lax.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class _Payload(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, object]:
        """Dump with camelCase keys, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class JobDetails(_Payload):
    """Job posting fields mined from free text or a scraped page."""

    title: StrictStr
    company: StrictStr
    location: StrictStr
    description: StrictStr
    salary: StrictStr | None = None
    requirements: list[StrictStr] | None = None
    source: StrictStr | None = None


class KeywordMatch(_Payload):
    matched: list[StrictStr] = Field(default_factory=list)
    missing: list[StrictStr] = Field(default_factory=list)


class ResumeAnalysis(_Payload):
    """How well a resume matches a job description."""

    match_score: StrictInt = Field(ge=0, le=100)
    strengths: list[StrictStr] = Field(default_factory=list)
    gaps: list[StrictStr] = Field(default_factory=list)
    recommendations: list[StrictStr] = Field(default_factory=list)
    keywords: KeywordMatch = Field(default_factory=KeywordMatch)


class Tone(str, Enum):
    FORMAL = "Formal"
    CASUAL = "Casual"
    ENTHUSIASTIC = "Enthusiastic"
    PROFESSIONAL = "Professional"


class Intent(str, Enum):
    CONNECT = "Connect"
    FOLLOW_UP = "FollowUp"
    REFERRAL_REQUEST = "ReferralRequest"
    PEER_OUTREACH = "PeerOutreach"


class EmailDraftContext(_Payload):
    """Input for drafting a cold outreach email."""

    recipient_name: str
    company_name: str
    job_title: str
    recipient_role: str = "Team Member"
    tone: Tone = Tone.PROFESSIONAL
    intent: Intent = Intent.CONNECT
    job_description: str | None = None
    user_background: str | None = None


class EmailDraft(_Payload):
    subject: StrictStr
    body: StrictStr
    confidence: StrictInt = Field(ge=0, le=100)
