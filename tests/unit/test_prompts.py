"""Tests for prompt builders."""

from src.ai.prompts import (
    INTENT_GUIDE,
    TONE_GUIDE,
    analyze_resume_prompt,
    draft_email_prompt,
    extract_job_details_prompt,
)
from src.core.schemas import EmailDraftContext, Intent, Tone


class TestGuides:
    def test_every_tone_has_guidance(self) -> None:
        assert set(TONE_GUIDE) == set(Tone)

    def test_every_intent_has_guidance(self) -> None:
        assert set(INTENT_GUIDE) == set(Intent)


class TestExtractJobDetailsPrompt:
    def test_embeds_text_and_fields(self) -> None:
        prompt = extract_job_details_prompt("Senior Python role at Acme")
        assert "Senior Python role at Acme" in prompt
        for field in ("title", "company", "location", "description", "salary", "requirements"):
            assert f"- {field}:" in prompt
        assert prompt.endswith("Return ONLY valid JSON, no markdown or explanation.")


class TestAnalyzeResumePrompt:
    def test_embeds_both_documents(self) -> None:
        prompt = analyze_resume_prompt("JD body", "CV body")
        assert "Job Description:\nJD body" in prompt
        assert "Resume:\nCV body" in prompt
        assert "matchScore" in prompt


class TestDraftEmailPrompt:
    def test_defaults(self) -> None:
        context = EmailDraftContext(recipient_name="John", company_name="Acme", job_title="SWE")
        prompt = draft_email_prompt(context)
        assert "Recipient: John, Team Member at Acme" in prompt
        assert "Target Job: SWE" in prompt
        assert f"Tone: Professional - {TONE_GUIDE[Tone.PROFESSIONAL]}" in prompt
        assert f"Intent: Connect - {INTENT_GUIDE[Intent.CONNECT]}" in prompt
        assert "Job Description:" not in prompt
        assert "Sender Background:" not in prompt

    def test_optional_sections(self) -> None:
        context = EmailDraftContext(
            recipient_name="Maria",
            recipient_role="Engineering Manager",
            company_name="Globex",
            job_title="Data Engineer",
            tone=Tone.CASUAL,
            intent=Intent.FOLLOW_UP,
            job_description="Pipelines all day",
            user_background="5 years of Spark",
        )
        prompt = draft_email_prompt(context)
        assert "Recipient: Maria, Engineering Manager at Globex" in prompt
        assert "Tone: Casual - Use friendly, conversational tone." in prompt
        assert "Intent: FollowUp - Following up" in prompt
        assert "Job Description:\nPipelines all day" in prompt
        assert "Sender Background:\n5 years of Spark" in prompt
