"""Prompt builders shared by every completion backend."""

from src.core.schemas import EmailDraftContext, Intent, Tone

_JSON_ONLY = "Return ONLY valid JSON, no markdown or explanation."

TONE_GUIDE: dict[Tone, str] = {
    Tone.FORMAL: "Use formal, professional language. Be respectful and businesslike.",
    Tone.CASUAL: "Use friendly, conversational tone. Be approachable but professional.",
    Tone.ENTHUSIASTIC: "Show genuine excitement and energy. Be positive and engaging.",
    Tone.PROFESSIONAL: "Balance warmth with professionalism. Be clear and confident.",
}

INTENT_GUIDE: dict[Intent, str] = {
    Intent.CONNECT: (
        "General networking - express interest in connecting and learning "
        "more about their work."
    ),
    Intent.FOLLOW_UP: (
        "Following up on a previous application or conversation. "
        "Be polite but persistent."
    ),
    Intent.REFERRAL_REQUEST: (
        "Requesting a referral for a position. Be gracious and make it easy for them."
    ),
    Intent.PEER_OUTREACH: (
        "Reaching out to a potential future peer. "
        "Focus on shared interests and culture fit."
    ),
}


def extract_job_details_prompt(text: str) -> str:
    return (
        "Extract job details from the following text. "
        "Return a JSON object with these fields:\n"
        "- title: job title\n"
        "- company: company name\n"
        "- location: job location\n"
        "- description: job description (summarized if very long)\n"
        "- salary: salary range if mentioned\n"
        "- requirements: array of key requirements\n"
        "- source: where this job was posted (LinkedIn, Indeed, etc.) if detectable\n\n"
        f"Text to analyze:\n{text}\n\n"
        f"{_JSON_ONLY}"
    )


def analyze_resume_prompt(job_description: str, resume_text: str) -> str:
    return (
        "Analyze how well this resume matches the job description.\n\n"
        f"Job Description:\n{job_description}\n\n"
        f"Resume:\n{resume_text}\n\n"
        "Provide analysis as JSON with:\n"
        "- matchScore: number 0-100 representing match percentage\n"
        "- strengths: array of strengths that align with the job\n"
        "- gaps: array of gaps or missing qualifications\n"
        "- recommendations: array of suggestions to improve the match\n"
        '- keywords: object with "matched" (keywords found in both) and '
        '"missing" (keywords in job but not resume) arrays\n\n'
        f"{_JSON_ONLY}"
    )


def draft_email_prompt(context: EmailDraftContext) -> str:
    """Build the outreach email prompt with tone and intent guidance baked in."""
    tone_guide = TONE_GUIDE.get(context.tone, TONE_GUIDE[Tone.PROFESSIONAL])
    intent_guide = INTENT_GUIDE.get(context.intent, INTENT_GUIDE[Intent.CONNECT])

    lines = [
        "Draft a cold outreach email with the following context:",
        "",
        f"Recipient: {context.recipient_name}, {context.recipient_role} "
        f"at {context.company_name}",
        f"Target Job: {context.job_title}",
        f"Tone: {context.tone.value} - {tone_guide}",
        f"Intent: {context.intent.value} - {intent_guide}",
    ]
    if context.job_description:
        lines += ["", f"Job Description:\n{context.job_description}"]
    if context.user_background:
        lines += ["", f"Sender Background:\n{context.user_background}"]

    lines += [
        "",
        "Generate a concise, compelling email.",
        "Format the 'body' with clear paragraph breaks.",
        "IMPORTANT: Ensure newline characters are properly escaped for JSON "
        "(use \\n\\n). Do NOT use actual line breaks in the JSON string.",
        "Return as JSON with:",
        "- subject: email subject line",
        "- body: email body text (using \\n\\n for new paragraphs)",
        "- confidence: number 0-100 indicating how well this matches the request",
        "",
        _JSON_ONLY,
    ]
    return "\n".join(lines)
