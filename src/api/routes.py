"""REST endpoints over the AI service, mounted under ``/api``.

Every endpoint answers ``{"error": ...}`` on failure: 400 for missing
fields, 503 when no AI provider is configured, 500 for anything else
(including fallback exhaustion, whose message lists each provider's error).
"""

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from src.ai.service import AIService
from src.core.config import AIConfig
from src.core.errors import AllProvidersFailedError, ToolError
from src.core.schemas import EmailDraftContext, Intent, Tone
from src.platforms.linkedin.scraper import is_linkedin_job_url, scrape_linkedin_job
from src.tools.web import fetch_page_text

logger = logging.getLogger(__name__)

API_VERSION = "2.0.0"
NO_PROVIDERS = "No AI providers configured"

router = APIRouter()


class _Body(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    provider: str | None = None


class GenerateBody(_Body):
    prompt: str | None = None


class ExtractJobBody(_Body):
    text: str | None = None
    url: str | None = None


class ScrapeBody(_Body):
    url: str | None = None
    include_description: bool = True
    screenshot: bool = False


class AnalyzeResumeBody(_Body):
    job_description: str | None = None
    resume_text: str | None = None


class DraftEmailBody(_Body):
    recipient_name: str | None = None
    recipient_role: str | None = None
    company_name: str | None = None
    job_title: str | None = None
    tone: Tone | None = None
    intent: Intent | None = None
    job_description: str | None = None
    user_background: str | None = None


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service  # type: ignore[no-any-return]


def get_files_dir(request: Request) -> Path:
    return Path(request.app.state.settings.server.files_dir)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _failure(e: Exception) -> JSONResponse:
    if isinstance(e, AllProvidersFailedError):
        logger.error("All providers failed:\n%s", e)
    else:
        logger.exception("Request failed")
    return error_response(500, str(e) or "Unknown error")


@router.get("/status")
async def status(service: AIService = Depends(get_ai_service)) -> dict[str, Any]:
    return {
        "status": "ok",
        "version": API_VERSION,
        "providers": service.configured_providers(),
        "hasAI": service.has_provider(),
    }


@router.post("/config")
async def update_config(
    body: dict[str, Any], service: AIService = Depends(get_ai_service)
) -> Any:
    try:
        config = AIConfig.model_validate(body)
    except ValidationError as e:
        return error_response(400, str(e))

    service.update_config(config)
    return {"success": True, "providers": service.configured_providers()}


@router.post("/generate")
async def generate(body: GenerateBody, service: AIService = Depends(get_ai_service)) -> Any:
    if not body.prompt:
        return error_response(400, "prompt is required")
    if not service.has_provider():
        return error_response(503, NO_PROVIDERS)

    try:
        result = await service.generate_text(body.prompt, body.provider)
    except Exception as e:
        return _failure(e)
    return {"success": True, "text": result.data, "provider": result.provider}


@router.post("/extract-job")
async def extract_job(
    body: ExtractJobBody,
    service: AIService = Depends(get_ai_service),
    files_dir: Path = Depends(get_files_dir),
) -> Any:
    if not body.text and not body.url:
        return error_response(400, "Either text or url is required")

    try:
        content = body.text or ""
        if body.url and is_linkedin_job_url(body.url):
            scraped = await scrape_linkedin_job(body.url, files_dir=files_dir)
            if scraped.get("title"):
                data = {
                    "title": scraped["title"],
                    "company": scraped["company"],
                    "location": scraped["location"],
                    "description": scraped["description"],
                    "source": "LinkedIn",
                }
                return {"success": True, "data": data, "provider": "linkedin-scraper"}
            content = scraped.get("description") or body.url
        elif body.url:
            try:
                content = await fetch_page_text(body.url)
            except ToolError as e:
                logger.warning("Could not fetch %s, analyzing the URL itself: %s", body.url, e)
                content = body.url

        if not service.has_provider():
            return error_response(503, NO_PROVIDERS)

        result = await service.extract_job_details(content, body.provider)
    except Exception as e:
        return _failure(e)
    return {"success": True, "data": result.data.to_wire(), "provider": result.provider}


@router.post("/scrape-linkedin")
async def scrape_linkedin(body: ScrapeBody, files_dir: Path = Depends(get_files_dir)) -> Any:
    if not is_linkedin_job_url(body.url):
        return error_response(400, "Valid LinkedIn job URL is required")

    try:
        data = await scrape_linkedin_job(
            body.url,  # type: ignore[arg-type]
            include_description=body.include_description,
            screenshot=body.screenshot,
            files_dir=files_dir,
        )
    except Exception as e:
        return _failure(e)
    return {"success": True, "data": data}


@router.post("/analyze-resume")
async def analyze_resume(
    body: AnalyzeResumeBody, service: AIService = Depends(get_ai_service)
) -> Any:
    if not body.job_description or not body.resume_text:
        return error_response(400, "jobDescription and resumeText are required")
    if not service.has_provider():
        return error_response(503, NO_PROVIDERS)

    try:
        result = await service.analyze_resume(
            body.job_description, body.resume_text, body.provider
        )
    except Exception as e:
        return _failure(e)
    return {"success": True, "data": result.data.to_wire(), "provider": result.provider}


@router.post("/draft-email")
async def draft_email(body: DraftEmailBody, service: AIService = Depends(get_ai_service)) -> Any:
    if not body.recipient_name or not body.company_name or not body.job_title:
        return error_response(400, "recipientName, companyName, and jobTitle are required")
    if not service.has_provider():
        return error_response(503, NO_PROVIDERS)

    context = EmailDraftContext(
        recipient_name=body.recipient_name,
        recipient_role=body.recipient_role or "Team Member",
        company_name=body.company_name,
        job_title=body.job_title,
        tone=body.tone or Tone.PROFESSIONAL,
        intent=body.intent or Intent.CONNECT,
        job_description=body.job_description,
        user_background=body.user_background,
    )
    try:
        result = await service.draft_email(context, body.provider)
    except Exception as e:
        return _failure(e)
    return {"success": True, "data": result.data.to_wire(), "provider": result.provider}
