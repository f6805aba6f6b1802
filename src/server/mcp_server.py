"""MCP server exposing the tools and AI operations over stdio.

Tool failures are re-raised as FastMCP ``ToolError`` so the client receives
an error-flagged result carrying the same message text.
"""

import logging
from collections.abc import Awaitable
from pathlib import Path
from typing import Any, Literal, TypeVar

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError as MCPToolError

from src.ai.service import AIService
from src.api.routes import API_VERSION
from src.core.config import Settings
from src.core.errors import AllProvidersFailedError, ToolError
from src.core.schemas import EmailDraftContext, Intent, Tone
from src.platforms.linkedin.scraper import scrape_linkedin_job
from src.tools import command as command_tool
from src.tools import echo, files, web

logger = logging.getLogger(__name__)

SERVER_NAME = "letsmcp"

T = TypeVar("T")

TOOL_NAMES: tuple[str, ...] = (
    "echoText",
    "summarizeDirectory",
    "saveToFile",
    "readFile",
    "searchFiles",
    "executeCommand",
    "webFetch",
    "scrapeLinkedInJob",
    "generateText",
    "extractJobDetails",
    "analyzeResume",
    "draftEmail",
)


async def _run(call: Awaitable[T]) -> T:
    try:
        return await call
    except ToolError as e:
        raise MCPToolError(str(e)) from e
    except AllProvidersFailedError as e:
        msg = f"All providers failed:\n{e}" if str(e) else "No AI providers configured"
        raise MCPToolError(msg) from e


def build_mcp_server(service: AIService, settings: Settings | None = None) -> FastMCP:
    """Create the FastMCP server; tools close over ``service`` and ``settings``."""
    settings = settings or Settings()
    files_dir = Path(settings.server.files_dir)

    mcp = FastMCP(
        name=SERVER_NAME,
        instructions=(
            "Local workstation tools (files, commands, web fetch, LinkedIn job "
            "scraping) plus AI helpers for job extraction, resume analysis and "
            "outreach emails."
        ),
    )

    @mcp.tool(
        name="echoText",
        description="Echoes back the provided text. Useful for testing and verification.",
    )
    async def echo_text(text: str) -> dict[str, str]:
        return await _run(echo.echo_text(text))

    @mcp.tool(
        name="summarizeDirectory",
        description=(
            "Lists files and subdirectories in the specified directory "
            "with counts and example names."
        ),
    )
    async def summarize_directory(path: str) -> str:
        return await _run(files.summarize_directory(path))

    @mcp.tool(
        name="saveToFile",
        description=(
            "Saves text content to a file under the server's files directory. "
            "Creates directories if needed."
        ),
    )
    async def save_to_file(
        content: str,
        filename: str,
        category: str | None = None,
        overwrite: bool = False,
    ) -> dict[str, Any]:
        return await _run(
            files.save_to_file(
                content, filename, files_dir=files_dir, category=category, overwrite=overwrite
            )
        )

    @mcp.tool(
        name="readFile",
        description="Reads the contents of a file and returns it as text with metadata.",
    )
    async def read_file(
        path: str,
        encoding: str = "utf-8",
        maxSize: int = files.DEFAULT_MAX_READ_BYTES,  # noqa: N803
    ) -> dict[str, Any]:
        return await _run(files.read_file(path, encoding=encoding, max_size=maxSize))

    @mcp.tool(
        name="searchFiles",
        description=(
            "Searches for a regular expression within files in a directory. "
            "Returns matching lines with file and line number."
        ),
    )
    async def search_files(
        query: str,
        path: str,
        fileTypes: list[str] | None = None,  # noqa: N803
        caseSensitive: bool = False,  # noqa: N803
        maxResults: int = files.DEFAULT_MAX_RESULTS,  # noqa: N803
        recursive: bool = True,
    ) -> dict[str, Any]:
        return await _run(
            files.search_files(
                query,
                path,
                file_types=fileTypes,
                case_sensitive=caseSensitive,
                max_results=maxResults,
                recursive=recursive,
            )
        )

    @mcp.tool(
        name="executeCommand",
        description="Executes a command (no shell) and returns stdout, stderr and exit code.",
    )
    async def execute_command(
        command: str,
        args: list[str] | None = None,
        cwd: str | None = None,
        timeout: int = command_tool.DEFAULT_TIMEOUT_MS,
    ) -> dict[str, Any]:
        return await _run(
            command_tool.execute_command(command, args, cwd=cwd, timeout_ms=timeout)
        )

    @mcp.tool(
        name="webFetch",
        description="Fetches a URL and optionally extracts content with a CSS selector.",
    )
    async def web_fetch(
        url: str,
        selector: str | None = None,
        format: Literal["text", "html", "json"] = "text",  # noqa: A002
        timeout: int = web.DEFAULT_TIMEOUT_MS,
    ) -> dict[str, Any]:
        return await _run(web.web_fetch(url, selector=selector, fmt=format, timeout_ms=timeout))

    @mcp.tool(
        name="scrapeLinkedInJob",
        description=(
            "Scrapes title, company, location and description from a LinkedIn "
            "job posting using browser automation."
        ),
    )
    async def scrape_job(
        url: str,
        includeDescription: bool = True,  # noqa: N803
        screenshot: bool = False,
    ) -> dict[str, Any]:
        return await _run(
            scrape_linkedin_job(
                url,
                include_description=includeDescription,
                screenshot=screenshot,
                files_dir=files_dir,
            )
        )

    @mcp.tool(name="generateText", description="Generates text with the configured AI providers.")
    async def generate_text(prompt: str, provider: str | None = None) -> dict[str, Any]:
        result = await _run(service.generate_text(prompt, provider))
        return {"text": result.data, "provider": result.provider}

    @mcp.tool(
        name="extractJobDetails",
        description="Extracts structured job details from free text using AI.",
    )
    async def extract_job_details(text: str, provider: str | None = None) -> dict[str, Any]:
        result = await _run(service.extract_job_details(text, provider))
        return {"data": result.data.to_wire(), "provider": result.provider}

    @mcp.tool(
        name="analyzeResume",
        description="Scores how well a resume matches a job description using AI.",
    )
    async def analyze_resume(
        jobDescription: str,  # noqa: N803
        resumeText: str,  # noqa: N803
        provider: str | None = None,
    ) -> dict[str, Any]:
        result = await _run(service.analyze_resume(jobDescription, resumeText, provider))
        return {"data": result.data.to_wire(), "provider": result.provider}

    @mcp.tool(name="draftEmail", description="Drafts a cold outreach email using AI.")
    async def draft_email(
        recipientName: str,  # noqa: N803
        companyName: str,  # noqa: N803
        jobTitle: str,  # noqa: N803
        recipientRole: str = "Team Member",  # noqa: N803
        tone: Tone = Tone.PROFESSIONAL,
        intent: Intent = Intent.CONNECT,
        jobDescription: str | None = None,  # noqa: N803
        userBackground: str | None = None,  # noqa: N803
        provider: str | None = None,
    ) -> dict[str, Any]:
        context = EmailDraftContext(
            recipient_name=recipientName,
            recipient_role=recipientRole,
            company_name=companyName,
            job_title=jobTitle,
            tone=tone,
            intent=intent,
            job_description=jobDescription,
            user_background=userBackground,
        )
        result = await _run(service.draft_email(context, provider))
        return {"data": result.data.to_wire(), "provider": result.provider}

    @mcp.resource(
        "server://info",
        name="Server Information",
        description="Information about this MCP server",
        mime_type="text/plain",
    )
    def server_info() -> str:
        providers = ", ".join(service.configured_providers()) or "none"
        return (
            f"{SERVER_NAME} MCP Server v{API_VERSION}\n"
            f"HTTP façade: {settings.server.host}:{settings.server.port}\n"
            "Capabilities: Tools, Resources\n"
            f"Available Tools: {', '.join(TOOL_NAMES)}\n"
            f"AI Providers: {providers}\n"
            "Available Resources: server://info"
        )

    logger.debug("Registered %d MCP tools", len(TOOL_NAMES))
    return mcp
