"""Scrape a single LinkedIn job posting with a headless browser."""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from src.browser.session import BrowserSession
from src.core.errors import ToolError
from src.platforms.linkedin.selectors import (
    COMPANY_SELECTORS,
    DESCRIPTION_SELECTORS,
    JOB_URL_MARKER,
    LOCATION_SELECTORS,
    POSTED_DATE_SELECTORS,
    TITLE_SELECTORS,
)

logger = logging.getLogger(__name__)

NAVIGATION_TIMEOUT_MS = 30_000
READY_TIMEOUT_MS = 10_000


class PageLike(Protocol):
    """Subset of the patchright Page API the scraper needs (mockable in tests)."""

    async def goto(self, url: str, **kwargs: Any) -> Any: ...
    async def wait_for_selector(self, selector: str, **kwargs: Any) -> Any: ...
    async def query_selector(self, selector: str) -> Any: ...
    async def screenshot(self, **kwargs: Any) -> Any: ...


def is_linkedin_job_url(url: str | None) -> bool:
    return url is not None and JOB_URL_MARKER in url


async def _first_text(page: PageLike, selectors: tuple[str, ...]) -> str:
    """Text of the first selector that matches, or "" if none do."""
    for selector in selectors:
        element = await page.query_selector(selector)
        if element is None:
            continue
        text = await element.text_content()
        if text and text.strip():
            return text.strip()
    return ""


async def scrape_job_page(
    page: PageLike,
    url: str,
    *,
    include_description: bool = True,
    screenshot_dir: Path | None = None,
) -> dict[str, Any]:
    """Navigate ``page`` to ``url`` and read the job fields."""
    await page.goto(url, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)
    await page.wait_for_selector(", ".join(TITLE_SELECTORS), timeout=READY_TIMEOUT_MS)

    job: dict[str, Any] = {
        "title": await _first_text(page, TITLE_SELECTORS),
        "company": await _first_text(page, COMPANY_SELECTORS),
        "location": await _first_text(page, LOCATION_SELECTORS),
        "description": (
            await _first_text(page, DESCRIPTION_SELECTORS) if include_description else ""
        ),
        "postedDate": await _first_text(page, POSTED_DATE_SELECTORS),
    }

    if screenshot_dir is not None:
        screenshot_dir.mkdir(parents=True, exist_ok=True)
        path = screenshot_dir / f"linkedin-job-{int(time.time() * 1000)}.png"
        await page.screenshot(path=str(path), full_page=True)
        job["screenshot"] = str(path)

    job["url"] = url
    job["scrapedAt"] = datetime.now(timezone.utc).isoformat()
    return job


async def scrape_linkedin_job(
    url: str,
    *,
    include_description: bool = True,
    screenshot: bool = False,
    files_dir: Path | None = None,
) -> dict[str, Any]:
    """Launch a browser, scrape one job posting and close everything.

    Raises:
        ToolError: For non-LinkedIn URLs or any browser failure.
    """
    if not is_linkedin_job_url(url):
        msg = "Error: Invalid input. Expected { url: string } with a LinkedIn job URL."
        raise ToolError(msg)

    screenshot_dir = (files_dir or Path("mcp-files")) / "screenshots" if screenshot else None

    logger.info("Scraping LinkedIn job %s", url)
    try:
        async with BrowserSession(headless=True) as session:
            return await scrape_job_page(
                session.page,
                url,
                include_description=include_description,
                screenshot_dir=screenshot_dir,
            )
    except Exception as e:
        msg = (
            f"Error scraping LinkedIn job: {e}\n\n"
            "Note: LinkedIn may require authentication or may have blocked automated access."
        )
        raise ToolError(msg) from e
