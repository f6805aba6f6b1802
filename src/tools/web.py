"""Web fetch tool: HTTP GET with optional CSS-selector extraction."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Literal
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from src.core.errors import ToolError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30_000
USER_AGENT = "letsmcp/2.0"

FetchFormat = Literal["text", "html", "json"]


def extract_content(html: str, selector: str | None, fmt: FetchFormat) -> str:
    """Pick the part of ``html`` to return for the requested format."""
    if selector:
        soup = BeautifulSoup(html, "html.parser")
        nodes = soup.select(selector)
        if fmt == "html":
            return "".join(node.decode_contents() for node in nodes[:1])
        return " ".join(node.get_text(" ", strip=True) for node in nodes)

    if fmt == "text":
        soup = BeautifulSoup(html, "html.parser")
        body = soup.body or soup
        return body.get_text(" ", strip=True)

    return html


async def web_fetch(
    url: str,
    *,
    selector: str | None = None,
    fmt: FetchFormat = "text",
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Fetch ``url`` and return its content plus response metadata.

    Args:
        url: http(s) URL.
        selector: CSS selector; matched nodes' text (or first node's inner
            HTML for ``fmt="html"``) is returned instead of the whole page.
        fmt: ``text`` (visible text), ``html`` (raw) or ``json`` (parsed).
        timeout_ms: Request timeout.
        client: Reuse an existing client (tests inject a mock transport).
    """
    if urlparse(url).scheme not in ("http", "https"):
        msg = "Error: Only HTTP and HTTPS URLs are supported."
        raise ToolError(msg)

    owns_client = client is None
    http = client or httpx.AsyncClient(
        follow_redirects=True, headers={"User-Agent": USER_AGENT}
    )
    try:
        logger.info("Fetching %s", url)
        response = await http.get(url, timeout=timeout_ms / 1000)
    except httpx.HTTPError as e:
        msg = f"Error fetching URL: {e}"
        raise ToolError(msg) from e
    finally:
        if owns_client:
            await http.aclose()

    if response.is_error:
        msg = f"Error: HTTP {response.status_code} {response.reason_phrase}"
        raise ToolError(msg)

    body = response.text
    content: Any
    if fmt == "json" and not selector:
        try:
            content = json.loads(body)
        except json.JSONDecodeError as e:
            msg = f"Error fetching URL: response is not valid JSON: {e}"
            raise ToolError(msg) from e
    else:
        content = extract_content(body, selector, fmt)

    return {
        "content": content,
        "metadata": {
            "url": url,
            "statusCode": response.status_code,
            "contentType": response.headers.get("content-type"),
            "size": len(body),
            "fetchedAt": datetime.now(timezone.utc).isoformat(),
        },
    }


async def fetch_page_text(url: str, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> str:
    """Visible text of a page, for feeding into job extraction."""
    result = await web_fetch(url, timeout_ms=timeout_ms)
    return str(result["content"])
