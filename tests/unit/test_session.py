"""Tests for browser session lifecycle."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.browser.session import BrowserSession


def _fake_playwright() -> tuple[MagicMock, MagicMock, MagicMock, MagicMock]:
    """Return (async_playwright factory, playwright, browser, context) mocks."""
    page = MagicMock(name="page")
    context = MagicMock(name="context")
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()
    browser = MagicMock(name="browser")
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()
    playwright = MagicMock(name="playwright")
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()
    factory = MagicMock()
    factory.return_value.start = AsyncMock(return_value=playwright)
    return factory, playwright, browser, context


# ---------------------------------------------------------------------------
# TestBrowserSession
# ---------------------------------------------------------------------------


class TestBrowserSession:
    def test_page_before_enter_raises(self) -> None:
        with pytest.raises(RuntimeError, match="not entered"):
            _ = BrowserSession().page

    async def test_enter_and_exit(self) -> None:
        factory, playwright, browser, context = _fake_playwright()
        with patch("src.browser.session.async_playwright", factory):
            async with BrowserSession(headless=True, timeout_ms=5000) as session:
                assert session.page is context.new_page.return_value

        playwright.chromium.launch.assert_awaited_once_with(headless=True)
        context.set_default_timeout.assert_called_once_with(5000)
        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    async def test_closes_when_body_raises(self) -> None:
        factory, playwright, browser, context = _fake_playwright()
        with (
            patch("src.browser.session.async_playwright", factory),
            pytest.raises(ValueError, match="boom"),
        ):
            async with BrowserSession():
                raise ValueError("boom")

        context.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    async def test_closes_when_enter_fails(self) -> None:
        factory, playwright, browser, context = _fake_playwright()
        browser.new_context.side_effect = RuntimeError("no context")
        with (
            patch("src.browser.session.async_playwright", factory),
            pytest.raises(RuntimeError, match="no context"),
        ):
            async with BrowserSession():
                pass

        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()
        context.close.assert_not_awaited()

    async def test_browser_and_driver_stopped_when_context_close_fails(self) -> None:
        factory, playwright, browser, context = _fake_playwright()
        context.close.side_effect = RuntimeError("context gone")
        with (
            patch("src.browser.session.async_playwright", factory),
            pytest.raises(RuntimeError, match="context gone"),
        ):
            async with BrowserSession():
                pass

        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    async def test_second_close_is_noop(self) -> None:
        factory, playwright, browser, context = _fake_playwright()
        session = BrowserSession()
        with patch("src.browser.session.async_playwright", factory):
            async with session:
                pass
            await session.__aexit__(None, None, None)

        context.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()
