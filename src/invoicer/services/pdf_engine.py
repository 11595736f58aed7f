from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass
from typing import Any, Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from invoicer.config import (
    CHROMIUM_ARGS,
    PAGE_FORMAT,
    PAGE_MARGIN,
    PRINT_BACKGROUND,
    get_render_timeout,
)
from invoicer.services.exceptions import (
    EngineUnavailableError,
    RenderError,
    RenderTimeoutError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageOptions:
    format: str = PAGE_FORMAT
    print_background: bool = PRINT_BACKGROUND
    margin: str = PAGE_MARGIN  # applied to all four sides
    display_header_footer: bool = False

    def to_pdf_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for Playwright's ``page.pdf()``."""
        return {
            "format": self.format,
            "print_background": self.print_background,
            "margin": {
                "top": self.margin,
                "right": self.margin,
                "bottom": self.margin,
                "left": self.margin,
            },
            "display_header_footer": self.display_header_footer,
        }


DEFAULT_PAGE_OPTIONS = PageOptions()


class PdfEngine(Protocol):
    async def render(self, markup: str, options: PageOptions) -> bytes: ...


class ChromiumEngine:
    """Prints HTML to PDF with a headless Chromium browser."""

    def __init__(self, browser: Any, timeout: float) -> None:
        self._browser = browser
        self._timeout = timeout

    async def render(self, markup: str, options: PageOptions = DEFAULT_PAGE_OPTIONS) -> bytes:
        try:
            page = await self._browser.new_page()
        except PlaywrightError as e:
            raise RenderError(f"Failed to open a page: {e.message}") from e
        try:
            async with asyncio.timeout(self._timeout):
                # networkidle: photos are fetched asynchronously and must be in the capture
                await page.set_content(markup, wait_until="networkidle")
                pdf = await page.pdf(**options.to_pdf_kwargs())
        except (TimeoutError, PlaywrightTimeoutError) as e:
            raise RenderTimeoutError(
                f"Rendering did not finish within {self._timeout:g}s"
            ) from e
        except PlaywrightError as e:
            raise RenderError(f"Failed to render invoice: {e.message}") from e
        finally:
            await page.close()
        logger.debug("Rendered %d bytes of PDF", len(pdf))
        return pdf


async def _close_browser(browser: Any) -> None:
    await browser.close()
    logger.debug("Chromium closed")


@asynccontextmanager
async def launch_engine(timeout: float | None = None) -> AsyncIterator[ChromiumEngine]:
    """Start a private headless browser; it is closed on every exit path."""
    if timeout is None:
        timeout = get_render_timeout()

    async with AsyncExitStack() as stack:
        try:
            p = await stack.enter_async_context(async_playwright())
            browser = await p.chromium.launch(headless=True, args=CHROMIUM_ARGS)
        except (PlaywrightError, OSError) as e:
            raise EngineUnavailableError(
                f"Could not start the PDF engine: {getattr(e, 'message', e)}. "
                "Run: playwright install chromium"
            ) from e
        stack.push_async_callback(_close_browser, browser)
        logger.debug("Chromium %s started", browser.version)
        yield ChromiumEngine(browser, timeout)
