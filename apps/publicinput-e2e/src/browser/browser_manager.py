"""
@PURPOSE: Manage the Playwright browser lifecycle for one test
@OUTLINE:
  - class BrowserManager: async context manager around playwright/browser/context/page
  - async def start(): launch the configured engine, build the context, start tracing
  - async def close(): stop tracing, close page -> context, drop an unwanted video, close browser -> playwright
  - async def screenshot(): save a screenshot, creating the parent directory
@GOTCHAS:
  - Each close step has its own timeout so one hung resource never blocks the rest
  - A device descriptor replaces the configured viewport entirely
  - Video is only written once the context closes; close(keep_video=False) deletes it afterwards
@DEPENDENCIES:
  - External: playwright, loguru
  - Internal: config.settings
@RELATED: tests/e2e/conftest.py
"""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from config.settings import AppSettings, ConfigurationManager, get_configuration_manager

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")
PAGE_CLOSE_TIMEOUT = 5.0
CONTEXT_CLOSE_TIMEOUT = 5.0
BROWSER_CLOSE_TIMEOUT = 10.0
PLAYWRIGHT_STOP_TIMEOUT = 5.0
VIDEO_DELETE_TIMEOUT = 5.0


class BrowserManager:
    """Own one browser, context and page.

    Examples:
        >>> async with BrowserManager() as manager:
        ...     await manager.page.goto("https://publicinput.com")
    """

    def __init__(self, config_manager: Optional[ConfigurationManager] = None):
        self.config_manager = config_manager or get_configuration_manager()
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None
        self.tracing_started = False

    @property
    def settings(self) -> AppSettings:
        return self.config_manager.get_settings()

    def _context_options(self) -> Dict[str, Any]:
        browser_settings = self.settings.browser_settings

        if browser_settings.device:
            descriptor = self.playwright.devices.get(browser_settings.device)
            if descriptor is None:
                raise ValueError(f"Unknown device descriptor: {browser_settings.device}")
            options: Dict[str, Any] = dict(descriptor)
        else:
            options = {"viewport": dict(browser_settings.viewport)}

        if browser_settings.video != "off":
            video_dir = self.settings.get_results_path("videos")
            video_dir.mkdir(parents=True, exist_ok=True)
            options["record_video_dir"] = str(video_dir)

        return options

    async def start(self, headless: Optional[bool] = None) -> None:
        """Launch the browser and open a page.

        Args:
            headless: Overrides browser_settings.headless when given

        Raises:
            ValueError: Unsupported browser name or unknown device
        """
        browser_settings = self.settings.browser_settings
        browser_name = browser_settings.browser
        if browser_name not in SUPPORTED_BROWSERS:
            raise ValueError(f"Unsupported browser type: {browser_name}")

        if headless is None:
            headless = browser_settings.headless

        logger.info(f"Starting {browser_name} (headless={headless}, slow_mo={browser_settings.slow_mo})")

        self.playwright = await async_playwright().start()
        launcher = getattr(self.playwright, browser_name)
        self.browser = await launcher.launch(headless=headless, slow_mo=browser_settings.slow_mo or 0)

        self.context = await self.browser.new_context(**self._context_options())

        if browser_settings.trace != "off":
            await self.context.tracing.start(screenshots=True, snapshots=True)
            self.tracing_started = True
            logger.debug(f"Tracing started (mode={browser_settings.trace})")

        self.page = await self.context.new_page()
        self.page.set_default_timeout(browser_settings.action_timeout)
        self.page.set_default_navigation_timeout(browser_settings.navigation_timeout)

        logger.success(f"✓ Browser started: {browser_name}")

    async def _stop_tracing(self, save_trace: Optional[str]) -> None:
        if not (self.tracing_started and self.context):
            return

        try:
            if save_trace:
                trace_path = Path(save_trace)
                trace_path.parent.mkdir(parents=True, exist_ok=True)
                await self.context.tracing.stop(path=str(trace_path))
                logger.info(f"Trace saved: {trace_path}")
            else:
                await self.context.tracing.stop()
        except Exception as e:
            logger.warning(f"Failed to stop tracing: {e}")
        finally:
            self.tracing_started = False

    @staticmethod
    async def _close_step(name: str, coro, timeout: float, errors: List[Tuple[str, Exception]]) -> None:
        try:
            await asyncio.wait_for(coro, timeout=timeout)
        except TimeoutError:
            errors.append((name, TimeoutError(f"{name} close timed out ({timeout}s)")))
            logger.warning(f"{name} close timed out ({timeout}s)")
        except Exception as e:
            errors.append((name, e))
            logger.debug(f"{name} close failed: {e}")

    async def close(self, save_trace: Optional[str] = None, keep_video: bool = True) -> None:
        """Release every resource, continuing past individual failures.

        Args:
            save_trace: Trace zip path; the trace is discarded when omitted
            keep_video: False deletes the page's recorded video once the context has closed
        """
        errors: List[Tuple[str, Exception]] = []

        await self._stop_tracing(save_trace)

        video = self.page.video if self.page else None

        if self.page:
            await self._close_step("page", self.page.close(), PAGE_CLOSE_TIMEOUT, errors)
        self.page = None

        if self.context:
            await self._close_step("context", self.context.close(), CONTEXT_CLOSE_TIMEOUT, errors)
        self.context = None

        if video is not None and not keep_video:
            await self._close_step("video", video.delete(), VIDEO_DELETE_TIMEOUT, errors)

        if self.browser:
            await self._close_step("browser", self.browser.close(), BROWSER_CLOSE_TIMEOUT, errors)
        self.browser = None

        if self.playwright:
            await self._close_step("playwright", self.playwright.stop(), PLAYWRIGHT_STOP_TIMEOUT, errors)
        self.playwright = None

        if errors:
            summary = ", ".join(f"{name}:{type(e).__name__}" for name, e in errors)
            logger.warning(f"{len(errors)} error(s) while closing the browser: {summary}")
        else:
            logger.info("Browser closed")

    async def screenshot(self, path: str, full_page: bool = False) -> Path:
        if not self.page:
            raise RuntimeError("Browser is not started")

        screenshot_path = Path(path)
        screenshot_path.parent.mkdir(parents=True, exist_ok=True)
        await self.page.screenshot(path=str(screenshot_path), full_page=full_page)
        logger.debug(f"Screenshot saved: {screenshot_path}")
        return screenshot_path

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
