"""
@PURPOSE: Stateless Playwright helpers shared by page objects and scenarios
@OUTLINE:
  - async def wait_for_page_load(): networkidle then domcontentloaded
  - async def take_screenshot(): timestamped full-page screenshot
  - async def capture_failure_screenshot(): failed-<title>.png for a test
  - async def wait_for_clickable_element(): visible then attached
  - async def fill_input(): fill and verify the value
  - async def click_element(): click with bounded retries
  - async def wait_for_text(): wait until body text contains a string
  - async def assert_element_visible() / assert_element_contains_text(): expect()-based assertions
  - def generate_random_email() / generate_random_string(): test data
  - def log_step(): step logging
@GOTCHAS:
  - Default timeouts come from EnvironmentConfig.get_timeout() (TIMEOUT, 30000 ms)
  - Screenshot paths are relative to the configured results directory
@DEPENDENCIES:
  - External: playwright, loguru
  - Internal: src.core.env_config, src.core.errors, config.settings
"""

import random
import re
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from loguru import logger
from playwright.async_api import Page, expect

from config.settings import get_configuration_manager
from src.core.env_config import get_env_config
from src.core.errors import PageAssertionError

CLICK_RETRY_WAIT_MS = 1000


def _screenshot_dir(results_dir: Optional[str] = None) -> Path:
    if results_dir is None:
        results_dir = get_configuration_manager().get_test_settings().results_dir
    path = Path(results_dir) / "screenshots"
    path.mkdir(parents=True, exist_ok=True)
    return path


async def wait_for_page_load(page: Page) -> None:
    await page.wait_for_load_state("networkidle")
    await page.wait_for_load_state("domcontentloaded")


async def take_screenshot(page: Page, name: str, results_dir: Optional[str] = None) -> Path:
    """Full-page screenshot named ``{name}_{timestamp}.png``.

    Returns:
        Path of the written file
    """
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    timestamp = re.sub(r"[:.]", "-", timestamp.replace("+00:00", "Z"))
    path = _screenshot_dir(results_dir) / f"{name}_{timestamp}.png"
    await page.screenshot(path=str(path), full_page=True)
    logger.debug(f"Screenshot saved: {path}")
    return path


async def capture_failure_screenshot(page: Page, test_name: str, results_dir: Optional[str] = None) -> Path:
    """Full-page screenshot for a failed test, ``failed-<sanitized name>.png``."""
    safe_name = re.sub(r"[^a-zA-Z0-9]", "_", test_name)
    path = _screenshot_dir(results_dir) / f"failed-{safe_name}.png"
    await page.screenshot(path=str(path), full_page=True)
    logger.info(f"Failure screenshot saved: {path}")
    return path


async def wait_for_clickable_element(page: Page, selector: str, timeout: Optional[int] = None) -> None:
    timeout = timeout or get_env_config().get_timeout()
    await page.wait_for_selector(selector, state="visible", timeout=timeout)
    await page.wait_for_selector(selector, state="attached", timeout=timeout)


async def fill_input(page: Page, selector: str, value: str) -> None:
    """Fill an input and verify the value stuck.

    Raises:
        PageAssertionError: The input holds a different value after filling
    """
    await wait_for_clickable_element(page, selector)
    await page.fill(selector, value)

    actual = await page.input_value(selector)
    if actual != value:
        raise PageAssertionError(f"Input {selector} expected value {value!r}, got {actual!r}")


async def click_element(page: Page, selector: str, retries: int = 3) -> None:
    """Click with retries, waiting 1s between attempts.

    The error from the final attempt propagates.
    """
    for attempt in range(1, retries + 1):
        try:
            await wait_for_clickable_element(page, selector)
            await page.click(selector)
            return
        except Exception as e:
            if attempt == retries:
                raise
            logger.debug(f"Click on {selector} failed (attempt {attempt}/{retries}): {e}")
            await page.wait_for_timeout(CLICK_RETRY_WAIT_MS)


async def wait_for_text(page: Page, text: str, timeout: Optional[int] = None) -> None:
    await page.wait_for_function(
        "searchText => document.body.innerText.includes(searchText)",
        arg=text,
        timeout=timeout or get_env_config().get_timeout(),
    )


def generate_random_email() -> str:
    """Unique throwaway email, ``test_<random>_<ms>@example.com``."""
    timestamp = int(time.time() * 1000)
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"test_{suffix}_{timestamp}@example.com"


def generate_random_string(length: int = 8) -> str:
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def log_step(step: str) -> None:
    logger.info(f"STEP: {step}")


async def assert_element_visible(page: Page, selector: str) -> None:
    await expect(page.locator(selector)).to_be_visible()


async def assert_element_contains_text(page: Page, selector: str, text: str) -> None:
    await expect(page.locator(selector)).to_contain_text(text)
