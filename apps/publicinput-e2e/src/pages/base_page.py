"""
@PURPOSE: Base page object - navigation, waits, element actions and assertions shared by every page
@OUTLINE:
  - class BasePage: common page-object behavior
  - navigation: navigate_to(), navigate_to_base(), reload(), go_back(), go_forward()
  - elements: wait_for_element(), click_element(), fill_input(), get_text(), is_element_visible()
  - assertions: assert_element_visible(), assert_title_contains(), assert_url_contains()
  - login: retry_login() delegates to UserLoginHelpers
@GOTCHAS:
  - base_url comes from the ConfigurationManager (BASE_URL override > YAML > default)
  - is_element_visible() waits up to 5s and never raises
  - wait_for_seconds() sleeps in the browser clock; CRMPage overrides it with a network-idle wait
@DEPENDENCIES:
  - External: playwright, loguru
  - Internal: src.utils.page_helpers, config.settings
@RELATED: login_page.py, user_login_helpers.py
"""

from typing import Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from config.settings import ConfigurationManager, get_configuration_manager
from src.core.errors import PageAssertionError
from src.utils import page_helpers

VISIBILITY_TIMEOUT_MS = 5000


class BasePage:
    """Common behavior for all page objects.

    Attributes:
        page: Playwright page
        base_url: Application root URL, without trailing slash

    Examples:
        >>> page_object = BasePage(page)
        >>> await page_object.navigate_to(f"{page_object.base_url}/home")
        >>> await page_object.is_element_visible("h1")
        True
    """

    def __init__(self, page: Page, config_manager: Optional[ConfigurationManager] = None):
        self.page = page
        self.config_manager = config_manager or get_configuration_manager()
        self.base_url = self.config_manager.get_base_url()

    # ========== Navigation ==========

    async def navigate_to(self, url: str) -> None:
        page_helpers.log_step(f"Navigating to: {url}")
        await self.page.goto(url)

    async def navigate_to_base(self) -> None:
        await self.navigate_to(self.base_url)

    async def get_title(self) -> str:
        return await self.page.title()

    def get_current_url(self) -> str:
        return self.page.url

    async def wait_for_page_load(self) -> None:
        await page_helpers.wait_for_page_load(self.page)

    async def wait_for_network_idle(self) -> None:
        await self.page.wait_for_load_state("networkidle")

    async def reload(self) -> None:
        await self.page.reload()
        await self.wait_for_page_load()

    async def go_back(self) -> None:
        await self.page.go_back()
        await self.wait_for_page_load()

    async def go_forward(self) -> None:
        await self.page.go_forward()
        await self.wait_for_page_load()

    async def wait_for_seconds(self, seconds: float) -> None:
        await self.page.wait_for_timeout(seconds * 1000)

    # ========== Elements ==========

    async def wait_for_element(self, selector: str, timeout: Optional[int] = None) -> Locator:
        """Wait until the element is visible and attached, then return its locator."""
        await page_helpers.wait_for_clickable_element(self.page, selector, timeout)
        return self.page.locator(selector)

    async def click_element(self, selector: str, retries: int = 3) -> None:
        await page_helpers.click_element(self.page, selector, retries)

    async def fill_input(self, selector: str, value: str) -> None:
        await page_helpers.fill_input(self.page, selector, value)

    async def press_enter(self, selector: str) -> None:
        await self.page.press(selector, "Enter")

    async def get_text(self, selector: str) -> str:
        element = await self.wait_for_element(selector)
        return await element.text_content() or ""

    async def is_element_visible(self, selector: str) -> bool:
        try:
            await self.page.wait_for_selector(selector, state="visible", timeout=VISIBILITY_TIMEOUT_MS)
            return True
        except PlaywrightError:
            return False

    async def wait_for_text(self, text: str, timeout: Optional[int] = None) -> None:
        await page_helpers.wait_for_text(self.page, text, timeout)

    async def take_screenshot(self, name: str) -> None:
        await page_helpers.take_screenshot(self.page, name)

    async def scroll_into_view(self, selector: str) -> None:
        element = await self.wait_for_element(selector)
        await element.scroll_into_view_if_needed()

    async def hover_element(self, selector: str) -> None:
        element = await self.wait_for_element(selector)
        await element.hover()

    async def select_option(self, selector: str, value: str) -> None:
        element = await self.wait_for_element(selector)
        await element.select_option(value)

    async def check_checkbox(self, selector: str) -> None:
        element = await self.wait_for_element(selector)
        await element.check()

    async def uncheck_checkbox(self, selector: str) -> None:
        element = await self.wait_for_element(selector)
        await element.uncheck()

    async def get_attribute(self, selector: str, attribute: str) -> Optional[str]:
        element = await self.wait_for_element(selector)
        return await element.get_attribute(attribute)

    # ========== Assertions ==========

    async def assert_element_visible(self, selector: str) -> None:
        await page_helpers.assert_element_visible(self.page, selector)

    async def assert_element_contains_text(self, selector: str, text: str) -> None:
        await page_helpers.assert_element_contains_text(self.page, selector, text)

    async def assert_title_contains(self, text: str) -> None:
        title = await self.get_title()
        if text not in title:
            raise PageAssertionError(f"Expected title to contain {text!r}, got {title!r}")

    async def assert_url_contains(self, text: str) -> None:
        url = self.get_current_url()
        if text not in url:
            raise PageAssertionError(f"Expected URL to contain {text!r}, got {url!r}")

    # ========== Login ==========

    async def retry_login(self, user_type, customer_id: Optional[str] = None, max_attempts: Optional[int] = None) -> None:
        """Log in as ``user_type`` with bounded retries (see UserLoginHelpers.retry_login)."""
        from src.utils.user_login_helpers import UserLoginHelpers

        logger.debug(f"{type(self).__name__}: retrying login as {user_type}")
        helpers = UserLoginHelpers(self.page, config_manager=self.config_manager)
        await helpers.retry_login(user_type, customer_id=customer_id, max_attempts=max_attempts)
