"""
@PURPOSE: SASpeakUp profile page object - profile navigation and address management
@OUTLINE:
  - class ProfilePage(BasePage)
  - async def navigate_to_sa_speak_up(): open /saspeakup
  - address actions: click_on_add_address_button(), enter_address(), click_on_address_delete_button()
  - address checks: verify_address(), verify_address_is_deleted(), get_addresses(), wait_for_address_count()
  - notifications: get_notification_text(), is_notification_visible(), wait_for_notification()
@GOTCHAS:
  - The application normalizes saved addresses (e.g. "Lane" -> "Ln" plus ZIP), so verify against the normalized text
  - Duplicate addresses are rejected with a notifyjs warning, not a form error
@DEPENDENCIES:
  - External: playwright, loguru
  - Internal: .base_page
"""

from typing import List

from loguru import logger
from playwright.async_api import Error as PlaywrightError

from src.utils.page_helpers import log_step

from .base_page import BasePage

ADDRESS_TIMEOUT_MS = 16000
PAGE_TEXT_TIMEOUT_MS = 10000
SHORT_TIMEOUT_MS = 5000


class ProfilePage(BasePage):
    """Public profile (SASpeakUp) page."""

    MY_PROFILE_BUTTON = "text=My Profile"
    VIEW_EDIT_PROFILE_BUTTON = "text=View/Edit Profile"
    ADD_ADDRESS_BUTTON = 'xpath=//button[contains(text(),"Add Address")]'
    ADDRESS_INPUT = ".editable-input > input"
    SAVE_BUTTON = 'xpath=//button[text()="Save"]'
    ADDRESS_ROW = "div.location-row"
    ADDRESS_VALUE = "span.attr-value"
    REMOVE_ADDRESS_BUTTON = "button.remove-attr"
    CONFIRM_DELETE_BUTTON = ".btn.btn-danger.btn-delete"
    NOTIFICATION_CONTAINER = "div.notifyjs-container"
    NOTIFICATION_BOOTSTRAP = "div.notifyjs-bootstrap-warn"
    NOTIFICATION_TEXT = "span"
    ADDRESS_EDITOR_FORM = "div.address-editor-form"
    PROFILE_NAME = "text=profile name"

    @staticmethod
    def address_selector(address: str) -> str:
        return f"xpath=(//span[contains(text(),'{address}')])[1]"

    async def navigate_to_sa_speak_up(self) -> None:
        log_step("Navigating to SASpeakUp profile page")
        await self.navigate_to(f"{self.base_url}/saspeakup")

    async def is_profile_page_displayed(self) -> bool:
        try:
            await self.page.wait_for_selector(self.PROFILE_NAME, timeout=PAGE_TEXT_TIMEOUT_MS)
            return True
        except PlaywrightError:
            return False

    async def is_text_visible(self, text: str) -> bool:
        try:
            await self.page.wait_for_selector(f"text={text}", timeout=SHORT_TIMEOUT_MS)
            return True
        except PlaywrightError:
            return False

    async def click_on_my_profile_button(self) -> None:
        log_step("Clicking on My Profile button")
        await self.page.locator(self.MY_PROFILE_BUTTON).first.click()

    async def is_my_profile_button_visible(self) -> bool:
        try:
            await self.page.wait_for_selector(self.MY_PROFILE_BUTTON, timeout=SHORT_TIMEOUT_MS)
            return True
        except PlaywrightError:
            return False

    async def click_on_view_edit_profile_button(self) -> None:
        log_step("Clicking on View/Edit Profile button")
        await self.page.locator(self.VIEW_EDIT_PROFILE_BUTTON).click()

    async def click_on_add_address_button(self) -> None:
        log_step("Clicking on Add Address button")
        await self.page.locator(self.ADD_ADDRESS_BUTTON).click()

    async def enter_address(self, address: str) -> None:
        log_step(f"Entering address: {address}")
        await self.page.fill(self.ADDRESS_INPUT, address)
        await self.page.locator(self.SAVE_BUTTON).click()

    async def click_on_address_delete_button(self, address: str) -> None:
        """Remove an address row and confirm the dialog."""
        log_step(f"Clicking delete button for address: {address}")
        await (
            self.page.locator(self.ADDRESS_ROW)
            .locator(self.ADDRESS_VALUE)
            .locator(f"text={address}")
            .locator("..")
            .locator(self.REMOVE_ADDRESS_BUTTON)
            .click()
        )
        await self.page.locator(self.CONFIRM_DELETE_BUTTON).click()

    async def verify_address(self, address: str) -> bool:
        try:
            await self.page.wait_for_load_state()
            await self.page.wait_for_selector(self.address_selector(address), timeout=ADDRESS_TIMEOUT_MS)
            return True
        except PlaywrightError:
            return False

    async def verify_address_is_deleted(self, address: str) -> bool:
        try:
            await self.page.wait_for_selector(
                self.address_selector(address), state="hidden", timeout=ADDRESS_TIMEOUT_MS
            )
            return True
        except PlaywrightError:
            return False

    async def verify_profile_page_loaded(self, text: str) -> bool:
        try:
            await self.page.wait_for_load_state()
            await self.page.wait_for_selector(f"text={text}", timeout=PAGE_TEXT_TIMEOUT_MS)
            return True
        except PlaywrightError:
            return False

    async def get_notification_text(self) -> str:
        """Text of the current warning notification, or "" if none shows up within 5s."""
        try:
            notification = (
                self.page.locator(self.NOTIFICATION_CONTAINER)
                .locator(self.NOTIFICATION_BOOTSTRAP)
                .locator(self.NOTIFICATION_TEXT)
            )
            await notification.wait_for(timeout=SHORT_TIMEOUT_MS)
            return await notification.inner_text()
        except PlaywrightError:
            return ""

    async def get_addresses(self) -> List[str]:
        try:
            address_elements = self.page.locator(self.ADDRESS_EDITOR_FORM).locator(self.ADDRESS_VALUE)
            await address_elements.first.wait_for(timeout=SHORT_TIMEOUT_MS)
            return await address_elements.all_inner_texts()
        except PlaywrightError:
            return []

    async def get_address_count(self) -> int:
        return len(await self.get_addresses())

    async def wait_for_address_count(self, expected_count: int, timeout: int = 10000) -> None:
        await self.page.wait_for_function(
            """count => document.querySelectorAll(
                'div.address-editor-form span.attr-value'
            ).length === count""",
            arg=expected_count,
            timeout=timeout,
        )

    async def is_notification_visible(self) -> bool:
        try:
            await self.page.wait_for_selector(self.NOTIFICATION_CONTAINER, timeout=SHORT_TIMEOUT_MS)
            return True
        except PlaywrightError:
            return False

    async def wait_for_notification(self, timeout: int = 10000) -> None:
        await self.page.wait_for_selector(self.NOTIFICATION_CONTAINER, timeout=timeout)

    async def clear_address_input(self) -> None:
        log_step("Clearing address input field")
        await self.page.fill(self.ADDRESS_INPUT, "")

    async def verify_address_input_is_empty(self) -> bool:
        return await self.page.input_value(self.ADDRESS_INPUT) == ""

    async def reload_page(self) -> None:
        log_step("Reloading profile page")
        await self.reload()

    async def wait_for_page_ready(self) -> None:
        await self.page.wait_for_load_state("networkidle")
        await self.page.wait_for_load_state("domcontentloaded")

    async def take_profile_screenshot(self, name: str) -> None:
        await self.take_screenshot(f"profile-{name}")
        logger.debug(f"Profile screenshot captured: {name}")
