"""
@PURPOSE: Project Admin page object - admin tabs and project name editing
@OUTLINE:
  - class ProjectAdminPage(BasePage)
  - async def navigate_to_project_admin_page(): open /ProjectAdmin/<id>
  - tabs: click_on_tab(), verify_tab_open(), verify_all_project_tabs_loading()
  - name editing: click_on_project_name(), update_project_name(), click_on_save_button(),
    verify_success_message_displayed(), test_project_name_editing()
  - async def navigate_to_customer_dashboard(): open /CustomerDashboard/<id>
@GOTCHAS:
  - Tab names are case-insensitive; anything else raises UnknownTabError
  - The active Comments tab carries class "b-l active", the others plain "active"
@DEPENDENCIES:
  - External: playwright, loguru
  - Internal: .base_page, src.core.errors
"""

from typing import Dict

from loguru import logger
from playwright.async_api import Error as PlaywrightError

from src.core.errors import UnknownTabError
from src.utils.page_helpers import log_step

from .base_page import BasePage

TAB_NAV = 'xpath=//ul[@id="projectAdminMainTabNav"]'
PROJECT_TABS = ["Email", "Text", "Participants", "Comments", "Subscribers"]
SUCCESS_MESSAGE_TIMEOUT_MS = 10000


def _tab_selector(label: str) -> str:
    return f'{TAB_NAV}//li[contains(., "{label}")]'


def _active_tab_selector(label: str) -> str:
    active_class = "b-l active" if label == "Comments" else "active"
    return f'{TAB_NAV}//li[@class="{active_class}"]//a[contains(., "{label}")]'


class ProjectAdminPage(BasePage):
    """Project administration page."""

    SUPER_ADMIN_PAGE = 'xpath=//a[@id="UserDisplayName" and contains(., "superadmintest@publicinput.com")]'
    PROJECT_ADMIN_PAGE = 'xpath=//input[@id="projectName"]'
    PROJECT_NAME_INPUT = 'xpath=//input[@id="projectName"]'
    SAVE_BUTTON = 'xpath=//button[@id="projectNameSaveButton"]'
    SUCCESS_MESSAGE = 'xpath=//span[contains(., "Successfully updated")]'

    TAB_SELECTORS: Dict[str, str] = {label.lower(): _tab_selector(label) for label in PROJECT_TABS}
    TAB_CONTENT_SELECTORS: Dict[str, str] = {label.lower(): _active_tab_selector(label) for label in PROJECT_TABS}

    # ========== Navigation ==========

    async def navigate_to_project_admin_page(self, project_id: str) -> None:
        log_step(f"Navigating to project admin page for project: {project_id}")
        await self.navigate_to(f"{self.base_url}/ProjectAdmin/{project_id}")
        await self.wait_for_element(self.PROJECT_ADMIN_PAGE)

    async def verify_super_admin_page_loaded(self) -> bool:
        return await self.is_element_visible(self.SUPER_ADMIN_PAGE)

    async def verify_account_name_displayed(self, account_name: str) -> bool:
        return await self.is_element_visible(
            f'xpath=//a[@id="UserDisplayName" and contains(., "{account_name}")]'
        )

    async def verify_project_admin_page_open(self) -> bool:
        return await self.is_element_visible(self.PROJECT_ADMIN_PAGE)

    async def navigate_to_customer_dashboard(self, customer_id: str) -> None:
        log_step(f"Navigating to customer dashboard for customer: {customer_id}")
        await self.navigate_to(f"{self.base_url}/CustomerDashboard/{customer_id}")

    async def verify_customer_dashboard_displayed(self, expected_title: str) -> bool:
        return await self.is_element_visible(f'xpath=//h1[contains(text(), "{expected_title}")]')

    # ========== Tabs ==========

    def _lookup(self, selectors: Dict[str, str], tab_name: str) -> str:
        selector = selectors.get(tab_name.lower())
        if selector is None:
            raise UnknownTabError(tab_name)
        return selector

    async def click_on_tab(self, tab_name: str) -> None:
        """Click an admin tab (Email, Text, Participants, Comments, Subscribers).

        Raises:
            UnknownTabError: Unsupported tab name
        """
        log_step(f"Clicking on tab: {tab_name}")
        selector = self._lookup(self.TAB_SELECTORS, tab_name)
        await self.click_element(selector)
        await self.wait_for_seconds(2)

    async def verify_tab_open(self, tab_name: str) -> bool:
        return await self.is_element_visible(self._lookup(self.TAB_CONTENT_SELECTORS, tab_name))

    async def verify_all_project_tabs_loading(self) -> bool:
        for tab in PROJECT_TABS:
            await self.click_on_tab(tab)
            if not await self.verify_tab_open(tab):
                logger.warning(f"Tab did not open: {tab}")
                return False
        return True

    async def wait_for_seconds(self, seconds: float) -> None:
        log_step(f"Waiting for {seconds} seconds")
        try:
            await self.page.wait_for_timeout(seconds * 1000)
        except PlaywrightError as e:
            logger.error(f"Failed to wait for {seconds} seconds: {e}")

    # ========== Project name ==========

    async def click_on_project_name(self) -> None:
        log_step("Clicking on project name to edit")
        await self.click_element(self.PROJECT_NAME_INPUT)

    async def update_project_name(self, new_name: str) -> None:
        log_step(f"Updating project name to: {new_name}")
        await self.fill_input(self.PROJECT_NAME_INPUT, new_name)

    async def click_on_save_button(self) -> None:
        log_step("Clicking on Save button")
        await self.click_element(self.SAVE_BUTTON)

    async def verify_success_message_displayed(self) -> bool:
        return await self.is_element_visible(self.SUCCESS_MESSAGE)

    async def wait_for_success_message_to_disappear(self) -> None:
        log_step("Waiting for success message to disappear")
        await self.page.wait_for_selector(self.SUCCESS_MESSAGE, state="hidden", timeout=SUCCESS_MESSAGE_TIMEOUT_MS)

    async def verify_project_name_updated(self, expected_name: str) -> bool:
        current_value = await self.page.input_value(self.PROJECT_NAME_INPUT)
        logger.debug(f"Current project name: {current_value}, expected: {expected_name}")
        return current_value == expected_name

    async def get_current_project_name(self) -> str:
        return await self.get_text(self.PROJECT_NAME_INPUT)

    async def test_project_name_editing(self, new_name: str) -> bool:
        """Rename the project and wait for the save confirmation.

        Returns:
            True when "Successfully updated" shows up after saving
        """
        await self.click_on_project_name()
        await self.update_project_name(new_name)
        await self.click_on_save_button()
        await self.wait_for_seconds(2)

        if not await self.verify_success_message_displayed():
            return False

        await self.wait_for_seconds(5)
        return True

    async def wait_for_page_ready(self) -> None:
        await self.wait_for_element(self.PROJECT_ADMIN_PAGE)
        await self.wait_for_network_idle()
