"""
@PURPOSE: CRM page object - contact lists, activities and the legacy segment view
@OUTLINE:
  - class CRMPage(BasePage)
  - navigation: navigate_to_crm(), verify_crm_home_page_visible()
  - lists: click_on_lists_tab(), click_on_create_new_list_button(), enter_list_name(), verify_list_displayed()
  - activities: click_on_new_activity_button(), select_activity_type(), select_associate_with_project(),
    enter_activity_details(), click_on_save_new_activity_button(), search_on_activity_log_tab()
  - segments: enter_segment_search_text(), get_total_count_below_members_table(), verify_total_count_equals_potential_count()
@GOTCHAS:
  - wait_for_seconds() here waits for network idle, the argument is only logged
  - Activity type and project pickers are "chosen" dropdowns: open, type, press Enter
  - Counts are parsed from display text by keeping digits only, defaulting to 0
@DEPENDENCIES:
  - External: playwright, loguru
  - Internal: .base_page
@RELATED: segmentation_page.py
"""

import re

from src.utils.page_helpers import log_step

from .base_page import BasePage

LISTS_TAB_SETTLE_MS = 3000
MEMBERS_TABLE_SETTLE_MS = 3000


def parse_count(text: str) -> int:
    """Digits-only integer from display text.

    Examples:
        >>> parse_count("Total: 1,234 members")
        1234
        >>> parse_count("none")
        0
    """
    return int(re.sub(r"\D", "", text or "") or 0)


class CRMPage(BasePage):
    """CRM area of the customer dashboard."""

    # Navigation
    CRM_BUTTON = 'xpath=//span[contains(text(), "CRM")]'
    CRM_HOME_PAGE = 'xpath=(//center[normalize-space()="CRM Home"])[1]'

    # Lists
    LISTS_TAB = 'xpath=//div[contains(text(), "Lists")]'
    CREATE_NEW_LIST_BUTTON = 'xpath=(//a[normalize-space()="Create New List"])[1]'
    CREATE_NEW_CONTACT_LIST_MODAL = 'xpath=//h3[normalize-space()="Create new contact list"]'
    LIST_NAME_INPUT = 'xpath=//input[@name="name"]'
    CREATE_LIST_BUTTON = 'xpath=//button[contains(text(), "Create List")]'
    FILTER_SEARCH_BOX = 'xpath=//input[@placeholder="Search lists"]'

    # Activities
    NEW_ACTIVITY_BUTTON = "a.btn.btn-default.m-t-sm.m-b-sm.open-new-activity-modal"
    NEW_ACTIVITY_MODAL = ".activity-edit-col.col-xs-12"
    ACTIVITY_TYPE_SELECT_BUTTON = 'xpath=(//a[@class="chosen-single"])[2]'
    ACTIVITY_TYPE_SEARCH_INPUT = 'div[id="Activity_ActivityType_chosen"] input[type="text"]'
    CURRENT_DATE_BUTTON = 'xpath=(//input[@id="Activity_TimeStamp"])[1]'
    ASSOCIATE_WITH_PROJECT_BUTTON = 'div[id="projSelect_chosen"] span'
    ASSOCIATE_WITH_PROJECT_SEARCH_INPUT = 'div[id="projSelect_chosen"] input[type="text"]'
    ACTIVITY_DETAILS_TEXTAREA = 'xpath=//textarea[@id="Activity_Notes"]'
    SAVE_NEW_ACTIVITY_BUTTON = ".btn.btn-primary.m-t-xs.add-new-activity"
    ACTIVITY_LOG_TAB = 'div[data-tab-name="activity"]'
    ACTIVITY_TABLE_SEARCH_INPUT = 'input[aria-controls="activity-tracker-table"]'
    FIRST_ACTIVITY_ENTRY = 'xpath=(//a[@class="edit-activity"])[1]'
    ACTIVITY_DATE_INPUT = 'xpath=//input[@id="Activity_TimeStamp"]'

    # Segments
    SEGMENT_SEARCH_BOX = 'xpath=//input[@placeholder="Search segments..."]'
    MEMBERS_TABLE = 'xpath=//table[contains(@class, "members-table")]'
    TOTAL_COUNT_ELEMENT = 'xpath=//div[contains(@class, "total-count")]'
    POTENTIAL_SEGMENT_MEMBERS_COUNT = 'xpath=//div[contains(@class, "potential-members-count")]'

    # ========== Navigation ==========

    async def navigate_to_crm(self) -> None:
        log_step("Navigating to CRM page")
        await self.click_element(self.CRM_BUTTON)
        await self.wait_for_element(self.CRM_HOME_PAGE)
        await self.page.wait_for_load_state("networkidle")

    async def verify_crm_home_page_visible(self) -> bool:
        return await self.is_element_visible(self.CRM_HOME_PAGE)

    # ========== Lists ==========

    async def click_on_lists_tab(self) -> None:
        log_step("Clicking on Lists tab")
        await self.click_element(self.LISTS_TAB)
        await self.page.wait_for_timeout(LISTS_TAB_SETTLE_MS)

    async def verify_list_tab_page_loaded(self) -> bool:
        return await self.is_element_visible(self.LISTS_TAB)

    async def verify_create_new_contact_list_modal_closed(self) -> bool:
        return not await self.is_element_visible(self.CREATE_NEW_CONTACT_LIST_MODAL)

    async def click_on_create_new_list_button(self) -> None:
        log_step("Clicking on Create New List button")
        await self.click_element(self.CREATE_NEW_LIST_BUTTON)

    async def verify_create_new_contact_list_modal_loaded(self) -> bool:
        return await self.is_element_visible(self.CREATE_NEW_CONTACT_LIST_MODAL)

    async def enter_list_name(self, list_name: str) -> None:
        log_step(f"Entering list name: {list_name}")
        await self.fill_input(self.LIST_NAME_INPUT, list_name)

    async def click_on_create_list_button(self) -> None:
        log_step("Clicking on Create List button")
        await self.click_element(self.CREATE_LIST_BUTTON)

    async def enter_filter_search_text(self, search_text: str) -> None:
        log_step(f"Entering search text: {search_text}")
        await self.click_element(self.FILTER_SEARCH_BOX)
        await self.fill_input(self.FILTER_SEARCH_BOX, search_text)
        await self.press_enter(self.FILTER_SEARCH_BOX)

    @staticmethod
    def list_link_selector(list_name: str) -> str:
        return (
            "xpath=//tr[@class='subscriber-list-row odd']"
            f"//a[@class='pointer' and contains(text(), \"{list_name}\")]"
        )

    async def verify_list_displayed(self, list_name: str) -> bool:
        return await self.is_element_visible(self.list_link_selector(list_name))

    async def click_on_list_with_name(self, list_name: str) -> None:
        log_step(f"Clicking on list: {list_name}")
        selector = self.list_link_selector(list_name).replace("xpath=", "xpath=(", 1) + ")[1]"
        await self.click_element(selector)

    async def verify_list_modal_displayed(self, list_name: str) -> bool:
        return await self.is_element_visible(f'xpath=(//input[@value="{list_name}"])[1]')

    # ========== Activities ==========

    async def click_on_new_activity_button(self) -> None:
        log_step("Clicking on New Activity button")
        await self.wait_for_network_idle()
        await self.wait_for_seconds(3)
        await self.click_element(self.NEW_ACTIVITY_BUTTON)

    async def verify_new_activity_modal_displayed(self) -> bool:
        return await self.is_element_visible(self.NEW_ACTIVITY_MODAL)

    async def select_activity_type(self, activity_type: str) -> None:
        log_step(f"Selecting activity type: {activity_type}")
        await self.click_element(self.ACTIVITY_TYPE_SELECT_BUTTON)
        await self.fill_input(self.ACTIVITY_TYPE_SEARCH_INPUT, activity_type)
        await self.press_enter(self.ACTIVITY_TYPE_SEARCH_INPUT)

    async def search_on_activity_log_tab(self, search_string: str) -> None:
        log_step(f"Searching on activity log tab: {search_string}")
        await self.click_element(self.ACTIVITY_TABLE_SEARCH_INPUT)
        await self.fill_input(self.ACTIVITY_TABLE_SEARCH_INPUT, search_string)
        await self.press_enter(self.ACTIVITY_TABLE_SEARCH_INPUT)
        await self.wait_for_seconds(5)

    async def select_current_date(self) -> None:
        log_step("Selecting current date")
        await self.click_element(self.CURRENT_DATE_BUTTON)

    async def select_associate_with_project(self, project_name: str) -> None:
        log_step(f"Selecting associate with project: {project_name}")
        await self.click_element(self.ASSOCIATE_WITH_PROJECT_BUTTON)
        await self.fill_input(self.ASSOCIATE_WITH_PROJECT_SEARCH_INPUT, project_name)
        await self.press_enter(self.ASSOCIATE_WITH_PROJECT_SEARCH_INPUT)

    async def enter_activity_details(self, details: str) -> None:
        log_step(f"Entering activity details: {details}")
        await self.fill_input(self.ACTIVITY_DETAILS_TEXTAREA, details)

    async def click_on_save_new_activity_button(self) -> None:
        log_step("Clicking on Save New Activity button")
        await self.click_element(self.SAVE_NEW_ACTIVITY_BUTTON)

    async def click_on_activity_log_tab(self) -> None:
        log_step("Clicking on Activity Log tab")
        await self.wait_for_network_idle()
        await self.click_element(self.ACTIVITY_LOG_TAB)

    async def click_on_first_activity_entry(self) -> None:
        log_step("Clicking on first activity entry")
        await self.click_element(self.FIRST_ACTIVITY_ENTRY)

    async def verify_activity_details_in_edit_modal(self, expected_details: str) -> bool:
        selector = f"xpath=//textarea[@id='Activity_Notes' and contains(text(), \"{expected_details}\")]"
        return await self.is_element_visible(selector)

    async def verify_activity_date_in_edit_modal(self) -> bool:
        return await self.is_element_visible(self.ACTIVITY_DATE_INPUT)

    async def verify_associate_with_project_in_edit_modal(self) -> bool:
        return await self.is_element_visible(self.ASSOCIATE_WITH_PROJECT_BUTTON)

    # ========== Segments ==========

    async def enter_segment_search_text(self, search_text: str) -> None:
        log_step(f"Entering segment search text: {search_text}")
        await self.fill_input(self.SEGMENT_SEARCH_BOX, search_text)

    async def click_on_segment_with_name(self, segment_name: str) -> None:
        log_step(f"Clicking on segment: {segment_name}")
        await self.click_element(
            f'xpath=//div[contains(@class, "segment-item") and contains(text(), "{segment_name}")]'
        )

    async def verify_segment_page_displayed(self, segment_name: str) -> bool:
        return await self.is_element_visible(f'xpath=//h1[contains(text(), "{segment_name}")]')

    async def wait_for_members_table_to_load(self) -> None:
        log_step("Waiting for members table to load")
        await self.wait_for_element(self.MEMBERS_TABLE)
        await self.page.wait_for_timeout(MEMBERS_TABLE_SETTLE_MS)

    async def get_total_count_below_members_table(self) -> int:
        return parse_count(await self.get_text(self.TOTAL_COUNT_ELEMENT))

    async def get_potential_segment_members_count(self) -> int:
        return parse_count(await self.get_text(self.POTENTIAL_SEGMENT_MEMBERS_COUNT))

    async def verify_total_count_equals_potential_count(self) -> bool:
        total_count = await self.get_total_count_below_members_table()
        potential_count = await self.get_potential_segment_members_count()
        return total_count == potential_count

    async def wait_for_seconds(self, seconds: float) -> None:
        log_step(f"Waiting for {seconds} seconds")
        await self.page.wait_for_load_state("networkidle")
