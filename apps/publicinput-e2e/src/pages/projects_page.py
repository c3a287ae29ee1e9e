"""
@PURPOSE: Projects page object - project creation wizard and public-page commenting
@OUTLINE:
  - class ProjectsPage(BasePage)
  - navigation: navigate_to_customer_dashboard(), navigate_to_public_project_page()
  - wizard: click_on_create_new_item_button(), select_department(), type_project_name(),
    select_participant_anonymity(), click_on_next_button(), click_random_on_map(), click_create_project_button()
  - comments: submit_comment_for_question(), click_on_show_all_comments_button(), verify_my_comment_displayed()
  - flows: create_new_project(), test_commenting_functionality() (both return bool)
@GOTCHAS:
  - The location map is an iframe, so clicks go through page.mouse at absolute coordinates
  - Public project pages live under /Customer/Index/<customer>/<project>
@DEPENDENCIES:
  - External: playwright, loguru
  - Internal: .base_page
"""

import random

from loguru import logger

from src.core.errors import PublicInputTestError
from src.utils.page_helpers import log_step

from .base_page import BasePage

DEFAULT_CUSTOMER_ID = "1087"
MAP_CLICK_PADDING = 20


class ProjectsPage(BasePage):
    """Customer dashboard project creation and public project page."""

    SUPER_ADMIN_PAGE = 'xpath=//a[@id="UserDisplayName" and contains(., "superadmintest@publicinput.com")]'
    CUSTOMER_DASHBOARD_PAGE = 'xpath=//h2[contains(text(), "Engagement Dashboard")]'

    # Project creation
    CREATE_NEW_ITEM_BUTTON = 'xpath=(//button[normalize-space()="Create new item"])[1]'
    PROJECT_OPTION = 'a[data-target="#NewProjectModal"]'
    CREATE_NEW_PROJECT_MODAL = 'xpath=(//h4[normalize-space()="Create a New Project"])[1]'
    DEPARTMENT_SELECT = 'xpath=(//select[@name="DeptId"])[1]'
    PROJECT_NAME_INPUT = 'xpath=(//input[@name="name"])[1]'
    NEXT_BUTTON = 'button[class="btn btn-success nextBtn"]'
    SELECT_LOCATION_STEP = 'xpath=(//label[contains(text(),"Project Location")])[1]'
    ADD_POINT_BUTTON = (
        'xpath=(//div[@class="overviewMapEditor-drawPointButton btn btn-success btn-sm"]'
        '[normalize-space()="Add point"])[1]'
    )
    MAP_ELEMENT = 'xpath=//div[contains(@class, "map-container")]'
    MAP_IFRAME = ".overview-map-outer iframe"
    CREATE_PROJECT_BUTTON = 'xpath=(//button[normalize-space()="Create Project"])[1]'
    SKIP_MAP_BUTTON = "#skipLocationAndCreate"

    # Commenting
    PUBLIC_PROJECT_PAGE = 'xpath=(//input[@id="projectName"])[1]'
    SHOW_ALL_COMMENTS_BUTTON = 'xpath=//button[contains(text(), "Show All Comments")]'
    MY_COMMENT = 'xpath=//div[contains(@class, "comment-item") and contains(., "My comment")]'

    # ========== Navigation ==========

    async def navigate_to_customer_dashboard(self, customer_id: str) -> None:
        log_step(f"Navigating to customer dashboard for customer: {customer_id}")
        await self.navigate_to(f"{self.base_url}/Customer/CivicHome/{customer_id}")
        await self.wait_for_element(self.CUSTOMER_DASHBOARD_PAGE)

    async def navigate_to_public_project_page(self, project_id: str, customer_id: str = DEFAULT_CUSTOMER_ID) -> None:
        log_step(f"Navigating to public project page for project: {project_id}")
        await self.navigate_to(f"{self.base_url}/Customer/Index/{customer_id}/{project_id}")
        await self.wait_for_element(self.PUBLIC_PROJECT_PAGE)

    async def verify_super_admin_page_loaded(self) -> bool:
        return await self.is_element_visible(self.SUPER_ADMIN_PAGE)

    async def verify_account_name_displayed(self, account_name: str) -> bool:
        return await self.is_element_visible(
            f'xpath=//a[@id="UserDisplayName" and contains(., "{account_name}")]'
        )

    async def verify_customer_dashboard_displayed(self, expected_title: str) -> bool:
        return await self.is_element_visible(f'xpath=//h2[contains(text(), "{expected_title}")]')

    # ========== Project creation ==========

    async def click_on_create_new_item_button(self) -> None:
        log_step("Clicking on Create New Item button")
        await self.click_element(self.CREATE_NEW_ITEM_BUTTON)

    async def click_on_project_option(self) -> None:
        log_step("Clicking on Project option")
        await self.click_element(self.PROJECT_OPTION)

    async def verify_create_new_project_modal_appears(self) -> bool:
        return await self.is_element_visible(self.CREATE_NEW_PROJECT_MODAL)

    async def select_department(self, department: str) -> None:
        log_step(f"Selecting department: {department}")
        await self.select_option(self.DEPARTMENT_SELECT, department)

    async def type_project_name(self, project_name: str) -> None:
        log_step(f"Typing project name: {project_name}")
        await self.fill_input(self.PROJECT_NAME_INPUT, project_name)

    async def select_participant_anonymity(self, anonymity: str) -> None:
        log_step(f"Selecting participant anonymity: {anonymity}")
        await self.click_element(f'xpath=//label[contains(., "{anonymity}")]')

    async def click_on_next_button(self) -> None:
        log_step("Clicking on Next button")
        await self.click_element(self.NEXT_BUTTON)

    async def verify_select_location_step_appears(self) -> bool:
        return await self.is_element_visible(self.SELECT_LOCATION_STEP)

    async def click_add_point_button(self) -> None:
        log_step("Clicking Add Point button")
        await self.click_element(self.ADD_POINT_BUTTON)

    async def click_anywhere_on_map(self) -> None:
        log_step("Clicking anywhere on the map")
        await self.click_element(self.MAP_ELEMENT)

    async def skip_map_create_project(self) -> None:
        log_step("Clicking skip map and create project button")
        await self.click_element(self.SKIP_MAP_BUTTON)

    async def click_random_on_map(self) -> None:
        """Click a random point inside the map iframe, 20px away from its edges.

        Raises:
            PublicInputTestError: The iframe has no bounding box (hidden/detached)
        """
        log_step("Clicking randomly on the map")

        await self.wait_for_element(self.MAP_IFRAME)
        box = await self.page.locator(self.MAP_IFRAME).bounding_box()
        if not box:
            raise PublicInputTestError("Map iframe not found or not visible")

        min_x = box["x"] + MAP_CLICK_PADDING
        max_x = box["x"] + box["width"] - MAP_CLICK_PADDING
        min_y = box["y"] + MAP_CLICK_PADDING
        max_y = box["y"] + box["height"] - MAP_CLICK_PADDING

        x = random.uniform(min_x, max_x)
        y = random.uniform(min_y, max_y)
        await self.page.mouse.click(x, y)
        log_step(f"Clicked at coordinates: ({x:.2f}, {y:.2f})")

    async def click_create_project_button(self) -> None:
        log_step("Clicking Create Project button")
        await self.click_element(self.CREATE_PROJECT_BUTTON)
        await self.wait_for_seconds(5)

    async def verify_project_page_loaded(self, project_name: str) -> bool:
        return await self.is_element_visible(
            f"xpath=//input[@id='projectName' and contains(@value, \"{project_name}\")]"
        )

    # ========== Comments ==========

    @staticmethod
    def comment_question_selector(poll_id: str) -> str:
        return f'xpath=//div[contains(@class, "comment-question") and contains(@data-poll-id, "{poll_id}")]'

    async def submit_comment_for_question(self, comment_text: str, poll_id: str) -> None:
        log_step(f"Submitting comment for poll {poll_id}: {comment_text}")

        question = self.comment_question_selector(poll_id)
        await self.wait_for_element(question)
        await self.fill_input(f'{question}//textarea[@name="comment"]', comment_text)
        await self.click_element(f'{question}//button[contains(text(), "Submit Comment")]')

    async def click_on_show_all_comments_button(self) -> None:
        log_step("Clicking on Show All Comments button")
        await self.click_element(self.SHOW_ALL_COMMENTS_BUTTON)

    async def verify_my_comment_displayed(self) -> bool:
        return await self.is_element_visible(self.MY_COMMENT)

    # ========== Flows ==========

    async def create_new_project(self, project_name: str, department: str, anonymity: str) -> bool:
        """Run the whole creation wizard.

        Returns:
            True when the new project's page shows up, False on any failure
        """
        try:
            await self.click_on_create_new_item_button()
            await self.click_on_project_option()
            if not await self.verify_create_new_project_modal_appears():
                return False

            await self.select_department(department)
            await self.type_project_name(project_name)
            await self.select_participant_anonymity(anonymity)
            await self.click_on_next_button()
            if not await self.verify_select_location_step_appears():
                return False

            await self.click_add_point_button()
            await self.click_random_on_map()
            await self.click_create_project_button()
            return await self.verify_project_page_loaded(project_name)
        except Exception as e:
            logger.warning(f"Error creating project: {e}")
            return False

    async def test_commenting_functionality(self, project_id: str, poll_id: str, comment_text: str) -> bool:
        try:
            await self.navigate_to_public_project_page(project_id)
            await self.submit_comment_for_question(comment_text, poll_id)
            await self.click_on_show_all_comments_button()
            return await self.verify_my_comment_displayed()
        except Exception as e:
            logger.warning(f"Error testing commenting functionality: {e}")
            return False

    async def wait_for_page_ready(self) -> None:
        await self.wait_for_element(self.CUSTOMER_DASHBOARD_PAGE)
        await self.wait_for_network_idle()
