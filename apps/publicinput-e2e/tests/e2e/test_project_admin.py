"""
@PURPOSE: Live project admin scenarios as Super Admin - admin tabs and project renaming
@GOTCHAS:
  - Renaming tests mutate project R6600; the last name written wins
@DEPENDENCIES:
  - External: pytest, pytest-asyncio
  - Internal: src.pages.project_admin_page, src.core.user_type
"""

import pytest

from src.core.env_config import get_env_config
from src.core.user_type import UserType

TABS_PROJECT_ID = "B2716"
RENAME_PROJECT_ID = "R6600"
PROJECT_TABS = ["Email", "Text", "Participants", "Comments", "Subscribers"]


@pytest.fixture(autouse=True)
async def super_admin(project_admin_page):
    await project_admin_page.retry_login(UserType.SUPER_ADMIN)


@pytest.fixture
async def rename_project(project_admin_page):
    await project_admin_page.navigate_to_project_admin_page(RENAME_PROJECT_ID)
    assert await project_admin_page.verify_project_admin_page_open()
    return project_admin_page


class TestProjectAdminNavigation:
    @pytest.mark.asyncio
    async def test_super_admin_page_loaded(self, project_admin_page):
        assert await project_admin_page.verify_super_admin_page_loaded()

    @pytest.mark.asyncio
    async def test_account_name_displayed(self, project_admin_page):
        account_name = get_env_config().get_super_admin_email()

        assert await project_admin_page.verify_account_name_displayed(account_name)

    @pytest.mark.asyncio
    async def test_customer_dashboard(self, project_admin_page):
        await project_admin_page.navigate_to_customer_dashboard("1087")

        assert await project_admin_page.verify_customer_dashboard_displayed("City of Zen Engagement Dashboard")

    @pytest.mark.asyncio
    async def test_admin_page_for_each_project(self, project_admin_page):
        for project_id in ["B2716", "R6600", "I1431"]:
            await project_admin_page.navigate_to_project_admin_page(project_id)

            assert await project_admin_page.verify_project_admin_page_open()
            await project_admin_page.wait_for_page_ready()


class TestProjectTabs:
    @pytest.mark.asyncio
    async def test_each_tab_opens(self, project_admin_page):
        await project_admin_page.navigate_to_project_admin_page(TABS_PROJECT_ID)
        assert await project_admin_page.verify_project_admin_page_open()

        for tab in PROJECT_TABS:
            await project_admin_page.click_on_tab(tab)
            assert await project_admin_page.verify_tab_open(tab)

    @pytest.mark.asyncio
    async def test_all_tabs_loading(self, project_admin_page):
        await project_admin_page.navigate_to_project_admin_page(TABS_PROJECT_ID)

        assert await project_admin_page.verify_all_project_tabs_loading()


class TestProjectRenaming:
    @pytest.mark.asyncio
    async def test_rename_twice(self, rename_project):
        assert await rename_project.test_project_name_editing("Project Renamed Test")
        assert await rename_project.test_project_name_editing("Testing Project Renaming")

    @pytest.mark.asyncio
    @pytest.mark.slow
    @pytest.mark.parametrize(
        "project_name",
        [
            "Test Project Name 1",
            "Test Project Name 2",
            "Test Project Name 3",
            "Project with Special Chars: @#$%",
            "Project with Numbers: 123456",
            "Project with Spaces and Symbols: !@#$%^&*()",
        ],
    )
    async def test_rename_variants(self, rename_project, project_name):
        assert await rename_project.test_project_name_editing(project_name)
        assert await rename_project.verify_project_name_updated(project_name)

    @pytest.mark.asyncio
    async def test_empty_name_not_saved(self, rename_project):
        await rename_project.click_on_project_name()
        await rename_project.update_project_name("")
        await rename_project.click_on_save_button()

        assert not await rename_project.verify_success_message_displayed()
