"""
@PURPOSE: Tests for src/pages/project_admin_page.py - admin tabs and project name editing
@DEPENDENCIES:
  - External: pytest, pytest-asyncio
  - Internal: src.pages.project_admin_page, tests.mocks
"""

import pytest

from src.core.errors import UnknownTabError
from src.pages.project_admin_page import PROJECT_TABS, ProjectAdminPage


@pytest.fixture
def admin_page(mock_page, config_manager) -> ProjectAdminPage:
    return ProjectAdminPage(mock_page, config_manager)


class TestTabSelectors:
    def test_all_tabs_mapped(self):
        assert sorted(ProjectAdminPage.TAB_SELECTORS) == ["comments", "email", "participants", "subscribers", "text"]

    def test_comments_tab_active_class(self):
        assert '@class="b-l active"' in ProjectAdminPage.TAB_CONTENT_SELECTORS["comments"]
        assert '@class="active"' in ProjectAdminPage.TAB_CONTENT_SELECTORS["email"]

    @pytest.mark.asyncio
    async def test_unknown_tab(self, admin_page, mock_page):
        with pytest.raises(UnknownTabError, match="Unknown tab name: Settings"):
            await admin_page.click_on_tab("Settings")

        assert mock_page.clicked == []

    @pytest.mark.asyncio
    async def test_unknown_tab_is_value_error(self, admin_page):
        with pytest.raises(ValueError):
            await admin_page.verify_tab_open("Polls")


class TestTabs:
    @pytest.mark.asyncio
    async def test_click_on_tab_case_insensitive(self, admin_page, mock_page):
        await admin_page.click_on_tab("PARTICIPANTS")

        assert mock_page.clicked == [ProjectAdminPage.TAB_SELECTORS["participants"]]
        assert mock_page.waits == [2000]

    @pytest.mark.asyncio
    async def test_verify_all_project_tabs_loading(self, admin_page, mock_page):
        assert await admin_page.verify_all_project_tabs_loading() is True
        assert len(mock_page.clicked) == len(PROJECT_TABS)

    @pytest.mark.asyncio
    async def test_verify_all_project_tabs_stops_at_first_failure(self, admin_page, mock_page):
        mock_page.hide_selector(ProjectAdminPage.TAB_CONTENT_SELECTORS["participants"])

        assert await admin_page.verify_all_project_tabs_loading() is False
        assert mock_page.clicked[-1] == ProjectAdminPage.TAB_SELECTORS["participants"]
        assert len(mock_page.clicked) == 3


class TestNavigation:
    @pytest.mark.asyncio
    async def test_project_admin_page(self, admin_page, mock_page):
        await admin_page.navigate_to_project_admin_page("R6600")

        assert mock_page.visited == ["https://publicinput.com/ProjectAdmin/R6600"]
        assert await admin_page.verify_project_admin_page_open() is True

    @pytest.mark.asyncio
    async def test_customer_dashboard(self, admin_page, mock_page):
        await admin_page.navigate_to_customer_dashboard("1087")

        assert mock_page.visited == ["https://publicinput.com/CustomerDashboard/1087"]


class TestProjectName:
    @pytest.mark.asyncio
    async def test_project_name_editing(self, admin_page, mock_page):
        assert await admin_page.test_project_name_editing("Renamed project") is True

        assert await admin_page.verify_project_name_updated("Renamed project") is True
        assert mock_page.clicked == [ProjectAdminPage.PROJECT_NAME_INPUT, ProjectAdminPage.SAVE_BUTTON]
        assert mock_page.waits == [2000, 5000]

    @pytest.mark.asyncio
    async def test_project_name_editing_without_confirmation(self, admin_page, mock_page):
        mock_page.hide_selector(ProjectAdminPage.SUCCESS_MESSAGE)

        assert await admin_page.test_project_name_editing("Renamed project") is False
        assert mock_page.waits == [2000]

    @pytest.mark.asyncio
    async def test_success_message_disappears(self, admin_page, mock_page):
        mock_page.hide_selector(ProjectAdminPage.SUCCESS_MESSAGE)

        await admin_page.wait_for_success_message_to_disappear()
