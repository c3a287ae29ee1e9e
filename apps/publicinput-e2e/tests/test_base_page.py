"""
@PURPOSE: Tests for src/pages/base_page.py - shared page-object behavior
@OUTLINE:
  - TestNavigation: goto, history, waits
  - TestElements: visibility, text, locator actions
  - TestAssertions: title/url assertions
  - TestRetryLogin: delegation to UserLoginHelpers
@DEPENDENCIES:
  - External: pytest, pytest-asyncio
  - Internal: src.pages.base_page, tests.mocks
"""

from unittest.mock import AsyncMock, patch

import pytest

from src.core.errors import PageAssertionError
from src.core.user_type import UserType
from src.pages.base_page import BasePage
from tests.mocks import MockLocator, MockPage


@pytest.fixture
def base_page(mock_page, config_manager) -> BasePage:
    return BasePage(mock_page, config_manager)


class TestNavigation:
    """Navigation helpers."""

    def test_base_url_from_configuration(self, base_page):
        assert base_page.base_url == "https://publicinput.com"

    @pytest.mark.asyncio
    async def test_navigate_to_base(self, base_page, mock_page):
        await base_page.navigate_to_base()

        assert mock_page.visited == ["https://publicinput.com"]
        assert base_page.get_current_url() == "https://publicinput.com"

    @pytest.mark.asyncio
    async def test_history_waits_for_load(self, base_page, mock_page):
        await base_page.reload()
        await base_page.go_back()
        await base_page.go_forward()

        assert mock_page.history == ["reload", "back", "forward"]
        assert mock_page.load_states.count("networkidle") == 3

    @pytest.mark.asyncio
    async def test_wait_for_seconds(self, base_page, mock_page):
        await base_page.wait_for_seconds(2)

        assert mock_page.waits == [2000]

    @pytest.mark.asyncio
    async def test_get_title(self, config_manager):
        page_object = BasePage(MockPage(title="Sign In"), config_manager)

        assert await page_object.get_title() == "Sign In"


class TestElements:
    """Element helpers."""

    @pytest.mark.asyncio
    async def test_is_element_visible(self, base_page, mock_page):
        mock_page.hide_selector("#missing")

        assert await base_page.is_element_visible("#present") is True
        assert await base_page.is_element_visible("#missing") is False

    @pytest.mark.asyncio
    async def test_get_text(self, base_page, mock_page):
        mock_page.set_mock_locator("#count", MockLocator(text="42"))

        assert await base_page.get_text("#count") == "42"

    @pytest.mark.asyncio
    async def test_get_text_empty_content(self, base_page, mock_page):
        locator = MockLocator()
        locator.text_content = AsyncMock(return_value=None)
        mock_page.set_mock_locator("#empty", locator)

        assert await base_page.get_text("#empty") == ""

    @pytest.mark.asyncio
    async def test_press_enter(self, base_page, mock_page):
        await base_page.press_enter("#search")

        assert mock_page.pressed == [("#search", "Enter")]

    @pytest.mark.asyncio
    async def test_locator_actions(self, base_page, mock_page):
        locator = MockLocator()
        mock_page.set_mock_locator("#field", locator)

        await base_page.scroll_into_view("#field")
        await base_page.hover_element("#field")
        await base_page.select_option("#field", "Parks")
        await base_page.check_checkbox("#field")

        assert locator.scrolled and locator.hovered
        assert locator.selected == ["Parks"]
        assert locator.checked is True

        await base_page.uncheck_checkbox("#field")
        assert locator.checked is False

    @pytest.mark.asyncio
    async def test_click_and_fill(self, base_page, mock_page):
        await base_page.fill_input("#name", "My project")
        await base_page.click_element("#save")

        assert await mock_page.input_value("#name") == "My project"
        assert mock_page.clicked == ["#save"]


class TestAssertions:
    """Title and URL assertions."""

    @pytest.mark.asyncio
    async def test_assert_title_contains(self, config_manager):
        page_object = BasePage(MockPage(title="PublicInput - Sign In"), config_manager)

        await page_object.assert_title_contains("Sign In")
        with pytest.raises(PageAssertionError):
            await page_object.assert_title_contains("Dashboard")

    @pytest.mark.asyncio
    async def test_assert_url_contains(self, config_manager):
        page_object = BasePage(MockPage(url="https://publicinput.com/SuperAdmin/Home"), config_manager)

        await page_object.assert_url_contains("/SuperAdmin/Home")
        with pytest.raises(AssertionError):
            await page_object.assert_url_contains("/Account/Login")


class TestRetryLogin:
    """retry_login() delegation."""

    @pytest.mark.asyncio
    async def test_delegates_to_login_helpers(self, base_page):
        with patch("src.utils.user_login_helpers.UserLoginHelpers.retry_login", new_callable=AsyncMock) as retry:
            await base_page.retry_login(UserType.ADMIN, customer_id="1087")

        retry.assert_awaited_once_with(UserType.ADMIN, customer_id="1087", max_attempts=None)
