"""
@PURPOSE: Tests for src/pages/profile_page.py - SASpeakUp profile and addresses
@DEPENDENCIES:
  - External: pytest, pytest-asyncio
  - Internal: src.pages.profile_page, tests.mocks
"""

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.pages.profile_page import ProfilePage
from tests.mocks import MockLocator

SAVED_ADDRESS = "115 Josh Ln, San Antonio, TX 78245, USA"


@pytest.fixture
def profile_page(mock_page, config_manager) -> ProfilePage:
    return ProfilePage(mock_page, config_manager)


class TestNavigation:
    @pytest.mark.asyncio
    async def test_navigate_to_sa_speak_up(self, profile_page, mock_page):
        await profile_page.navigate_to_sa_speak_up()

        assert mock_page.visited == ["https://publicinput.com/saspeakup"]

    @pytest.mark.asyncio
    async def test_profile_buttons(self, profile_page, mock_page):
        my_profile = MockLocator()
        view_edit = MockLocator()
        mock_page.set_mock_locator(ProfilePage.MY_PROFILE_BUTTON, my_profile)
        mock_page.set_mock_locator(ProfilePage.VIEW_EDIT_PROFILE_BUTTON, view_edit)

        assert await profile_page.is_my_profile_button_visible() is True
        await profile_page.click_on_my_profile_button()
        await profile_page.click_on_view_edit_profile_button()

        assert my_profile.clicks == 1
        assert view_edit.clicks == 1

    @pytest.mark.asyncio
    async def test_verify_profile_page_loaded(self, profile_page, mock_page):
        mock_page.hide_selector("text=Someone else")

        assert await profile_page.verify_profile_page_loaded("SASpeakUp profile for admin") is True
        assert await profile_page.verify_profile_page_loaded("Someone else") is False


class TestAddresses:
    @pytest.mark.asyncio
    async def test_enter_address_fills_and_saves(self, profile_page, mock_page):
        save = MockLocator()
        mock_page.set_mock_locator(ProfilePage.SAVE_BUTTON, save)

        await profile_page.enter_address("115 Josh Lane, San Antonio, TX")

        assert await mock_page.input_value(ProfilePage.ADDRESS_INPUT) == "115 Josh Lane, San Antonio, TX"
        assert save.clicks == 1

    def test_address_selector(self):
        assert ProfilePage.address_selector(SAVED_ADDRESS) == (
            f"xpath=(//span[contains(text(),'{SAVED_ADDRESS}')])[1]"
        )

    @pytest.mark.asyncio
    async def test_verify_address(self, profile_page, mock_page):
        assert await profile_page.verify_address(SAVED_ADDRESS) is True

        mock_page.hide_selector(ProfilePage.address_selector(SAVED_ADDRESS))
        assert await profile_page.verify_address(SAVED_ADDRESS) is False

    @pytest.mark.asyncio
    async def test_verify_address_is_deleted(self, profile_page, mock_page):
        assert await profile_page.verify_address_is_deleted(SAVED_ADDRESS) is False

        mock_page.hide_selector(ProfilePage.address_selector(SAVED_ADDRESS))
        assert await profile_page.verify_address_is_deleted(SAVED_ADDRESS) is True

    @pytest.mark.asyncio
    async def test_delete_address_walks_row_to_remove_button(self, profile_page, mock_page):
        row = MockLocator()
        remove = MockLocator()
        confirm = MockLocator()
        row.set_child(ProfilePage.REMOVE_ADDRESS_BUTTON, remove)
        mock_page.set_mock_locator(ProfilePage.ADDRESS_ROW, row)
        mock_page.set_mock_locator(ProfilePage.CONFIRM_DELETE_BUTTON, confirm)

        await profile_page.click_on_address_delete_button(SAVED_ADDRESS)

        assert remove.clicks == 1
        assert confirm.clicks == 1

    @pytest.mark.asyncio
    async def test_get_addresses(self, profile_page, mock_page):
        form = MockLocator()
        form.set_child(ProfilePage.ADDRESS_VALUE, MockLocator(texts=[SAVED_ADDRESS, "1 Main St"]))
        mock_page.set_mock_locator(ProfilePage.ADDRESS_EDITOR_FORM, form)

        assert await profile_page.get_addresses() == [SAVED_ADDRESS, "1 Main St"]
        assert await profile_page.get_address_count() == 2

    @pytest.mark.asyncio
    async def test_get_addresses_empty_on_timeout(self, profile_page, mock_page):
        mock_page.set_mock_locator(ProfilePage.ADDRESS_EDITOR_FORM, MockLocator(wait_error=True))

        assert await profile_page.get_addresses() == []

    @pytest.mark.asyncio
    async def test_wait_for_address_count(self, profile_page, mock_page):
        await profile_page.wait_for_address_count(1)

        mock_page.function_timeout = True
        with pytest.raises(PlaywrightTimeoutError):
            await profile_page.wait_for_address_count(3, timeout=100)

    @pytest.mark.asyncio
    async def test_clear_address_input(self, profile_page, mock_page):
        mock_page.set_input_value(ProfilePage.ADDRESS_INPUT, "old")

        await profile_page.clear_address_input()

        assert await profile_page.verify_address_input_is_empty() is True


class TestNotifications:
    @pytest.mark.asyncio
    async def test_notification_text(self, profile_page, mock_page):
        container = MockLocator()
        container.set_child(ProfilePage.NOTIFICATION_BOOTSTRAP, MockLocator(text="Address already exists"))
        mock_page.set_mock_locator(ProfilePage.NOTIFICATION_CONTAINER, container)

        assert await profile_page.get_notification_text() == "Address already exists"
        assert await profile_page.is_notification_visible() is True

    @pytest.mark.asyncio
    async def test_notification_missing(self, profile_page, mock_page):
        mock_page.set_mock_locator(ProfilePage.NOTIFICATION_CONTAINER, MockLocator(wait_error=True))
        mock_page.hide_selector(ProfilePage.NOTIFICATION_CONTAINER)

        assert await profile_page.get_notification_text() == ""
        assert await profile_page.is_notification_visible() is False
