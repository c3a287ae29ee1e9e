"""
@PURPOSE: Login page object - sign-in form, validation messages and post-login detection
@OUTLINE:
  - class LoginPage(BasePage)
  - async def navigate_to_login_page(): open /Account/Login
  - async def login(): fill the form and wait for the dashboard or an error
  - async def is_admin_dashboard_loaded(): wait for the customer CivicHome URL
  - form helpers: enter_email(), enter_password(), clear_form(), verify_form_is_empty()
@GOTCHAS:
  - The general error and the empty-email error share the #email-input-error element
  - is_super_admin_page_displayed() only checks that the page answers title()
@DEPENDENCIES:
  - External: playwright, loguru
  - Internal: .base_page, src.core.errors
@RELATED: user_login_helpers.py
"""

import asyncio

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.core.errors import LoginFailedError, PageAssertionError
from src.utils.page_helpers import log_step

from .base_page import BasePage

LOGIN_PATH = "/Account/Login?ReturnUrl=%2Fhome"
DASHBOARD_URL_PATTERN = "**/dashboard"
LOGIN_WAIT_TIMEOUT_MS = 10000
TEXT_TIMEOUT_MS = 5000


class LoginPage(BasePage):
    """Sign-in page.

    Examples:
        >>> login_page = LoginPage(page)
        >>> await login_page.navigate_to_login_page()
        >>> await login_page.enter_email("admin_test@publicinput.org")
    """

    EMAIL_INPUT = 'input[name="UserName"]'
    PASSWORD_INPUT = 'input[name="Password"]'
    LOGIN_BUTTON = 'button:has-text("Sign In")'
    FORGOT_PASSWORD_LINK = 'a[class="forgot-password"]'
    ERROR_MESSAGE = "#email-input-error"
    ERROR_MESSAGE_EMPTY_EMAIL = "#email-input-error"
    ERROR_MESSAGE_PASSWORD = "#Password-error"
    SUCCESS_MESSAGE = '[data-testid="success-message"]'
    SIGN_UP_LINK = "a[href='/Account/Register/?promptAlerts=False&returnUrl=/home']"

    async def navigate_to_login_page(self) -> None:
        log_step("Navigating to login page")
        await self.navigate_to(f"{self.base_url}{LOGIN_PATH}")
        await self.wait_for_page_load()

    async def enter_email(self, email: str) -> None:
        log_step(f"Entering email: {email}")
        await self.page.locator(self.EMAIL_INPUT).fill(email)

    async def enter_password(self, password: str) -> None:
        log_step("Entering password")
        await self.page.locator(self.PASSWORD_INPUT).fill(password)

    async def click_login_button(self) -> None:
        log_step("Clicking login button")
        await self.page.locator(self.LOGIN_BUTTON).click()

    async def click_forgot_password(self) -> None:
        log_step("Clicking forgot password link")
        await self.click_element(self.FORGOT_PASSWORD_LINK)

    async def click_sign_up_link(self) -> None:
        log_step("Clicking sign up link")
        await self.click_element(self.SIGN_UP_LINK)

    async def login(self, email: str, password: str) -> None:
        """Fill the form, submit and wait for the dashboard.

        Raises:
            LoginFailedError: The form reported an error
            PlaywrightTimeoutError: No dashboard and no error message
        """
        log_step(f"Performing login for user: {email}")

        await self.enter_email(email)
        await self.enter_password(password)
        await self.click_login_button()

        try:
            await self.page.wait_for_url(DASHBOARD_URL_PATTERN, timeout=LOGIN_WAIT_TIMEOUT_MS)
            logger.success("✓ Login successful - redirected to dashboard")
        except PlaywrightTimeoutError:
            if await self.is_element_visible(self.ERROR_MESSAGE):
                error_text = await self.get_text(self.ERROR_MESSAGE)
                raise LoginFailedError(
                    message=f"Login failed: {error_text}",
                    detail=error_text,
                    current_url=self.page.url,
                ) from None
            raise

    async def get_error_message(self) -> str:
        if await self.is_element_visible(self.ERROR_MESSAGE):
            return await self.get_text(self.ERROR_MESSAGE)
        return ""

    async def get_success_message(self) -> str:
        if await self.is_element_visible(self.SUCCESS_MESSAGE):
            return await self.get_text(self.SUCCESS_MESSAGE)
        return ""

    async def is_error_message_visible(self) -> bool:
        return await self.is_element_visible(self.ERROR_MESSAGE)

    async def is_error_message_visible_empty_email(self) -> bool:
        return await self.is_element_visible(self.ERROR_MESSAGE_EMPTY_EMAIL)

    async def is_success_message_visible(self) -> bool:
        return await self.is_element_visible(self.SUCCESS_MESSAGE)

    async def verify_login_page_elements(self) -> None:
        log_step("Verifying login page elements")
        for selector in (
            self.EMAIL_INPUT,
            self.PASSWORD_INPUT,
            self.LOGIN_BUTTON,
            self.FORGOT_PASSWORD_LINK,
            self.SIGN_UP_LINK,
        ):
            await self.assert_element_visible(selector)

    async def verify_login_page_title(self) -> None:
        await self.assert_title_contains("Sign In")

    async def clear_form(self) -> None:
        log_step("Clearing login form")
        await self.page.fill(self.EMAIL_INPUT, "")
        await self.page.fill(self.PASSWORD_INPUT, "")

    async def verify_form_is_empty(self) -> None:
        email_value = await self.get_email_value()
        password_value = await self.get_password_value()
        if email_value or password_value:
            raise PageAssertionError(
                f"Expected empty login form, got email={email_value!r}, password set={bool(password_value)}"
            )

    async def get_email_value(self) -> str:
        return await self.page.input_value(self.EMAIL_INPUT)

    async def get_password_value(self) -> str:
        return await self.page.input_value(self.PASSWORD_INPUT)

    async def wait_for_login_completion(self) -> None:
        """Wait for the dashboard URL or the error message, whichever comes first."""
        tasks = [
            asyncio.ensure_future(self.page.wait_for_url(DASHBOARD_URL_PATTERN, timeout=LOGIN_WAIT_TIMEOUT_MS)),
            asyncio.ensure_future(self.wait_for_element(self.ERROR_MESSAGE, LOGIN_WAIT_TIMEOUT_MS)),
        ]
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        # The first finisher decides; its error propagates
        next(iter(done)).result()

    async def is_super_admin_page_displayed(self) -> bool:
        try:
            await self.page.title()
            return True
        except PlaywrightError:
            return False

    async def is_text_visible(self, text: str) -> bool:
        try:
            await self.page.wait_for_selector(f"text={text}", timeout=TEXT_TIMEOUT_MS)
            return True
        except PlaywrightError:
            return False

    async def is_admin_dashboard_loaded(self, customer_id: str) -> bool:
        try:
            await self.page.wait_for_url(
                f"{self.base_url}/Customer/CivicHome/{customer_id}",
                timeout=LOGIN_WAIT_TIMEOUT_MS,
            )
            return True
        except PlaywrightError:
            return False
