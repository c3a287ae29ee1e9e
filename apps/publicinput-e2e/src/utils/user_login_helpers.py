"""
@PURPOSE: Role-based login orchestration - resolve credentials, drive the login form, verify the landing page, retry
@OUTLINE:
  - class UserType: account roles (re-exported from src.core.user_type)
  - class UserCredentials: email/password/role triple
  - class UserLoginHelpers: per-role logins, login_as_user(), retry_login(), logout()
@GOTCHAS:
  - Every role login waits 5s after submitting before verifying
  - Super Admin must land on /SuperAdmin/Home; Admin on /Customer/CivicHome/<customer>
  - Other roles only need to leave /Account/Login without an error message
  - retry_login() is the single retry implementation; page objects delegate to it
@DEPENDENCIES:
  - External: playwright, loguru
  - Internal: src.pages.login_page, src.core.env_config, src.core.secret_manager, src.utils.retry_utils
@RELATED: login_page.py, secret_manager.py
"""

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from config.settings import ConfigurationManager, get_configuration_manager
from src.core.env_config import EnvironmentConfig, get_env_config
from src.core.errors import LoginFailedError, LoginRetryExhaustedError
from src.core.secret_manager import SecretManager, get_secret_manager
from src.core.user_type import UserType
from src.pages.login_page import LoginPage
from src.utils.page_helpers import log_step
from src.utils.retry_utils import retry_with_backoff

__all__ = ["UserType", "UserCredentials", "UserLoginHelpers"]

DEFAULT_CUSTOMER_ID = "1087"
POST_LOGIN_WAIT_MS = 5000
LOGOUT_WAIT_MS = 2000
SUPER_ADMIN_HOME_PATH = "/SuperAdmin/Home"
LOGIN_PATH_MARKER = "/Account/Login"
LOGOUT_SELECTOR = 'a[href*="logout"], button:has-text("Logout"), a:has-text("Sign Out")'


@dataclass(frozen=True)
class UserCredentials:
    email: str
    password: str = field(repr=False)
    user_type: UserType


class UserLoginHelpers:
    """Log in to the application as a given role.

    Args:
        page: Playwright page
        env_config: Source of role emails, defaults to the process-wide EnvironmentConfig
        secret_manager: Password resolver, defaults to the process-wide SecretManager
        config_manager: Source of base URL and retry policy

    Examples:
        >>> helpers = UserLoginHelpers(page)
        >>> await helpers.login_as_admin("1087")
        >>> await helpers.retry_login(UserType.SUPER_ADMIN)
    """

    def __init__(
        self,
        page: Page,
        env_config: Optional[EnvironmentConfig] = None,
        secret_manager: Optional[SecretManager] = None,
        config_manager: Optional[ConfigurationManager] = None,
    ):
        self.page = page
        self.env_config = env_config or get_env_config()
        self.secret_manager = secret_manager or get_secret_manager()
        self.config_manager = config_manager or get_configuration_manager()
        self.login_page = LoginPage(page, self.config_manager)

    def get_user_credentials(self, user_type: UserType) -> UserCredentials:
        user_type = UserType(user_type)
        email = self.env_config.get_user_emails().get(user_type)
        if not email:
            raise LoginFailedError(user_type.value, f"Email not found for user type: {user_type.value}")

        password = self.secret_manager.retrieve_password(email)
        return UserCredentials(email=email, password=password, user_type=user_type)

    async def perform_login(self, credentials: UserCredentials) -> None:
        log_step(f"Logging in as {credentials.user_type.value} with email: {credentials.email}")
        await self.login_page.navigate_to_login_page()
        await self.login_page.enter_email(credentials.email)
        await self.login_page.enter_password(credentials.password)
        await self.login_page.click_login_button()

    async def _login_and_wait(self, user_type: UserType) -> None:
        await self.perform_login(self.get_user_credentials(user_type))
        await self.page.wait_for_timeout(POST_LOGIN_WAIT_MS)

    # ========== Per-role logins ==========

    async def login_as_super_admin(self) -> None:
        await self._login_and_wait(UserType.SUPER_ADMIN)
        current_url = self.page.url
        if SUPER_ADMIN_HOME_PATH not in current_url:
            raise LoginFailedError(
                UserType.SUPER_ADMIN.value,
                f"expected {SUPER_ADMIN_HOME_PATH}",
                current_url,
            )
        logger.success(f"✓ {UserType.SUPER_ADMIN.display_name} logged in")

    async def login_as_admin(self, customer_id: str = DEFAULT_CUSTOMER_ID) -> None:
        await self._login_and_wait(UserType.ADMIN)
        if not await self.login_page.is_admin_dashboard_loaded(customer_id):
            raise LoginFailedError(
                UserType.ADMIN.value,
                f"dashboard for customer {customer_id} did not load",
                self.page.url,
            )
        logger.success(f"✓ {UserType.ADMIN.display_name} logged in (customer {customer_id})")

    async def login_as_data_viewer(self) -> None:
        await self._login_and_wait(UserType.DATA_VIEWER)
        await self.verify_login_success(UserType.DATA_VIEWER)

    async def login_as_editor(self) -> None:
        await self._login_and_wait(UserType.EDITOR)
        await self.verify_login_success(UserType.EDITOR)

    async def login_as_none(self) -> None:
        await self._login_and_wait(UserType.NONE)
        await self.verify_login_success(UserType.NONE)

    async def login_as_publisher(self) -> None:
        await self._login_and_wait(UserType.PUBLISHER)
        await self.verify_login_success(UserType.PUBLISHER)

    async def login_as_user(self, user_type: UserType, customer_id: Optional[str] = None) -> None:
        user_type = UserType(user_type)
        log_step(f"Logging in as {user_type.value}")

        if user_type is UserType.SUPER_ADMIN:
            await self.login_as_super_admin()
        elif user_type is UserType.ADMIN:
            await self.login_as_admin(customer_id or DEFAULT_CUSTOMER_ID)
        elif user_type is UserType.DATA_VIEWER:
            await self.login_as_data_viewer()
        elif user_type is UserType.EDITOR:
            await self.login_as_editor()
        elif user_type is UserType.NONE:
            await self.login_as_none()
        else:
            await self.login_as_publisher()

    async def verify_login_success(self, user_type: UserType) -> None:
        """Fail if the browser is still on the login page or shows a login error.

        Raises:
            LoginFailedError: Login did not complete
        """
        display_name = UserType(user_type).display_name
        current_url = self.page.url
        page_title = await self.page.title()

        log_step(f"Verifying {display_name} login success")
        logger.debug(f"Current URL: {current_url}, page title: {page_title}")

        if LOGIN_PATH_MARKER in current_url:
            raise LoginFailedError(display_name, "still on login page", current_url)

        if await self.login_page.is_error_message_visible():
            error_message = await self.login_page.get_error_message()
            raise LoginFailedError(display_name, f"login error: {error_message}", current_url)

        logger.success(f"✓ {display_name} logged in")

    # ========== Retry ==========

    async def retry_login(
        self,
        user_type: UserType,
        customer_id: Optional[str] = None,
        max_attempts: Optional[int] = None,
    ) -> None:
        """Log in with bounded retries.

        Args:
            user_type: Role to log in as
            customer_id: Customer dashboard expected for Admin logins
            max_attempts: Attempts before giving up, defaults to retry_policy.login_max_attempts

        Raises:
            LoginRetryExhaustedError: Every attempt failed
            ValueError: max_attempts is below 1
        """
        user_type = UserType(user_type)
        policy = self.config_manager.get_settings().retry_policy
        attempts = policy.login_max_attempts if max_attempts is None else max_attempts
        if attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {attempts}")

        try:
            await retry_with_backoff(
                lambda: self.login_as_user(user_type, customer_id),
                max_retries=attempts,
                initial_delay=policy.login_retry_delay,
                backoff_factor=1.0,
                operation_name=f"{user_type.value} login",
            )
        except Exception as e:
            raise LoginRetryExhaustedError(user_type.value, attempts, e) from e

    # ========== Misc ==========

    @staticmethod
    def get_all_user_types() -> List[UserType]:
        return list(UserType)

    @staticmethod
    def get_user_type_display_name(user_type: UserType) -> str:
        return UserType(user_type).display_name

    async def has_permission(self, permission: str) -> bool:
        # TODO: map permissions per role once the application exposes a role matrix
        return True

    async def logout(self) -> None:
        log_step("Logging out current user")
        try:
            await self.page.click(LOGOUT_SELECTOR)
            await self.page.wait_for_timeout(LOGOUT_WAIT_MS)
        except PlaywrightError:
            log_step("Logout button not found, navigating to login page")
            await self.login_page.navigate_to_login_page()
