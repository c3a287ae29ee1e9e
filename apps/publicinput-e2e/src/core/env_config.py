"""
@PURPOSE: Raw environment-variable access for the suite (.env.{ENV} overlaid by the process environment)
@OUTLINE:
  - class EnvironmentConfig: typed getters for BASE_URL, TIMEOUT, HEADLESS and per-role emails
  - def get_env_config() / reset_env_config(): singleton accessors
@GOTCHAS:
  - Values already present in os.environ win over the .env file
  - get_base_url() falls back to the ConfigurationManager base URL when BASE_URL is unset
@DEPENDENCIES:
  - External: python-dotenv, loguru
  - Internal: src.core.errors, src.core.user_type, config.settings
"""

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values
from loguru import logger

from config.settings import get_configuration_manager
from src.core.errors import MissingEnvironmentVariableError
from src.core.user_type import UserType

DEFAULT_TIMEOUT_MS = 30000

DEFAULT_USER_EMAILS: Dict[UserType, str] = {
    UserType.SUPER_ADMIN: "superadmintest@publicinput.com",
    UserType.ADMIN: "admin_test@publicinput.org",
    UserType.DATA_VIEWER: "dataviewer_test@publicinput.org",
    UserType.EDITOR: "editor_test@publicinput.org",
    UserType.NONE: "none_test@publicinput.org",
    UserType.PUBLISHER: "publisher_test@publicinput.org",
}

EMAIL_ENV_KEYS: Dict[UserType, str] = {
    UserType.SUPER_ADMIN: "SUPER_ADMIN_EMAIL",
    UserType.ADMIN: "ADMIN_EMAIL",
    UserType.DATA_VIEWER: "DATA_VIEWER_EMAIL",
    UserType.EDITOR: "EDITOR_EMAIL",
    UserType.NONE: "NONE_EMAIL",
    UserType.PUBLISHER: "PUBLISHER_EMAIL",
}


class EnvironmentConfig:
    """Environment variables for the current ENV.

    Examples:
        >>> config = EnvironmentConfig(environ={"ENV": "qa", "TIMEOUT": "45000"})
        >>> config.get_timeout()
        45000
        >>> config.get_admin_email()
        'admin_test@publicinput.org'
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None, env_file_dir: Optional[Path] = None):
        source = os.environ if environ is None else environ
        self.env = source.get("ENV") or "dev"
        self._values: Dict[str, Optional[str]] = {}

        env_file = (Path(env_file_dir) if env_file_dir else Path.cwd()) / f".env.{self.env}"
        if env_file.exists():
            self._values.update(dotenv_values(env_file))
            logger.debug(f"Loaded environment configuration from: {env_file.name}")
        else:
            logger.warning(f"Could not load {env_file.name}, using system environment variables")

        self._values.update(source)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._values.get(key)
        return default if value is None else value

    def get_required(self, key: str) -> str:
        """Return a variable or raise MissingEnvironmentVariableError if unset/empty."""
        value = self.get(key)
        if not value:
            raise MissingEnvironmentVariableError(key, self.env)
        return value

    def get_base_url(self) -> str:
        base_url = self.get("BASE_URL")
        if base_url:
            return base_url.rstrip("/")
        return get_configuration_manager().get_base_url()

    def get_timeout(self) -> int:
        return int(self.get("TIMEOUT") or DEFAULT_TIMEOUT_MS)

    def is_headless(self) -> bool:
        return (self.get("HEADLESS") or "").lower() == "true"

    def get_current_environment(self) -> str:
        return self.env

    def get_api_base_url(self) -> str:
        return self.get_required("API_BASE_URL")

    # ========== User emails ==========

    def get_user_email(self, user_type: UserType) -> str:
        user_type = UserType(user_type)
        return self.get(EMAIL_ENV_KEYS[user_type]) or DEFAULT_USER_EMAILS[user_type]

    def get_super_admin_email(self) -> str:
        return self.get_user_email(UserType.SUPER_ADMIN)

    def get_admin_email(self) -> str:
        return self.get_user_email(UserType.ADMIN)

    def get_data_viewer_email(self) -> str:
        return self.get_user_email(UserType.DATA_VIEWER)

    def get_editor_email(self) -> str:
        return self.get_user_email(UserType.EDITOR)

    def get_none_email(self) -> str:
        return self.get_user_email(UserType.NONE)

    def get_publisher_email(self) -> str:
        return self.get_user_email(UserType.PUBLISHER)

    def get_user_emails(self) -> Dict[UserType, str]:
        """Email per role, keyed by UserType."""
        return {user_type: self.get_user_email(user_type) for user_type in UserType}


_env_config: Optional[EnvironmentConfig] = None


def get_env_config() -> EnvironmentConfig:
    global _env_config
    if _env_config is None:
        _env_config = EnvironmentConfig()
    return _env_config


def reset_env_config() -> None:
    global _env_config
    _env_config = None
