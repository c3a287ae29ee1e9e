"""
@PURPOSE: Resolve test-account passwords through the email -> secret key indirection
@OUTLINE:
  - class AccountInfo: account summary without the password
  - class SecretManager: cached password lookup and secret-map maintenance
  - def get_secret_manager() / reset_secret_manager(): singleton accessors
@GOTCHAS:
  - Lookup order: cache > env[secret_key] > env[PASSWORD_<EMAIL>] > the secret key itself (warned)
  - The secret map is the ConfigurationManager's dict, so add/remove are visible process-wide
  - Cached values survive config reloads until clear_cache() is called
@DEPENDENCIES:
  - External: loguru
  - Internal: config.settings, src.core.errors
"""

import os
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from loguru import logger

from config.settings import ConfigurationManager, get_configuration_manager
from src.core.errors import SecretNotFoundError


@dataclass(frozen=True)
class AccountInfo:
    """Account summary (never carries the password)."""
    email: str
    secret_key: str
    has_password: bool


def email_password_key(email: str) -> str:
    """Env-var name for an email-keyed password.

    Examples:
        >>> email_password_key("admin_test@publicinput.org")
        'PASSWORD_ADMIN_TEST_PUBLICINPUT_ORG'
    """
    return "PASSWORD_" + re.sub(r"[^a-zA-Z0-9]", "_", email).upper()


class SecretManager:
    """Password lookup for the configured test accounts.

    Args:
        config_manager: Source of the secret-key map, defaults to the process-wide manager
        environ: Variable source, defaults to os.environ
    """

    def __init__(self, config_manager: Optional[ConfigurationManager] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self._config_manager = config_manager
        self._environ = environ
        self._cache: Dict[str, str] = {}

    @property
    def config_manager(self) -> ConfigurationManager:
        if self._config_manager is None:
            self._config_manager = get_configuration_manager()
        return self._config_manager

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def _secret_keys(self) -> Dict[str, str]:
        return self.config_manager.get_user_account_secret_map()

    def retrieve_password(self, email: str) -> str:
        """Return the password for an account.

        Raises:
            SecretNotFoundError: The email has no secret key mapping
        """
        if email in self._cache:
            return self._cache[email]

        secret_key = self._secret_keys().get(email)
        if not secret_key:
            raise SecretNotFoundError(email)

        env = self.environ
        if env.get(secret_key):
            password = env[secret_key]
        elif env.get(email_password_key(email)):
            password = env[email_password_key(email)]
        else:
            logger.warning(f"Using secret key as password for {email}, set {secret_key} in the environment")
            password = secret_key

        self._cache[email] = password
        return password

    def clear_cache(self) -> None:
        self._cache.clear()

    def get_available_accounts(self) -> List[str]:
        return list(self._secret_keys().keys())

    def has_account(self, email: str) -> bool:
        return email in self._secret_keys()

    def add_account(self, email: str, secret_key: str) -> None:
        self._secret_keys()[email] = secret_key
        logger.debug(f"Added account to secret map: {email} -> {secret_key}")

    def remove_account(self, email: str) -> None:
        self._secret_keys().pop(email, None)
        self._cache.pop(email, None)

    def get_account_info(self, email: str) -> Optional[AccountInfo]:
        secret_key = self._secret_keys().get(email)
        if not secret_key:
            return None
        env = self.environ
        has_password = secret_key in env or email_password_key(email) in env
        return AccountInfo(email=email, secret_key=secret_key, has_password=has_password)


_secret_manager: Optional[SecretManager] = None


def get_secret_manager() -> SecretManager:
    global _secret_manager
    if _secret_manager is None:
        _secret_manager = SecretManager()
    return _secret_manager


def reset_secret_manager() -> None:
    global _secret_manager
    _secret_manager = None
