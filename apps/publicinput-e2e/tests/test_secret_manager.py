"""
@PURPOSE: Tests for src/core/secret_manager.py - password resolution through secret keys
@OUTLINE:
  - TestRetrievePassword: lookup order, caching, missing mapping
  - TestSecretMapMaintenance: add/remove/info
@DEPENDENCIES:
  - External: pytest
  - Internal: src.core.secret_manager, src.core.errors
"""

import pytest

from src.core.errors import SecretNotFoundError
from src.core.secret_manager import SecretManager, email_password_key, get_secret_manager

ADMIN_EMAIL = "admin_test@publicinput.org"


@pytest.fixture
def environ():
    return {}


@pytest.fixture
def secret_manager(config_manager, environ):
    return SecretManager(config_manager, environ=environ)


class TestRetrievePassword:
    """Lookup order and caching."""

    def test_password_from_secret_key_variable(self, secret_manager, environ):
        environ["TestAdminPassword"] = "admin-secret"

        assert secret_manager.retrieve_password(ADMIN_EMAIL) == "admin-secret"

    def test_password_from_email_variable(self, secret_manager, environ):
        environ["PASSWORD_ADMIN_TEST_PUBLICINPUT_ORG"] = "email-keyed"

        assert secret_manager.retrieve_password(ADMIN_EMAIL) == "email-keyed"

    def test_secret_key_variable_wins(self, secret_manager, environ):
        environ["TestAdminPassword"] = "by-key"
        environ["PASSWORD_ADMIN_TEST_PUBLICINPUT_ORG"] = "by-email"

        assert secret_manager.retrieve_password(ADMIN_EMAIL) == "by-key"

    def test_falls_back_to_secret_key(self, secret_manager):
        assert secret_manager.retrieve_password(ADMIN_EMAIL) == "TestAdminPassword"

    def test_unknown_email(self, secret_manager):
        with pytest.raises(SecretNotFoundError) as exc_info:
            secret_manager.retrieve_password("nobody@publicinput.org")

        assert exc_info.value.email == "nobody@publicinput.org"
        assert str(exc_info.value) == "No secret key found for email: nobody@publicinput.org"

    def test_result_is_cached(self, secret_manager, environ):
        environ["TestAdminPassword"] = "first"
        assert secret_manager.retrieve_password(ADMIN_EMAIL) == "first"

        environ["TestAdminPassword"] = "second"
        assert secret_manager.retrieve_password(ADMIN_EMAIL) == "first"

        secret_manager.clear_cache()
        assert secret_manager.retrieve_password(ADMIN_EMAIL) == "second"

    def test_email_password_key(self):
        assert email_password_key("superadmintest@publicinput.com") == "PASSWORD_SUPERADMINTEST_PUBLICINPUT_COM"


class TestSecretMapMaintenance:
    """Account list changes."""

    def test_available_accounts(self, secret_manager):
        accounts = secret_manager.get_available_accounts()

        assert len(accounts) == 6
        assert secret_manager.has_account(ADMIN_EMAIL)

    def test_add_account_is_visible_through_config(self, secret_manager, config_manager, environ):
        environ["TestNewPassword"] = "new-secret"

        secret_manager.add_account("new@publicinput.org", "TestNewPassword")

        assert config_manager.get_user_account_secret_map()["new@publicinput.org"] == "TestNewPassword"
        assert secret_manager.retrieve_password("new@publicinput.org") == "new-secret"

    def test_remove_account_drops_cache(self, secret_manager):
        secret_manager.retrieve_password(ADMIN_EMAIL)

        secret_manager.remove_account(ADMIN_EMAIL)

        assert not secret_manager.has_account(ADMIN_EMAIL)
        with pytest.raises(SecretNotFoundError):
            secret_manager.retrieve_password(ADMIN_EMAIL)

    def test_account_info(self, secret_manager, environ):
        environ["TestEditorPassword"] = "x"

        editor = secret_manager.get_account_info("editor_test@publicinput.org")
        admin = secret_manager.get_account_info(ADMIN_EMAIL)

        assert editor.secret_key == "TestEditorPassword"
        assert editor.has_password is True
        assert admin.has_password is False
        assert secret_manager.get_account_info("nobody@publicinput.org") is None

    def test_singleton_uses_process_configuration(self):
        manager = get_secret_manager()

        assert manager is get_secret_manager()
        assert manager.has_account(ADMIN_EMAIL)
