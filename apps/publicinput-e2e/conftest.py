"""
@PURPOSE: Pytest configuration - import path, markers, shared fixtures
@OUTLINE:
  - pytest_configure(): register markers
  - Mock fixtures: mock_page, mock_browser_manager
  - Config fixtures: clean_environment (autouse), config_manager
  - pytest_runtest_makereport(): expose per-phase reports as item.rep_<phase>
@DEPENDENCIES:
  - External: pytest, pytest-asyncio
  - Internal: tests.mocks, config.settings, src.core
"""

import sys
from pathlib import Path

import pytest

# Make src/, config/ and tests.mocks importable without installing
app_root = Path(__file__).parent
if str(app_root) not in sys.path:
    sys.path.insert(0, str(app_root))

from config.settings import ConfigurationManager, reset_configuration_manager
from src.core.env_config import reset_env_config
from src.core.secret_manager import reset_secret_manager
from tests.mocks import MockBrowserManager, MockPage

# Variables that change configuration; unit tests start without them
CONFIG_ENV_VARS = (
    "ENV",
    "BASE_URL",
    "BROWSER",
    "HEADLESS",
    "TIMEOUT",
    "SLOW_MO",
    "BROWSER_DEVICE",
    "SCREENSHOT_BEHAVIOR",
    "SCREENSHOT_CONTAINER",
    "RETRIES",
    "WORKERS",
    "AZURE_STORAGE_CONNECTION_STRING",
)


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: live browser scenarios against a deployed environment")
    config.addinivalue_line("markers", "slow: long running tests")


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Attach each phase's report to the item so fixtures can see failures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ============================================================
# Environment isolation
# ============================================================


@pytest.fixture(autouse=True)
def clean_environment(request, monkeypatch):
    """Reset process-wide singletons; unit tests also drop configuration variables."""
    if "integration" not in request.keywords:
        for key in CONFIG_ENV_VARS:
            monkeypatch.delenv(key, raising=False)

    reset_configuration_manager()
    reset_env_config()
    reset_secret_manager()
    yield
    reset_configuration_manager()
    reset_env_config()
    reset_secret_manager()


@pytest.fixture
def config_manager(tmp_path) -> ConfigurationManager:
    """ConfigurationManager for "dev" that reads .env files from an empty temp dir."""
    return ConfigurationManager("dev", env_file_dir=tmp_path)


# ============================================================
# Mock Fixtures
# ============================================================


@pytest.fixture
def mock_page() -> MockPage:
    return MockPage()


@pytest.fixture
def mock_browser_manager(config_manager) -> MockBrowserManager:
    return MockBrowserManager(config_manager, video=True)
