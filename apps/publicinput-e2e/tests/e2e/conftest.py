"""
@PURPOSE: Live scenario fixtures - run setup/teardown, one browser per test, page objects
@OUTLINE:
  - pytest_collection_modifyitems(): mark scenarios integration, skip unless RUN_E2E
  - e2e_run (session, autouse): logging, results directories, run summary, artifact upload
  - browser_manager / page: one started browser per test, artifacts kept per src.browser.artifact_policy
  - Page-object fixtures: login_page, login_helpers, profile_page, crm_page, projects_page,
    segmentation_page, project_admin_page
@GOTCHAS:
  - Scenarios hit a deployed environment; set RUN_E2E=1 (or use `publicinput-e2e run`)
  - Failure detection relies on item.rep_call from the root conftest's makereport hook
  - UPLOAD_ARTIFACTS=1 pushes the results directory to Azure at the end of the session
@DEPENDENCIES:
  - External: pytest, pytest-asyncio, loguru
  - Internal: src.browser, src.pages, src.utils, src.services, config.settings
"""

import os
import time
from pathlib import Path

import pytest
from loguru import logger

from config.settings import get_configuration_manager
from src.browser.artifact_policy import finish_test
from src.browser.browser_manager import BrowserManager
from src.core.errors import StorageError
from src.pages.crm_page import CRMPage
from src.pages.login_page import LoginPage
from src.pages.profile_page import ProfilePage
from src.pages.project_admin_page import ProjectAdminPage
from src.pages.projects_page import ProjectsPage
from src.pages.segmentation_page import SegmentationPage
from src.services.storage_service import AzureBlobStorageService
from src.utils.logger_setup import log_section, setup_logger
from src.utils.user_login_helpers import UserLoginHelpers

E2E_DIR = Path(__file__).parent
TRUTHY = ("1", "true", "yes")


def _live_tests_enabled() -> bool:
    return os.getenv("RUN_E2E", "").strip().lower() in TRUTHY


def pytest_collection_modifyitems(config, items):
    skip_live = pytest.mark.skip(reason="live scenario, set RUN_E2E=1 to run against a deployed environment")
    enabled = _live_tests_enabled()

    for item in items:
        if E2E_DIR not in Path(str(item.fspath)).parents:
            continue
        item.add_marker(pytest.mark.integration)
        if not enabled:
            item.add_marker(skip_live)


# ============================================================
# Session
# ============================================================


@pytest.fixture(scope="session", autouse=True)
def e2e_run(request):
    """Prepare the results directories and report the run when it ends."""
    setup_logger()
    manager = get_configuration_manager()
    settings = manager.get_settings()

    log_section("PublicInput E2E run")
    logger.info(f"Environment: {manager.get_environment()}")
    logger.info(f"Base URL: {manager.get_base_url()}")
    logger.info(f"Browser: {settings.browser_settings.browser}")

    for directory in ("screenshots", "traces", "videos"):
        settings.get_results_path(directory).mkdir(parents=True, exist_ok=True)

    started = time.monotonic()
    yield settings

    session = request.session
    logger.info(
        f"Run finished in {time.monotonic() - started:.1f}s: "
        f"{session.testscollected} collected, {session.testsfailed} failed"
    )
    logger.info(f"Test results saved to: {settings.get_results_path()}")

    if os.getenv("UPLOAD_ARTIFACTS", "").strip().lower() in TRUTHY:
        try:
            uploaded = AzureBlobStorageService(manager).upload_test_artifacts(os.getenv("RUN_ID"))
            logger.info(f"Uploaded {len(uploaded)} artifacts")
        except StorageError as e:
            logger.error(f"Artifact upload failed: {e}")


# ============================================================
# Browser
# ============================================================


@pytest.fixture
async def browser_manager(request):
    """Started BrowserManager; screenshots, traces and videos are kept per the artifact policy."""
    manager = BrowserManager()
    await manager.start()
    yield manager

    report = getattr(request.node, "rep_call", None)
    failed = report is not None and report.failed
    await finish_test(manager, request.node.name, failed)


@pytest.fixture
async def page(browser_manager):
    return browser_manager.page


# ============================================================
# Page objects
# ============================================================


@pytest.fixture
def login_page(page) -> LoginPage:
    return LoginPage(page)


@pytest.fixture
def login_helpers(page) -> UserLoginHelpers:
    return UserLoginHelpers(page)


@pytest.fixture
def profile_page(page) -> ProfilePage:
    return ProfilePage(page)


@pytest.fixture
def crm_page(page) -> CRMPage:
    return CRMPage(page)


@pytest.fixture
def projects_page(page) -> ProjectsPage:
    return ProjectsPage(page)


@pytest.fixture
def segmentation_page(page) -> SegmentationPage:
    return SegmentationPage(page)


@pytest.fixture
def project_admin_page(page) -> ProjectAdminPage:
    return ProjectAdminPage(page)
