"""
@PURPOSE: Per-test artifact policy - which screenshot, trace and video a finished test keeps
@OUTLINE:
  - class ArtifactPlan: what to keep for one test
  - def plan_artifacts(): decide from the test outcome and settings
  - async def finish_test(): apply the plan and close the browser
@GOTCHAS:
  - Trace modes other than "on"/"off" ("retain-on-failure", "on-first-retry") keep the trace only on failure
  - Videos are written when the context closes, so discarding happens inside BrowserManager.close()
@DEPENDENCIES:
  - External: loguru
  - Internal: config.settings, src.utils.page_helpers
@RELATED: browser_manager.py, tests/e2e/conftest.py
"""

import re
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from config.settings import AppSettings, ScreenshotBehavior
from src.utils.page_helpers import capture_failure_screenshot, take_screenshot

SCREENSHOT_FAILURE = "failure"
SCREENSHOT_ALWAYS = "always"


def safe_test_name(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


@dataclass(frozen=True)
class ArtifactPlan:
    """Artifacts to keep for one test.

    Attributes:
        screenshot: SCREENSHOT_FAILURE, SCREENSHOT_ALWAYS or None
        trace_path: Where to save the trace, None to discard it
        keep_video: Whether the recorded video survives
    """
    screenshot: Optional[str]
    trace_path: Optional[str]
    keep_video: bool


def plan_artifacts(failed: bool, settings: AppSettings, test_name: str) -> ArtifactPlan:
    """Decide what a finished test keeps.

    Examples:
        >>> plan_artifacts(True, settings, "test_login[admin]").screenshot
        'failure'
    """
    behavior = settings.test_settings.screenshot_behavior
    if behavior is ScreenshotBehavior.NEVER:
        screenshot = None
    elif failed:
        screenshot = SCREENSHOT_FAILURE
    elif behavior is ScreenshotBehavior.ALWAYS:
        screenshot = SCREENSHOT_ALWAYS
    else:
        screenshot = None

    trace_mode = settings.browser_settings.trace
    trace_path = None
    if trace_mode == "on" or (failed and trace_mode != "off"):
        trace_path = str(settings.get_results_path("traces", f"{safe_test_name(test_name)}.zip"))

    video_mode = settings.browser_settings.video
    keep_video = video_mode == "on" or (video_mode == "retain-on-failure" and failed)

    return ArtifactPlan(screenshot=screenshot, trace_path=trace_path, keep_video=keep_video)


async def finish_test(manager, test_name: str, failed: bool) -> ArtifactPlan:
    """Capture the planned screenshot, then close the browser keeping the planned trace and video."""
    settings = manager.settings
    plan = plan_artifacts(failed, settings, test_name)
    results_dir = settings.test_settings.results_dir

    if plan.screenshot and manager.page is not None:
        try:
            if plan.screenshot == SCREENSHOT_FAILURE:
                await capture_failure_screenshot(manager.page, test_name, results_dir)
            else:
                await take_screenshot(manager.page, safe_test_name(test_name), results_dir)
        except Exception as e:
            logger.warning(f"Could not capture screenshot for {test_name}: {e}")

    await manager.close(save_trace=plan.trace_path, keep_video=plan.keep_video)
    return plan
