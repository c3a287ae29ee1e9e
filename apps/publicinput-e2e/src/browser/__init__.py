"""
@PURPOSE: Browser lifecycle for the live scenarios
@OUTLINE:
  - BrowserManager: launch, context options, tracing, video, ordered shutdown
  - plan_artifacts / finish_test: per-test screenshot, trace and video retention
@DEPENDENCIES:
  - Internal: .browser_manager, .artifact_policy
"""

from .artifact_policy import ArtifactPlan, finish_test, plan_artifacts
from .browser_manager import BrowserManager

__all__ = ["ArtifactPlan", "BrowserManager", "finish_test", "plan_artifacts"]
