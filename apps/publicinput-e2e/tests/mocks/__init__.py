"""
@PURPOSE: Test mock module
@OUTLINE:
  - MockPage / MockLocator / MockMouse / MockVideo: Playwright stand-ins
  - MockBrowserManager: BrowserManager stand-in
@DEPENDENCIES:
  - External: unittest.mock
"""

from .browser_mock import MockBrowserManager, MockLocator, MockMouse, MockPage, MockVideo

__all__ = [
    "MockBrowserManager",
    "MockLocator",
    "MockMouse",
    "MockPage",
    "MockVideo",
]
