"""
@PURPOSE: Account roles used by the login helpers and the e2e scenarios
@OUTLINE:
  - class UserType: role enum with display names
@DEPENDENCIES:
  - External: none
"""

from enum import Enum


class UserType(str, Enum):
    """Account role. Determines credentials and the expected post-login page."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    DATA_VIEWER = "DATA_VIEWER"
    EDITOR = "EDITOR"
    NONE = "NONE"
    PUBLISHER = "PUBLISHER"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    UserType.SUPER_ADMIN: "Super Admin",
    UserType.ADMIN: "Admin",
    UserType.DATA_VIEWER: "Data Viewer",
    UserType.EDITOR: "Editor",
    UserType.NONE: "None",
    UserType.PUBLISHER: "Publisher",
}
