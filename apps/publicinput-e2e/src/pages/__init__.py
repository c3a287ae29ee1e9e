"""Page objects for the PublicInput application."""

from .base_page import BasePage
from .crm_page import CRMPage
from .login_page import LoginPage
from .profile_page import ProfilePage
from .project_admin_page import ProjectAdminPage
from .projects_page import ProjectsPage
from .segmentation_page import SegmentationPage

__all__ = [
    "BasePage",
    "CRMPage",
    "LoginPage",
    "ProfilePage",
    "ProjectAdminPage",
    "ProjectsPage",
    "SegmentationPage",
]
