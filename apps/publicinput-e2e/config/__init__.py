"""
@PURPOSE: Configuration package, exposes the settings models and the ConfigurationManager singleton
@OUTLINE:
  - AppSettings: root settings model
  - ConfigurationManager / get_configuration_manager(): process-wide access
@DEPENDENCIES:
  - Internal: .settings
"""

from .settings import (
    AppSettings,
    ConfigurationManager,
    ScreenshotBehavior,
    create_settings,
    get_configuration_manager,
    load_environment_config,
    reset_configuration_manager,
)

__all__ = [
    "AppSettings",
    "ConfigurationManager",
    "ScreenshotBehavior",
    "create_settings",
    "get_configuration_manager",
    "load_environment_config",
    "reset_configuration_manager",
]
