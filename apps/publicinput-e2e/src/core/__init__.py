"""Core: errors, roles, environment access and secret resolution."""

from .errors import (
    ConfigurationError,
    LoginFailedError,
    LoginRetryExhaustedError,
    MissingEnvironmentVariableError,
    PageAssertionError,
    PublicInputTestError,
    SecretNotFoundError,
    StorageError,
    StorageNotConfiguredError,
    UnknownTabError,
)
from .user_type import UserType

__all__ = [
    "ConfigurationError",
    "LoginFailedError",
    "LoginRetryExhaustedError",
    "MissingEnvironmentVariableError",
    "PageAssertionError",
    "PublicInputTestError",
    "SecretNotFoundError",
    "StorageError",
    "StorageNotConfiguredError",
    "UnknownTabError",
    "UserType",
]
