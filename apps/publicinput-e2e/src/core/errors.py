"""
@PURPOSE: Exception hierarchy for the PublicInput e2e suite
@OUTLINE:
  - PublicInputTestError: base class
  - ConfigurationError / MissingEnvironmentVariableError: configuration problems
  - SecretNotFoundError: no secret key mapped for an email
  - LoginFailedError / LoginRetryExhaustedError: login orchestration failures
  - UnknownTabError: unsupported Project Admin tab name
  - PageAssertionError: failed page-level assertion
  - StorageError / StorageNotConfiguredError: artifact storage failures
@DEPENDENCIES:
  - External: none
"""

from __future__ import annotations


class PublicInputTestError(Exception):
    """Base class for all suite errors."""


class ConfigurationError(PublicInputTestError):
    """Invalid or incomplete configuration."""


class MissingEnvironmentVariableError(ConfigurationError):
    """A required environment variable is not set."""

    def __init__(self, key: str, environment: str) -> None:
        self.key = key
        self.environment = environment
        self.message = f"Required environment variable {key} is not set for environment: {environment}"
        super().__init__(self.message)


class SecretNotFoundError(PublicInputTestError):
    """No secret key is mapped for the given email."""

    def __init__(self, email: str) -> None:
        self.email = email
        self.message = f"No secret key found for email: {email}"
        super().__init__(self.message)


class LoginFailedError(PublicInputTestError):
    """Raised when a login attempt does not reach the expected destination.

    Carries the user type and the URL the browser ended on, so failures in CI
    logs point at the right account and page.
    """

    def __init__(
        self,
        user_type: str | None = None,
        detail: str | None = None,
        current_url: str | None = None,
        message: str | None = None,
    ) -> None:
        self.user_type = user_type
        self.detail = detail
        self.current_url = current_url
        if message is None:
            prefix = f"{user_type} login failed" if user_type else "Login failed"
            message = f"{prefix}: {detail}" if detail else prefix
            if current_url:
                message = f"{message} (url: {current_url})"
        self.message = message
        super().__init__(self.message)


class LoginRetryExhaustedError(LoginFailedError):
    """All login attempts failed."""

    def __init__(self, user_type: str, attempts: int, last_error: BaseException | None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            user_type=user_type,
            detail=str(last_error) if last_error else None,
            message=f"{user_type} login failed after {attempts} attempts. Last error: {last_error}",
        )


class UnknownTabError(PublicInputTestError, ValueError):
    """Unsupported Project Admin tab name."""

    def __init__(self, tab_name: str) -> None:
        self.tab_name = tab_name
        self.message = f"Unknown tab name: {tab_name}"
        super().__init__(self.message)


class PageAssertionError(PublicInputTestError, AssertionError):
    """A page-level assertion failed."""


class StorageError(PublicInputTestError):
    """Artifact storage operation failed."""


class StorageNotConfiguredError(StorageError):
    """Storage client is not configured (no connection string)."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Azure Blob Storage is not configured, cannot {operation}")
