"""
@PURPOSE: Test-suite configuration, built on pydantic-settings, with per-environment YAML files and flat env overrides
@OUTLINE:
  - class CityzenSettings: target application settings
  - class BrowserConfig: browser launch/context settings
  - class ScreenshotBehavior: when to capture screenshots
  - class RunSettings: test-run settings (screenshots, retries, workers, timeouts)
  - class UserAccountSecretMap: email -> secret key map
  - class AzureBlobStorageConfig: artifact storage settings
  - class LoggingConfig: loguru sinks
  - class RetryPolicy: login/click retry bounds
  - class AppSettings: root settings object
  - def load_environment_config(): load config/environments/{env}.yaml (aliases supported)
  - def create_settings(): build AppSettings for an environment
  - class ConfigurationManager: process-wide configuration access
  - def get_configuration_manager() / reset_configuration_manager(): singleton accessors
@GOTCHAS:
  - Precedence: flat env overrides (BASE_URL, BROWSER, ...) > YAML > defaults
  - Passwords never live here, only the secret key names (see SecretManager)
  - .env.{ENV} is loaded without overriding variables already set in the process
@DEPENDENCIES:
  - External: pydantic, pydantic_settings, pyyaml, python-dotenv, loguru
@RELATED: src/core/env_config.py, src/core/secret_manager.py
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENVIRONMENT = "dev"
ENVIRONMENTS_DIR = Path(__file__).parent / "environments"

DEFAULT_SECRET_KEYS: Dict[str, str] = {
    "admin_test@publicinput.org": "TestAdminPassword",
    "dataviewer_test@publicinput.org": "TestDataViewerPassword",
    "editor_test@publicinput.org": "TestEditorPassword",
    "none_test@publicinput.org": "TestNonePassword",
    "publisher_test@publicinput.org": "TestPublisherPassword",
    "superadmintest@publicinput.com": "TestSuperAdminPassword",
}


# ========== Sections ==========

class CityzenSettings(BaseModel):
    """Target application settings.

    Attributes:
        base_url: Root URL of the PublicInput deployment under test
    """
    base_url: str = Field(default="https://publicinput.com", description="Application base URL")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class BrowserConfig(BaseModel):
    """Browser configuration.

    Attributes:
        browser: Engine name (chromium / firefox / webkit)
        headless: Headless mode
        timeout: Overall default timeout (ms)
        viewport: Viewport size
        slow_mo: Slow motion delay (ms)
        device: Playwright device descriptor name, e.g. "Pixel 5"
        action_timeout: Default timeout for element actions (ms)
        navigation_timeout: Default timeout for navigations (ms)
        trace: Trace recording mode
        video: Video recording mode
    """
    browser: Literal["chromium", "firefox", "webkit"] = Field(default="chromium", description="Browser engine")
    headless: bool = Field(default=True, description="Headless mode")
    timeout: int = Field(default=60000, gt=0, description="Default timeout (ms)")
    viewport: Dict[str, int] = Field(
        default={"width": 1920, "height": 1080},
        description="Viewport size"
    )
    slow_mo: Optional[int] = Field(default=None, ge=0, description="Slow motion (ms)")
    device: Optional[str] = Field(default=None, description="Device emulation profile")
    action_timeout: int = Field(default=10000, gt=0, description="Action timeout (ms)")
    navigation_timeout: int = Field(default=30000, gt=0, description="Navigation timeout (ms)")
    trace: Literal["off", "on", "retain-on-failure", "on-first-retry"] = Field(
        default="on-first-retry", description="Trace mode"
    )
    video: Literal["off", "on", "retain-on-failure"] = Field(
        default="retain-on-failure", description="Video mode"
    )

    @field_validator("browser", mode="before")
    @classmethod
    def normalize_browser(cls, v: Any) -> Any:
        # CI passes "Chromium" / "Firefox" / "Webkit"
        return v.strip().lower() if isinstance(v, str) else v


class ScreenshotBehavior(str, Enum):
    """When the suite captures screenshots."""
    ALWAYS = "Always"
    ONLY_ON_FAILURES = "OnlyOnFailures"
    NEVER = "Never"


class RunSettings(BaseModel):
    """Test-run settings.

    Attributes:
        screenshot_behavior: Always / OnlyOnFailures / Never
        screenshot_container: Blob container prefix for uploaded artifacts
        retries: Reruns per failed test (consumed by the runner plugin, if installed)
        parallel: Whether the runner may parallelize
        workers: Worker count for parallel runs
        test_timeout: Per-test timeout (ms)
        expect_timeout: Default timeout for expect() assertions (ms)
        results_dir: Output directory for screenshots, traces, videos and logs
    """
    screenshot_behavior: ScreenshotBehavior = Field(
        default=ScreenshotBehavior.ONLY_ON_FAILURES, description="Screenshot behavior"
    )
    screenshot_container: str = Field(
        default="publicinput-acceptance-tests", description="Screenshot container"
    )
    retries: int = Field(default=2, ge=0, description="Retries")
    parallel: bool = Field(default=True, description="Parallel execution")
    workers: int = Field(default=4, ge=1, description="Worker count")
    test_timeout: int = Field(default=70000, gt=0, description="Per-test timeout (ms)")
    expect_timeout: int = Field(default=5000, gt=0, description="expect() timeout (ms)")
    results_dir: str = Field(default="test-results", description="Results directory")


class UserAccountSecretMap(BaseModel):
    """Maps account emails to the env-var name holding the password."""
    secret_keys: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SECRET_KEYS),
        description="email -> secret key"
    )


class AzureBlobStorageConfig(BaseModel):
    """Artifact storage settings.

    Attributes:
        should_generate_sas_uri: Whether SAS URIs may be generated
        sas_expiry_hours: SAS validity (hours)
        connection_string: Storage account connection string
    """
    should_generate_sas_uri: bool = Field(default=True, description="Generate SAS URIs")
    sas_expiry_hours: int = Field(default=336, gt=0, description="SAS expiry (hours)")
    connection_string: str = Field(default="", description="Connection string")


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level
        format: detailed / simple / json
        output: Sinks (console, file)
        file_path: Log file path
        rotation: Rotation size
        retention: Retention period
    """
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="detailed", description="Log format")
    output: List[str] = Field(default=["console"], description="Sinks")
    file_path: str = Field(default="test-results/logs/e2e.log", description="Log file")
    rotation: str = Field(default="10 MB", description="Rotation")
    retention: str = Field(default="7 days", description="Retention")


class RetryPolicy(BaseModel):
    """Retry bounds for login and clicks."""
    login_max_attempts: int = Field(default=2, ge=1, description="Login attempts")
    login_retry_delay: float = Field(default=2.0, ge=0, description="Delay between login attempts (s)")
    click_retries: int = Field(default=3, ge=1, description="Click attempts")
    click_retry_delay: float = Field(default=1.0, ge=0, description="Delay between click attempts (s)")


# ========== Root ==========

class AppSettings(BaseSettings):
    """Root settings object.

    Nested values can be set with the ``__`` delimiter, e.g.
    ``BROWSER_SETTINGS__SLOW_MO=250``. The flat names used by CI
    (``BROWSER``, ``HEADLESS``, ...) are applied by ConfigurationManager.

    Examples:
        >>> settings = create_settings("dev")
        >>> settings.browser_settings.browser
        'chromium'
    """

    environment: str = Field(default=DEFAULT_ENVIRONMENT, description="Environment name")

    cityzen_settings: CityzenSettings = Field(default_factory=CityzenSettings)
    browser_settings: BrowserConfig = Field(default_factory=BrowserConfig)
    test_settings: RunSettings = Field(default_factory=RunSettings)
    user_account_secret_map: UserAccountSecretMap = Field(default_factory=UserAccountSecretMap)
    azure_blob_storage: AzureBlobStorageConfig = Field(default_factory=AzureBlobStorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("environment must not be empty")
        return v.strip()

    def get_results_path(self, *parts: str) -> Path:
        """Resolve a path under the results directory."""
        return Path(self.test_settings.results_dir, *parts)

    def to_dict(self) -> Dict[str, Any]:
        """Dump to a dict with secrets masked."""
        data = self.model_dump(mode="json")
        if data["azure_blob_storage"].get("connection_string"):
            data["azure_blob_storage"]["connection_string"] = "***"
        return data


# ========== Loading ==========

def load_environment_config(env: str = DEFAULT_ENVIRONMENT, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load a YAML environment file, following alias references.

    A file whose content is a bare string (e.g. ``dev``) points at another
    environment file in the same directory.

    Raises:
        FileNotFoundError: The file (or an alias target) does not exist
        ValueError: Circular or empty alias
        TypeError: Content is neither a mapping nor an alias string
    """

    config_dir = config_dir or ENVIRONMENTS_DIR
    target_file = config_dir / f"{env}.yaml"

    def _load(file_path: Path, seen: set[Path]) -> Dict[str, Any]:
        if file_path in seen:
            raise ValueError(f"Circular environment alias detected: {file_path}")
        seen.add(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Environment config file not found: {file_path}")

        with file_path.open("r", encoding="utf-8") as handle:
            content = yaml.safe_load(handle)

        if content is None:
            return {}

        if isinstance(content, str):
            alias = content.strip()
            if not alias:
                raise ValueError(f"Environment alias must not be empty: {file_path}")

            if alias.endswith((".yaml", ".yml")):
                alias_file = file_path.parent / alias
            else:
                alias_file = file_path.parent / f"{alias}.yaml"

            return _load(alias_file, seen)

        if not isinstance(content, dict):
            raise TypeError(
                f"Environment config {file_path} must be a mapping or alias string, got: {type(content).__name__}",
            )

        return content

    return _load(target_file, set())


def create_settings(env: Optional[str] = None, yaml_config: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Build settings for an environment.

    Args:
        env: Environment name, defaults to $ENV or "dev"
        yaml_config: Pre-loaded YAML content; loaded from disk when None

    Returns:
        AppSettings instance
    """
    if env is None:
        env = os.getenv("ENV", DEFAULT_ENVIRONMENT)

    if yaml_config is None:
        yaml_config = load_environment_config(env)

    sections = {
        key: value for key, value in yaml_config.items()
        if key in AppSettings.model_fields and key != "environment"
    }
    return AppSettings(environment=env, **sections)


# ========== ConfigurationManager ==========

_FLAT_OVERRIDES = {
    "BASE_URL": ("cityzen_settings", "base_url"),
    "BROWSER": ("browser_settings", "browser"),
    "HEADLESS": ("browser_settings", "headless"),
    "TIMEOUT": ("browser_settings", "timeout"),
    "SLOW_MO": ("browser_settings", "slow_mo"),
    "BROWSER_DEVICE": ("browser_settings", "device"),
    "SCREENSHOT_BEHAVIOR": ("test_settings", "screenshot_behavior"),
    "SCREENSHOT_CONTAINER": ("test_settings", "screenshot_container"),
    "RETRIES": ("test_settings", "retries"),
    "WORKERS": ("test_settings", "workers"),
    "AZURE_STORAGE_CONNECTION_STRING": ("azure_blob_storage", "connection_string"),
}

_INT_OVERRIDES = {"TIMEOUT", "SLOW_MO", "RETRIES", "WORKERS"}

USER_SECRET_PREFIX = "USER_SECRET_"


class ConfigurationManager:
    """Process-wide access to the test configuration.

    Loads ``.env.{environment}`` from the working directory, then the YAML
    file for the environment, then applies flat environment overrides and
    ``USER_SECRET_<KEY>`` secret-map additions.

    Examples:
        >>> manager = ConfigurationManager("qa")
        >>> manager.get_base_url()
        'https://publicinput.com'
        >>> manager.get_setting("browser_settings.headless")
        True
    """

    def __init__(self, environment: Optional[str] = None, env_file_dir: Optional[Path] = None,
                 config_dir: Optional[Path] = None):
        self.environment = environment or os.getenv("ENV") or DEFAULT_ENVIRONMENT
        self.env_file_dir = Path(env_file_dir) if env_file_dir else Path.cwd()
        self.config_dir = config_dir or ENVIRONMENTS_DIR
        self._settings = self._load()

    def _load(self) -> AppSettings:
        env_file = self.env_file_dir / f".env.{self.environment}"
        if env_file.exists():
            load_dotenv(env_file, override=False)
            logger.debug(f"Loaded environment file: {env_file}")
        else:
            logger.warning(f"Environment file not found: {env_file}, using process environment only")

        try:
            yaml_config = load_environment_config(self.environment, self.config_dir)
        except FileNotFoundError:
            logger.warning(f"No YAML config for environment '{self.environment}', using defaults")
            yaml_config = {}

        data: Dict[str, Any] = {
            key: dict(value) for key, value in yaml_config.items()
            if key in AppSettings.model_fields and isinstance(value, dict)
        }

        for env_key, (section, field) in _FLAT_OVERRIDES.items():
            raw = os.getenv(env_key)
            if raw is None or raw == "":
                continue
            value: Any = raw
            if env_key == "HEADLESS":
                value = raw.strip().lower() == "true"
            elif env_key in _INT_OVERRIDES:
                value = int(raw)
            data.setdefault(section, {})[field] = value

        secret_section = data.setdefault("user_account_secret_map", {})
        secret_keys = dict(DEFAULT_SECRET_KEYS)
        secret_keys.update(secret_section.get("secret_keys") or {})
        for key, value in os.environ.items():
            if key.startswith(USER_SECRET_PREFIX) and len(key) > len(USER_SECRET_PREFIX):
                secret_keys[key[len(USER_SECRET_PREFIX):]] = value
        secret_section["secret_keys"] = secret_keys

        settings = create_settings(self.environment, data)
        logger.info(
            f"Configuration loaded: env={self.environment}, "
            f"base_url={settings.cityzen_settings.base_url}, "
            f"browser={settings.browser_settings.browser}"
        )
        return settings

    def reload(self) -> AppSettings:
        """Re-read .env, YAML and environment overrides."""
        self._settings = self._load()
        return self._settings

    def get_settings(self) -> AppSettings:
        return self._settings

    def get_setting(self, key: str) -> Any:
        """Look up a dotted key, e.g. ``browser_settings.timeout``.

        Returns None when any segment is missing.
        """
        current: Any = self._settings
        for part in key.split("."):
            if isinstance(current, BaseModel):
                if part not in type(current).model_fields:
                    return None
                current = getattr(current, part)
            elif isinstance(current, dict):
                if part not in current:
                    return None
                current = current[part]
            else:
                return None
        return current

    def get_environment(self) -> str:
        return self.environment

    def get_base_url(self) -> str:
        return self._settings.cityzen_settings.base_url

    def get_browser_settings(self) -> BrowserConfig:
        return self._settings.browser_settings

    def get_test_settings(self) -> RunSettings:
        return self._settings.test_settings

    def get_user_account_secret_map(self) -> Dict[str, str]:
        return self._settings.user_account_secret_map.secret_keys

    def get_azure_blob_storage_configuration(self) -> AzureBlobStorageConfig:
        return self._settings.azure_blob_storage


_configuration_manager: Optional[ConfigurationManager] = None


def get_configuration_manager() -> ConfigurationManager:
    """Return the process-wide ConfigurationManager, creating it on first use."""
    global _configuration_manager
    if _configuration_manager is None:
        _configuration_manager = ConfigurationManager()
    return _configuration_manager


def reset_configuration_manager() -> None:
    """Drop the cached manager (tests, environment switches)."""
    global _configuration_manager
    _configuration_manager = None
