"""
@PURPOSE: Logging setup - loguru sinks, rotation and context-aware formatting for test runs
@OUTLINE:
  - def setup_logger(): configure the global loguru logger from settings.logging
  - def get_logger_with_context(): logger bound to user_type/page/step context
  - def format_detailed(): console/file formatter with context
  - def format_json(): JSON-lines formatter for CI log ingestion
  - def format_simple(): terse formatter
  - def log_section() / log_dict(): convenience output helpers
@GOTCHAS:
  - Call setup_logger() once per process (conftest session start, CLI entry)
  - File sink paths are relative to the working directory, like test-results/
@DEPENDENCIES:
  - External: loguru
  - Internal: config.settings
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from config.settings import LoggingConfig, get_configuration_manager

CONTEXT_KEYS = ("user_type", "page", "step", "test")

_configured = False


# ========== Formatters ==========

def format_detailed(record: Dict[str, Any]) -> str:
    """Detailed formatter with bound context.

    Args:
        record: loguru record

    Returns:
        Format string
    """
    extra = record["extra"]
    context_parts = [f"{key}={extra[key]}" for key in CONTEXT_KEYS if extra.get(key)]
    context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

    # Braces in context values would be read as format fields
    context_str = context_str.replace("{", "{{").replace("}", "}}")

    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{context_str} - "
        "<level>{message}</level>\n"
        "{exception}"
    )


def format_json(record: Dict[str, Any]) -> str:
    """JSON-lines formatter.

    loguru treats the return value as a format string, so the serialized
    entry is stashed in extra and referenced by name.
    """
    log_entry = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
        "message": record["message"],
    }

    extra = record["extra"]
    context = {key: extra[key] for key in CONTEXT_KEYS if key in extra}
    if context:
        log_entry["context"] = context

    if record["exception"]:
        log_entry["exception"] = {
            "type": record["exception"].type.__name__,
            "value": str(record["exception"].value),
        }

    record["extra"]["_json"] = json.dumps(log_entry, ensure_ascii=False, default=str)
    return "{extra[_json]}\n"


def format_simple(record: Dict[str, Any]) -> str:
    return (
        "{time:HH:mm:ss} | "
        "{level: <8} | "
        "{message}\n"
    )


# ========== Setup ==========

def setup_logger(
    config: Optional[LoggingConfig] = None,
    force: bool = False
) -> None:
    """Configure the global logger.

    Args:
        config: Logging config, defaults to the active settings.logging
        force: Reconfigure even if already configured

    Examples:
        >>> from src.utils.logger_setup import setup_logger
        >>> setup_logger()
    """
    global _configured
    if _configured and not force:
        return

    if config is None:
        config = get_configuration_manager().get_settings().logging

    logger.remove()

    if config.format == "json":
        formatter = format_json
    elif config.format == "simple":
        formatter = format_simple
    else:
        formatter = format_detailed

    if "console" in config.output:
        logger.add(
            sys.stderr,
            format=formatter,
            level=config.level,
            colorize=config.format != "json",
            backtrace=True,
            diagnose=False,
        )

    if "file" in config.output:
        log_file = Path(config.file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_file),
            format=formatter,
            level=config.level,
            rotation=config.rotation,
            retention=config.retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
            encoding="utf-8",
        )

    _configured = True
    logger.info(f"Logging configured: level={config.level}, format={config.format}, output={config.output}")


def get_logger_with_context(**context) -> Any:
    """Return a logger bound to context.

    Examples:
        >>> log = get_logger_with_context(user_type="ADMIN", page="CRMPage")
        >>> log.info("Opening lists tab")
    """
    return logger.bind(**context)


# ========== Convenience ==========

def log_section(title: str, char: str = "=", width: int = 80):
    """Log a banner.

    Examples:
        >>> log_section("Global setup")
        ================================================================================
        Global setup
        ================================================================================
    """
    logger.info(char * width)
    logger.info(title)
    logger.info(char * width)


def log_dict(data: Dict[str, Any], title: Optional[str] = None):
    if title:
        logger.info(f"{title}:")

    for key, value in data.items():
        logger.info(f"  {key}: {value}")
