"""Utilities: logging, retries, page helpers and login orchestration."""
