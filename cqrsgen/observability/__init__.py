"""Logging configuration."""

from .logging_config import LOG_FILE_ENV, LOG_LEVEL_ENV, resolve_level, setup_logging

__all__ = ["LOG_FILE_ENV", "LOG_LEVEL_ENV", "resolve_level", "setup_logging"]
