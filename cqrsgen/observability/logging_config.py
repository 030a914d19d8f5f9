"""Logging setup for the command-line entry point.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
CLI configures the root logger once. Level precedence:
``--debug``/``--verbose``/``--quiet`` > ``CQRSGEN_LOG_LEVEL`` > WARNING.
Near-miss operations are logged at WARNING, so they show by default.
"""

import logging
import os
import sys

LOG_LEVEL_ENV = "CQRSGEN_LOG_LEVEL"
LOG_FILE_ENV = "CQRSGEN_LOG_FILE"

_FMT_MINIMAL = "%(levelname)s: %(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT = "%H:%M:%S"
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def resolve_level(verbose: bool = False, debug: bool = False, quiet: bool = False) -> str:
    """Pick the level name from CLI flags, falling back to the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file, written at DEBUG detail. Defaults to
            ``CQRSGEN_LOG_FILE`` when set.
    """
    numeric_level = _parse_level(level)
    log_file = log_file or os.environ.get(LOG_FILE_ENV)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    effective_level = numeric_level

    if log_file:
        effective_level = logging.DEBUG
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value, WARNING when unknown."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
