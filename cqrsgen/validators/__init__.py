"""Diagnostics for model modules."""

from .base import Severity, ValidationIssue, ValidationResult
from .operations import check_argument_types, check_near_misses
from .runner import check_model_files, run_validators

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_argument_types",
    "check_near_misses",
    "check_model_files",
    "run_validators",
]
