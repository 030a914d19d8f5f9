"""Diagnostics collected while checking model modules."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import CqrsGenError


class Severity(str, Enum):
    """Whether a diagnostic blocks generation."""

    ERROR = "error"  # generation would abort
    WARNING = "warning"  # generation succeeds, the API may be incomplete


@dataclass(frozen=True)
class ValidationIssue:
    """A diagnostic pinned to a module and, when known, an operation and line."""

    code: str
    message: str
    severity: Severity
    module: str | None = None
    operation: str | None = None
    line: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_error(cls, error: CqrsGenError, module: str | None = None) -> "ValidationIssue":
        """Turn an aborting generator error into an error diagnostic."""
        return cls(
            code=error.code,
            message=str(error),
            severity=Severity.ERROR,
            module=error.path or module,
            line=getattr(error, "lineno", None),
        )

    @property
    def position(self) -> str:
        """``line N, operation`` with whichever parts are known."""
        parts = []
        if self.line:
            parts.append(f"line {self.line}")
        if self.operation:
            parts.append(self.operation)
        return ", ".join(parts)


@dataclass
class ValidationResult:
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(i.severity is Severity.ERROR for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity is Severity.WARNING for i in self.issues)

    @property
    def is_valid(self) -> bool:
        """True if generation would succeed."""
        return not self.has_errors

    def failed(self, strict: bool = False) -> bool:
        """Whether a check run should exit non-zero; strict also fails on warnings."""
        return self.has_errors or (strict and self.has_warnings)

    def by_module(self) -> dict[str | None, list[ValidationIssue]]:
        """Issues grouped per module in first-seen order, errors first, then by line."""
        groups: dict[str | None, list[ValidationIssue]] = {}
        for issue in self.issues:
            groups.setdefault(issue.module, []).append(issue)
        for issues in groups.values():
            issues.sort(key=lambda i: (i.severity is not Severity.ERROR, i.line or 0))
        return groups

    def add_error(
        self,
        code: str,
        message: str,
        module: str | None = None,
        operation: str | None = None,
        line: int | None = None,
        **details: Any,
    ) -> None:
        self.issues.append(
            ValidationIssue(code, message, Severity.ERROR, module, operation, line, details)
        )

    def add_warning(
        self,
        code: str,
        message: str,
        module: str | None = None,
        operation: str | None = None,
        line: int | None = None,
        **details: Any,
    ) -> None:
        self.issues.append(
            ValidationIssue(code, message, Severity.WARNING, module, operation, line, details)
        )

    def add_failure(self, error: CqrsGenError, module: str | None = None) -> None:
        """Record an error that aborted analysis of a module."""
        self.issues.append(ValidationIssue.from_error(error, module))

    def merge(self, other: "ValidationResult") -> None:
        self.issues.extend(other.issues)
