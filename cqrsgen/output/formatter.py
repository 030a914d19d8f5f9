"""Output formatting for diagnostics and model descriptions."""

import json
from typing import Any, Literal

import yaml

from ..validators.base import Severity, ValidationIssue, ValidationResult


def format_validation_result(
    result: ValidationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a diagnostics result for output.

    Args:
        result: The diagnostics result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(result)
    return _format_text(result)


def format_descriptions(descriptions: list[dict[str, Any]]) -> str:
    """Dump analysed model summaries as YAML."""
    return yaml.safe_dump({"models": descriptions}, sort_keys=False, default_flow_style=False)


SYMBOLS = {Severity.ERROR: "✘", Severity.WARNING: "⚠"}


def _format_text(result: ValidationResult) -> str:
    """One block per module, its errors before its warnings."""
    lines: list[str] = []

    for module, issues in result.by_module().items():
        lines.append(module or "(no module)")
        for issue in issues:
            lines.extend(_format_issue_text(issue))
        lines.append("")

    errors, warnings = len(result.errors), len(result.warnings)
    if result.is_valid:
        lines.append(f"Check passed with {warnings} warning(s)" if warnings else "Check passed")
    else:
        lines.append(f"Check failed: {errors} error(s), {warnings} warning(s)")

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> list[str]:
    """Format a single issue; continuation lines of long messages are indented."""
    position = f"({issue.position}) " if issue.position else ""
    first, *rest = issue.message.splitlines() or [""]
    return [f"  {SYMBOLS[issue.severity]} {issue.code} {position}{first}"] + [
        f"      {line}" for line in rest
    ]


def _format_json(result: ValidationResult) -> str:
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "modules": [
            {
                "module": module,
                "issues": [
                    {
                        "code": issue.code,
                        "severity": issue.severity.value,
                        "operation": issue.operation,
                        "line": issue.line,
                        "message": issue.message,
                        **({"details": issue.details} if issue.details else {}),
                    }
                    for issue in issues
                ],
            }
            for module, issues in result.by_module().items()
        ],
    }
    return json.dumps(data, indent=2)
