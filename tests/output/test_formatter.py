"""Tests for diagnostics formatting."""

import json

import yaml

from cqrsgen.output.formatter import format_descriptions, format_validation_result
from cqrsgen.parsing.errors import ParseError
from cqrsgen.validators.base import ValidationResult


def make_result() -> ValidationResult:
    result = ValidationResult()
    result.add_warning(
        "FOREIGN_ERROR_TYPE",
        "Operation 'get' returns Result[list[E], ValueError]",
        module="src/app/m.py",
        operation="get",
        line=12,
    )
    result.add_error(
        "NO_CLASSIFIED_OPERATIONS",
        "Did not find a single CQRS operation\nBe sure to implement them",
        module="src/app/m.py",
    )
    result.add_failure(ParseError("Cannot parse module", "src/app/broken.py", 3))
    return result


class TestTextFormat:
    def test_groups_issues_per_module(self):
        lines = format_validation_result(make_result()).splitlines()

        assert lines[:5] == [
            "src/app/m.py",
            "  ✘ NO_CLASSIFIED_OPERATIONS Did not find a single CQRS operation",
            "      Be sure to implement them",
            "  ⚠ FOREIGN_ERROR_TYPE (line 12, get) Operation 'get' returns "
            "Result[list[E], ValueError]",
            "",
        ]
        assert lines[5:7] == [
            "src/app/broken.py",
            "  ✘ PARSE_FAILURE (line 3) Cannot parse module",
        ]
        assert lines[-1] == "Check failed: 2 error(s), 1 warning(s)"

    def test_clean_result(self):
        assert format_validation_result(ValidationResult()) == "Check passed"

    def test_warnings_only(self):
        result = ValidationResult()
        result.add_warning("MISSING_ARGUMENT_TYPE", "untyped", module="m.py")

        output = format_validation_result(result)

        assert "  ⚠ MISSING_ARGUMENT_TYPE untyped" in output
        assert output.endswith("Check passed with 1 warning(s)")

    def test_issue_without_module(self):
        result = ValidationResult()
        result.add_error("INVALID_INVOCATION", "No model modules given")

        assert format_validation_result(result).startswith("(no module)\n")


class TestJsonFormat:
    def test_structure(self):
        data = json.loads(format_validation_result(make_result(), "json"))

        assert data["valid"] is False
        assert data["error_count"] == 2
        assert data["warning_count"] == 1
        assert [m["module"] for m in data["modules"]] == ["src/app/m.py", "src/app/broken.py"]
        warning = data["modules"][0]["issues"][1]
        assert warning["operation"] == "get"
        assert warning["line"] == 12
        assert "details" not in warning

    def test_details_are_kept(self):
        result = ValidationResult()
        result.add_warning("MISSING_ARGUMENT_TYPE", "untyped", module="m.py", argument="item")

        data = json.loads(format_validation_result(result, "json"))

        assert data["modules"][0]["issues"][0]["details"] == {"argument": "item"}


class TestValidationResult:
    def test_strict_fails_on_warnings(self):
        result = ValidationResult()
        result.add_warning("MISSING_ARGUMENT_TYPE", "untyped", module="m.py")

        assert not result.failed()
        assert result.failed(strict=True)


class TestDescriptions:
    def test_yaml_dump(self):
        output = format_descriptions([{"domain_type": "TodoListModel", "queries": []}])

        assert yaml.safe_load(output) == {
            "models": [{"domain_type": "TodoListModel", "queries": []}]
        }
