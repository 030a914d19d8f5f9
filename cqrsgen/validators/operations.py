"""Non-fatal checks on the operations of an analysed model."""

from ..analysis.models import AnalyzedModel
from .base import ValidationResult


def check_near_misses(analyzed: AnalyzedModel) -> ValidationResult:
    """Report operations that return a Result but were left out of the API.

    Args:
        analyzed: The analysed model.

    Returns:
        ValidationResult with one warning per near miss.
    """
    result = ValidationResult()

    for miss in analyzed.operations.near_misses:
        result.add_warning(
            code=miss.code,
            message=f"Operation '{miss.operation}' {miss.reason}; it is not part of the API",
            module=analyzed.effects.path,
            operation=miss.operation,
            line=miss.lineno or None,
        )

    return result


def check_argument_types(analyzed: AnalyzedModel) -> ValidationResult:
    """Report classified operations with unannotated arguments.

    Their payload fields are typed as ``object`` in the generated API.
    """
    result = ValidationResult()
    operations = analyzed.operations.queries + analyzed.operations.commands

    for operation in operations:
        for argument in operation.arguments:
            if argument.annotation is None:
                result.add_warning(
                    code="MISSING_ARGUMENT_TYPE",
                    message=(
                        f"Argument '{argument.name}' of '{operation.name}' has no type "
                        "annotation; the generated field is typed 'object'"
                    ),
                    module=analyzed.effects.path,
                    operation=operation.name,
                    argument=argument.name,
                )

    return result
