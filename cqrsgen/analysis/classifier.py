"""Classify handle operations into queries and commands.

Only the return type decides. ``return_shape`` reduces it to one of the
``ReturnShape`` cases; the success part of a ``Result`` is looked up in a
fixed table after the module's Effect type is replaced by a placeholder:

    ====================================  ===================
    Success type                          Shape
    ====================================  ===================
    list[<effect>]                        QUERY
    tuple[bool, list[<effect>]]           COMMAND
    anything else                         UNSUPPORTED_SUCCESS
    ====================================  ===================
"""

import keyword
import logging

from ..config.models import Conventions
from ..naming import variant_name
from ..parsing.declarations import FunctionDecl, ParsedModule, TypeRef
from .errors import (
    InvalidVariantNameError,
    NoClassifiedOperationsError,
    VariantCollisionError,
)
from .models import (
    Category,
    Classification,
    ClassifiedOperation,
    EffectDescriptor,
    NearMiss,
    ReturnShape,
)

logger = logging.getLogger(__name__)

EFFECT_PLACEHOLDER = "<effect>"

SUCCESS_SHAPES = {
    f"list[{EFFECT_PLACEHOLDER}]": ReturnShape.QUERY,
    f"tuple[bool, list[{EFFECT_PLACEHOLDER}]]": ReturnShape.COMMAND,
}


def _with_placeholder(ref: TypeRef, effect_type: str) -> TypeRef:
    """Replace every bare reference to the Effect type by the placeholder."""
    if ref.name == effect_type and not ref.args:
        return TypeRef(EFFECT_PLACEHOLDER)
    return TypeRef(ref.name, tuple(_with_placeholder(a, effect_type) for a in ref.args))


def return_shape(
    returns: TypeRef | None,
    effect_type: str,
    error_type: str,
    result_type: str = "Result",
) -> ReturnShape:
    """Match a return type against the CQRS operation shapes.

    Args:
        returns: The normalized return annotation, None if missing.
        effect_type: Name of the module's Effect type.
        error_type: Name of the module's Error type.
        result_type: Name of the two-case result type.

    Returns:
        The matching ReturnShape.
    """
    if returns is None or returns.name != result_type or len(returns.args) != 2:
        return ReturnShape.NOT_A_RESULT

    success, error = returns.args
    if error != TypeRef(error_type):
        return ReturnShape.FOREIGN_ERROR

    key = str(_with_placeholder(success, effect_type))
    return SUCCESS_SHAPES.get(key, ReturnShape.UNSUPPORTED_SUCCESS)


def _near_miss(method: FunctionDecl, shape: ReturnShape, effects: EffectDescriptor) -> NearMiss:
    """Describe why a Result-returning operation was left out."""
    if shape is ReturnShape.FOREIGN_ERROR:
        code = "FOREIGN_ERROR_TYPE"
        reason = (
            f"returns {method.returns} but the module's error type is "
            f"'{effects.error_type}'"
        )
    elif shape is ReturnShape.UNSUPPORTED_SUCCESS:
        code = "UNSUPPORTED_SUCCESS_TYPE"
        reason = (
            f"returns {method.returns}; expected list[{effects.effect_type}] "
            f"or tuple[bool, list[{effects.effect_type}]] as success type"
        )
    else:
        code = "ASYNC_OPERATION"
        reason = "is declared 'async def' and cannot be dispatched synchronously"
    return NearMiss(
        operation=method.name, shape=shape, code=code, reason=reason, lineno=method.lineno
    )


def _check_collisions(operations: list[ClassifiedOperation], category: Category, path: str) -> None:
    seen: dict[str, str] = {}
    for operation in operations:
        if operation.variant in seen:
            raise VariantCollisionError(
                f"Operations '{seen[operation.variant]}' and '{operation.name}' in module "
                f"{path} both become the {category.value} variant '{operation.variant}'. "
                "Rename one of them.",
                path,
            )
        seen[operation.variant] = operation.name


def _check_variant_name(operation: ClassifiedOperation, path: str) -> None:
    variant = operation.variant
    if not variant.isidentifier() or keyword.iskeyword(variant):
        raise InvalidVariantNameError(
            f"Operation '{operation.name}' in module {path} becomes the "
            f"{operation.category.value} variant '{variant}', which is not a valid "
            "Python class name. Rename the operation.",
            path,
        )


def _expected_signature(effects: EffectDescriptor, result_type: str) -> str:
    handle = effects.model.handle_type
    return (
        f"Did not find a single CQRS operation on {handle} in module {effects.path}! "
        "Be sure to implement them like:\n\n"
        f"    class {handle}(...):\n"
        f"        def my_operation(self, OPTIONALLY_ANY_OTHER_PARAMETERS) -> "
        f"{result_type}[tuple[bool, list[{effects.effect_type}]], {effects.error_type}]:\n"
        "            ...\n\n"
        "where 'bool' indicates if the state changed. If bool is present, the operation is "
        f"a command; returning {result_type}[list[{effects.effect_type}], "
        f"{effects.error_type}] makes it a query."
    )


def classify_operations(
    module: ParsedModule,
    effects: EffectDescriptor,
    conventions: Conventions | None = None,
) -> Classification:
    """Split the handle's operations into queries and commands.

    Private methods (leading underscore) are never operations. Operations
    with a Result return type that does not fit are reported as near misses
    and left out.

    Args:
        module: The parsed module.
        effects: The module's model with its Effect and Error types.
        conventions: Naming conventions.

    Returns:
        Classification with both lists sorted by operation name.

    Raises:
        NoClassifiedOperationsError: If no operation qualifies.
        InvalidVariantNameError: If an operation's variant name is not an
            identifier.
        VariantCollisionError: If two operations share a variant name.
    """
    conventions = conventions or Conventions()
    handle = module.get_class(effects.model.handle_type)
    methods = handle.methods if handle is not None else ()

    queries: list[ClassifiedOperation] = []
    commands: list[ClassifiedOperation] = []
    near_misses: list[NearMiss] = []

    for method in methods:
        if method.name.startswith("_"):
            continue

        shape = return_shape(
            method.returns, effects.effect_type, effects.error_type, conventions.result_type
        )
        if shape is ReturnShape.NOT_A_RESULT:
            continue

        category = shape.category
        if category is None or method.is_async:
            miss = _near_miss(method, shape, effects)
            logger.warning(
                "Skipping %s.%s in %s: %s",
                effects.model.handle_type,
                method.name,
                module.path,
                miss.reason,
            )
            near_misses.append(miss)
            continue

        operation = ClassifiedOperation(
            name=method.name,
            variant=variant_name(method.name, conventions.operation_prefixes),
            category=category,
            arguments=method.arguments,
        )
        _check_variant_name(operation, module.path)
        (queries if category is Category.QUERY else commands).append(operation)

    queries.sort(key=lambda op: op.name)
    commands.sort(key=lambda op: op.name)

    if not queries and not commands:
        raise NoClassifiedOperationsError(
            _expected_signature(effects, conventions.result_type), module.path
        )

    _check_collisions(queries, Category.QUERY, module.path)
    _check_collisions(commands, Category.COMMAND, module.path)

    logger.debug(
        "%s: %d quer(ies), %d command(s)", effects.domain_type, len(queries), len(commands)
    )
    return Classification(
        queries=tuple(queries), commands=tuple(commands), near_misses=tuple(near_misses)
    )
