"""Build the per-model Query and Command enumerations."""

from ..analysis.models import Category, ClassifiedOperation, ModelDescriptor
from ..parsing.declarations import Argument, VariantField
from .fragments import EnumVariant, Enumeration

UNTYPED_FIELD = "object"


def enumeration_name(model: ModelDescriptor, category: Category) -> str:
    """``<DomainType><Category>``, e.g. ``TodoListModelCommand``."""
    return f"{model.domain_type}{category.value}"


def payload_field(argument: Argument) -> VariantField:
    """Variant field carrying one operation argument."""
    return VariantField(name=argument.name, annotation=argument.annotation or UNTYPED_FIELD)


def build_enumeration(
    model: ModelDescriptor,
    category: Category,
    operations: tuple[ClassifiedOperation, ...] | list[ClassifiedOperation],
) -> Enumeration:
    """Build the enumeration of one category.

    One variant per operation, in the order given (the classifier sorts by
    operation name). An operation without arguments yields a variant
    without payload.
    """
    variants = tuple(
        EnumVariant(
            name=operation.variant,
            fields=tuple(payload_field(argument) for argument in operation.arguments),
        )
        for operation in operations
    )
    return Enumeration(
        name=enumeration_name(model, category),
        variants=variants,
        docstring=f"{category.value} requests handled by {model.handle_type}.",
    )
