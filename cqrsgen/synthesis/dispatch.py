"""Build dispatch functions and effect mappings for a model."""

from ..analysis.models import AnalyzedModel, Category, ClassifiedOperation
from ..naming import pascal_case, snake_case
from .enumerations import enumeration_name
from .fragments import CallArgument, Dispatch, DispatchArm, EffectArm, EffectMapping


def effect_variant_name(domain_type: str, variant: str, member: bool = False) -> str:
    """Name of an effect variant in the aggregated Effect type.

    The domain type is prefixed so equally named effects of different
    models stay distinct. Enum member names (``ITEM_ADDED``) are converted
    to CapWords first.
    """
    if member and variant.isupper():
        variant = pascal_case(variant.lower())
    return f"{domain_type}{variant}"


def effect_mapper_name(domain_type: str) -> str:
    return f"_{snake_case(domain_type)}_effect"


def build_effect_mapping(analyzed: AnalyzedModel) -> EffectMapping:
    """Map every variant of the model's Effect type, in declared order."""
    effects = analyzed.effects
    arms = tuple(
        EffectArm(
            source=f"{effects.effect_type}.{variant.name}",
            target=effect_variant_name(effects.domain_type, variant.name, variant.member),
            fields=tuple(f.name for f in variant.fields),
            member=variant.member,
        )
        for variant in effects.effect_variants
    )
    return EffectMapping(function_name=effect_mapper_name(effects.domain_type), arms=arms)


def _arm(operation: ClassifiedOperation) -> DispatchArm:
    return DispatchArm(
        variant=operation.variant,
        operation=operation.name,
        arguments=tuple(CallArgument(a.name, a.keyword_only) for a in operation.arguments),
    )


def build_dispatch(analyzed: AnalyzedModel, category: Category) -> Dispatch | None:
    """Build the dispatch function of one category.

    Returns:
        The Dispatch, or None when the model has no operation of this
        category.
    """
    operations = analyzed.operations.by_category(category)
    if not operations:
        return None

    enumeration = enumeration_name(analyzed.model, category)
    return Dispatch(
        function_name=f"_process_{snake_case(enumeration)}",
        enumeration=enumeration,
        category=category,
        handle_attribute=analyzed.model.handle_attribute,
        error_variant=analyzed.effects.error_type,
        effect_mapper=effect_mapper_name(analyzed.effects.domain_type),
        arms=tuple(_arm(operation) for operation in operations),
    )
