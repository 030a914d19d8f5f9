"""Combine the analysed models into one generated API.

The aggregated ``Effect`` type holds every model's effect variants,
prefixed with the model's domain type, in module order and then declared
variant order. ``ProcessingError`` has one variant per model, named after
the model's Error type, followed by ``NotPersisted``.
"""

import logging
from typing import Sequence

from ..analysis.models import AnalyzedModel, Category
from ..parsing.declarations import VariantField
from .dispatch import build_dispatch, build_effect_mapping, effect_variant_name
from .enumerations import build_enumeration
from .errors import AggregationError
from .fragments import (
    EnumVariant,
    Enumeration,
    GeneratedApi,
    ImportStatement,
    ModelApi,
)

logger = logging.getLogger(__name__)

EFFECT_TYPE = "Effect"
PROCESSING_ERROR_TYPE = "ProcessingError"
DISPATCH_FUNCTION = "process"
NOT_PERSISTED = "NotPersisted"

# Names defined by the generated block itself. A model exporting one of
# them through its star import would be shadowed.
RESERVED_NAMES = frozenset(
    {
        EFFECT_TYPE,
        PROCESSING_ERROR_TYPE,
        DISPATCH_FUNCTION,
        "dataclass",
        "singledispatch",
        "Ok",
        "Err",
        "Result",
    }
)


# Locals of every generated dispatch function; the handle attribute is one too.
DISPATCH_LOCALS = frozenset(
    {"request", "lifecycle", "app_state", "result", "effects", "state_changed", "error"}
)


def runtime_imports(result_module: str = "result") -> tuple[ImportStatement, ...]:
    """Imports every generated block needs regardless of the models."""
    return (
        ImportStatement("dataclasses", ("dataclass",)),
        ImportStatement("functools", ("singledispatch",)),
        ImportStatement(result_module, ("Err", "Ok", "Result")),
    )


def check_conflicts(models: Sequence[AnalyzedModel]) -> None:
    """Reject models whose exported or generated names clash.

    Raises:
        AggregationError: Naming every clashing name and its modules.
    """
    owners: dict[str, list[str]] = {}

    for analyzed in models:
        effects = analyzed.effects
        names = {
            effects.domain_type,
            effects.model.handle_type,
            effects.effect_type,
            effects.error_type,
        }
        for name in sorted(names):
            owners.setdefault(name, []).append(effects.path)

    conflicts = {name: paths for name, paths in owners.items() if len(paths) > 1}
    reserved = {name: paths for name, paths in owners.items() if name in RESERVED_NAMES}

    if conflicts:
        details = "; ".join(f"'{name}' in {', '.join(paths)}" for name, paths in conflicts.items())
        raise AggregationError(
            f"Type names must be unique across models, found duplicates: {details}",
            conflicts,
            conflicts[next(iter(conflicts))][0],
        )
    if reserved:
        details = "; ".join(f"'{name}' in {', '.join(paths)}" for name, paths in reserved.items())
        raise AggregationError(
            f"Type names clash with names of the generated API: {details}. "
            "Please rename them in the model modules.",
            reserved,
            reserved[next(iter(reserved))][0],
        )

    for analyzed in models:
        attribute = analyzed.model.handle_attribute
        if attribute in DISPATCH_LOCALS:
            raise AggregationError(
                f"Handle type '{analyzed.model.handle_type}' in {analyzed.model.path} is "
                f"stored as '{attribute}', which the generated dispatch functions use "
                "for their own variables. Please rename the handle type.",
                {attribute: [analyzed.model.path]},
                analyzed.model.path,
            )

    seen: dict[str, str] = {}
    for analyzed in models:
        effects = analyzed.effects
        for variant in effects.effect_variants:
            target = effect_variant_name(effects.domain_type, variant.name, variant.member)
            if target in seen:
                paths = [seen[target], effects.path]
                raise AggregationError(
                    f"Effect variant '{target}' is generated twice (from {', '.join(paths)})",
                    {target: paths},
                    effects.path,
                )
            seen[target] = effects.path


def build_effect_type(models: Sequence[AnalyzedModel]) -> Enumeration:
    """Union of all models' effect variants, renamed ``<DomainType><Variant>``."""
    variants = []
    for analyzed in models:
        effects = analyzed.effects
        for variant in effects.effect_variants:
            variants.append(
                EnumVariant(
                    name=effect_variant_name(effects.domain_type, variant.name, variant.member),
                    fields=variant.fields,
                )
            )
    return Enumeration(
        name=EFFECT_TYPE,
        variants=tuple(variants),
        docstring="Effects of all models, prefixed with the model they come from.",
    )


def build_processing_error(models: Sequence[AnalyzedModel]) -> Enumeration:
    """One wrapping variant per model error type, then NotPersisted."""
    variants = [
        EnumVariant(
            name=analyzed.effects.error_type,
            fields=(VariantField("error", analyzed.effects.error_type),),
            docstring="Error during processing.",
        )
        for analyzed in models
    ]
    variants.append(
        EnumVariant(
            name=NOT_PERSISTED,
            fields=(VariantField("error", "Exception"),),
            docstring="Processing was fine, but state could not be persisted.",
        )
    )
    return Enumeration(name=PROCESSING_ERROR_TYPE, variants=tuple(variants))


def build_model_api(analyzed: AnalyzedModel) -> ModelApi:
    """Assemble the per-model fragments."""
    operations = analyzed.operations
    return ModelApi(
        model=analyzed.model,
        query=build_enumeration(analyzed.model, Category.QUERY, operations.queries),
        command=build_enumeration(analyzed.model, Category.COMMAND, operations.commands),
        effect_mapping=build_effect_mapping(analyzed),
        query_dispatch=build_dispatch(analyzed, Category.QUERY),
        command_dispatch=build_dispatch(analyzed, Category.COMMAND),
    )


def aggregate(
    models: Sequence[AnalyzedModel],
    result_module: str = "result",
    lifecycle_type: str = "object",
) -> GeneratedApi:
    """Build the complete API for a list of analysed models.

    Args:
        models: Analysed models in invocation order.
        result_module: Module the generated code imports Ok/Err/Result from.
        lifecycle_type: Lifecycle class the dispatch functions receive.

    Returns:
        GeneratedApi ready for emission.

    Raises:
        AggregationError: If names clash across models.
    """
    check_conflicts(models)

    imports = runtime_imports(result_module) + tuple(
        ImportStatement(analyzed.model.import_prefix) for analyzed in models
    )
    api = GeneratedApi(
        imports=imports,
        processing_error=build_processing_error(models),
        effect=build_effect_type(models),
        models=tuple(build_model_api(analyzed) for analyzed in models),
        lifecycle_type=lifecycle_type,
    )
    logger.info(
        "Aggregated %d model(s) with %d effect variant(s)",
        len(api.models),
        len(api.effect.variants),
    )
    return api
