"""Synthesis layer: analysed models to generated API fragments."""

from .aggregator import (
    EFFECT_TYPE,
    NOT_PERSISTED,
    PROCESSING_ERROR_TYPE,
    aggregate,
    build_effect_type,
    build_processing_error,
    check_conflicts,
)
from .dispatch import build_dispatch, build_effect_mapping, effect_variant_name
from .enumerations import build_enumeration, enumeration_name
from .errors import AggregationError
from .fragments import (
    CallArgument,
    Dispatch,
    DispatchArm,
    EffectArm,
    EffectMapping,
    EnumVariant,
    Enumeration,
    GeneratedApi,
    ImportStatement,
    ModelApi,
)

__all__ = [
    "EFFECT_TYPE",
    "NOT_PERSISTED",
    "PROCESSING_ERROR_TYPE",
    "AggregationError",
    "aggregate",
    "build_dispatch",
    "build_effect_mapping",
    "build_effect_type",
    "build_enumeration",
    "build_processing_error",
    "check_conflicts",
    "effect_variant_name",
    "enumeration_name",
    "CallArgument",
    "Dispatch",
    "DispatchArm",
    "EffectArm",
    "EffectMapping",
    "EnumVariant",
    "Enumeration",
    "GeneratedApi",
    "ImportStatement",
    "ModelApi",
]
