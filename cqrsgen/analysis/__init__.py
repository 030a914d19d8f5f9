"""Analysis layer: capabilities, tagged types and operation classification."""

from .capabilities import describe_model, extract_capabilities
from .classifier import classify_operations, return_shape
from .errors import (
    AmbiguousTaggedTypeError,
    AnalysisError,
    DuplicateCapabilityError,
    InvalidVariantNameError,
    MissingCapabilityError,
    MissingTaggedTypeError,
    NoClassifiedOperationsError,
    VariantCollisionError,
)
from .models import (
    AnalyzedModel,
    Category,
    Classification,
    ClassifiedOperation,
    EffectDescriptor,
    ModelDescriptor,
    NearMiss,
    ReturnShape,
)
from .tagged_types import (
    TypePredicate,
    decorated_with,
    extract_tagged_types,
    find_tagged_type,
    name_contains,
    selector_predicate,
)

__all__ = [
    # Models
    "AnalyzedModel",
    "Category",
    "Classification",
    "ClassifiedOperation",
    "EffectDescriptor",
    "ModelDescriptor",
    "NearMiss",
    "ReturnShape",
    # Errors
    "AnalysisError",
    "AmbiguousTaggedTypeError",
    "DuplicateCapabilityError",
    "InvalidVariantNameError",
    "MissingCapabilityError",
    "MissingTaggedTypeError",
    "NoClassifiedOperationsError",
    "VariantCollisionError",
    # Capabilities
    "describe_model",
    "extract_capabilities",
    # Tagged types
    "TypePredicate",
    "decorated_with",
    "extract_tagged_types",
    "find_tagged_type",
    "name_contains",
    "selector_predicate",
    # Classification
    "classify_operations",
    "return_shape",
]
