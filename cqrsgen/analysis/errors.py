"""Structural violations found while analysing a model module."""

from ..errors import CqrsGenError


class AnalysisError(CqrsGenError):
    """Base exception for analysis errors."""

    code = "ANALYSIS_ERROR"


class MissingCapabilityError(AnalysisError):
    """Raised when no type implements a required marker capability."""

    code = "MISSING_CAPABILITY"


class DuplicateCapabilityError(AnalysisError):
    """Raised when more than one type implements a marker capability."""

    code = "DUPLICATE_CAPABILITY"

    def __init__(self, message: str, path: str | None = None, candidates: list[str] | None = None):
        self.candidates = candidates or []
        super().__init__(message, path)


class MissingTaggedTypeError(AnalysisError):
    """Raised when no enumerated type matches a tagged-type selector."""

    code = "MISSING_TAGGED_TYPE"


class AmbiguousTaggedTypeError(AnalysisError):
    """Raised when more than one enumerated type matches a selector."""

    code = "AMBIGUOUS_TAGGED_TYPE"

    def __init__(self, message: str, path: str | None = None, candidates: list[str] | None = None):
        self.candidates = candidates or []
        super().__init__(message, path)


class NoClassifiedOperationsError(AnalysisError):
    """Raised when a handle type has neither queries nor commands."""

    code = "NO_CLASSIFIED_OPERATIONS"


class VariantCollisionError(AnalysisError):
    """Raised when two operations normalize to the same variant name."""

    code = "VARIANT_COLLISION"


class InvalidVariantNameError(AnalysisError):
    """Raised when an operation's variant name is not a usable class name."""

    code = "INVALID_VARIANT_NAME"
