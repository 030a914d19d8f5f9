"""Errors raised while combining the fragments of several models."""

from ..errors import CqrsGenError


class AggregationError(CqrsGenError):
    """Raised when two models contribute clashing names to the generated API.

    ``conflicts`` lists each clashing name with the modules that
    contribute it.
    """

    code = "AGGREGATION_CONFLICT"

    def __init__(
        self,
        message: str,
        conflicts: dict[str, list[str]] | None = None,
        path: str | None = None,
    ):
        self.conflicts = conflicts or {}
        super().__init__(message, path)
