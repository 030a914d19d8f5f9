"""Base exception for every generation failure."""


class CqrsGenError(Exception):
    """Raised when a generation pass cannot complete.

    Every subclass carries a stable ``code`` used by the diagnostics
    output, and the path of the offending module when it is known.
    """

    code = "GENERATION_ERROR"

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class InvalidInvocationError(CqrsGenError):
    """Raised when generation is invoked without models or a lifecycle class."""

    code = "INVALID_INVOCATION"
