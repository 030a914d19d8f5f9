"""Configuration exceptions."""

from ..errors import CqrsGenError


class ConfigLoadError(CqrsGenError):
    """Raised when a configuration file cannot be loaded."""

    code = "CONFIG_LOAD_ERROR"


class ConfigValidationError(CqrsGenError):
    """Raised when a configuration fails validation."""

    code = "CONFIG_INVALID"

    def __init__(self, message: str, errors: list[dict] | None = None, path: str | None = None):
        self.errors = errors or []
        super().__init__(message, path)
