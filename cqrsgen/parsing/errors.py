"""Parsing and module resolution exceptions."""

from ..errors import CqrsGenError


class ParseError(CqrsGenError):
    """Raised when a module's text is not valid Python."""

    code = "PARSE_FAILURE"

    def __init__(self, message: str, path: str | None = None, lineno: int | None = None):
        self.lineno = lineno
        super().__init__(message, path)


class SourceModuleNotFoundError(CqrsGenError):
    """Raised when a model module cannot be read."""

    code = "MODULE_NOT_FOUND"

    def __init__(self, message: str, path: str | None = None, cwd: str | None = None):
        self.cwd = cwd
        super().__init__(message, path)


class ImportPrefixError(CqrsGenError):
    """Raised when no import prefix can be derived from a module path."""

    code = "MODULE_NOT_FOUND"
