"""Configuration layer: cqrsgen.yaml parsing and validation."""

from .errors import ConfigLoadError, ConfigValidationError
from .loader import (
    CONFIG_FILE_NAME,
    find_config_file,
    load_config,
    load_yaml,
    parse_config_from_string,
)
from .models import Conventions, GeneratorConfig, RuntimeSettings, TypeSelector

__all__ = [
    "ConfigLoadError",
    "ConfigValidationError",
    "CONFIG_FILE_NAME",
    "find_config_file",
    "load_config",
    "load_yaml",
    "parse_config_from_string",
    "Conventions",
    "GeneratorConfig",
    "RuntimeSettings",
    "TypeSelector",
]
