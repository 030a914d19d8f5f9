"""YAML loading and parsing for the generator configuration."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import ConfigLoadError, ConfigValidationError
from .models import GeneratorConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "cqrsgen.yaml"


def find_config_file(start_dir: str | Path | None = None) -> Path | None:
    """Search for cqrsgen.yaml starting from a directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the configuration file, or None if not found.
    """
    current = Path(start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file and return the raw data.

    Raises:
        ConfigLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise ConfigLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise ConfigLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise ConfigLoadError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def load_config(path: str | Path) -> GeneratorConfig:
    """Load and validate a configuration file.

    Relative paths inside the file are resolved against its directory.

    Raises:
        ConfigLoadError: If the file cannot be read or parsed.
        ConfigValidationError: If the data fails validation.
    """
    path = Path(path)
    logger.debug("Loading configuration from %s", path)
    data = load_yaml(path)
    config = _parse_config_data(data, str(path))
    return config.model_copy(update={"base_dir": str(path.resolve().parent)})


def parse_config_from_string(yaml_string: str) -> GeneratorConfig:
    """Parse a YAML string into a GeneratorConfig.

    Raises:
        ConfigLoadError: If the YAML cannot be parsed.
        ConfigValidationError: If the data fails validation.
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Expected YAML mapping at root, got {type(data).__name__}")

    return _parse_config_data(data)


def _parse_config_data(data: dict, path: str | None = None) -> GeneratorConfig:
    """Validate raw data into a GeneratorConfig."""
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise ConfigValidationError(
            f"Configuration validation failed with {len(errors)} error(s)", errors, path
        ) from e
