"""Diagnostics runner: analyse model modules and collect every issue."""

import logging
from pathlib import Path
from typing import Sequence

from ..analysis.models import AnalyzedModel
from ..config.models import GeneratorConfig
from ..errors import CqrsGenError
from ..generator import analyze_module, default_reader
from ..parsing.resolver import ModuleReader
from ..synthesis.aggregator import check_conflicts
from .base import ValidationResult
from .operations import check_argument_types, check_near_misses

logger = logging.getLogger(__name__)


def run_validators(analyzed: AnalyzedModel) -> ValidationResult:
    """Run all non-fatal checks on an analysed model.

    Args:
        analyzed: The analysed model.

    Returns:
        Combined ValidationResult from all checks.
    """
    result = ValidationResult()
    result.merge(check_near_misses(analyzed))
    result.merge(check_argument_types(analyzed))
    return result


def check_model_files(
    module_paths: Sequence[str | Path],
    config: GeneratorConfig | None = None,
    reader: ModuleReader | None = None,
) -> ValidationResult:
    """Check model modules without generating code.

    Each module is analysed on its own, so one broken module does not hide
    the issues of the others. Failures that would abort generation become
    errors; the cross-model checks only run when every module analysed.

    Args:
        module_paths: Model modules to check.
        config: Generator configuration.
        reader: Reader for model modules.

    Returns:
        ValidationResult over all modules.
    """
    config = config or GeneratorConfig()
    reader = reader or default_reader(config)
    result = ValidationResult()
    analyzed_models: list[AnalyzedModel] = []

    if not module_paths:
        result.add_error("INVALID_INVOCATION", "No model modules given")
        return result

    for path in module_paths:
        try:
            analyzed = analyze_module(path, reader, config.conventions)
        except CqrsGenError as e:
            logger.debug("Analysis of %s failed: %s", path, e)
            result.add_failure(e, str(path))
            continue
        analyzed_models.append(analyzed)
        result.merge(run_validators(analyzed))

    if len(analyzed_models) == len(module_paths):
        try:
            check_conflicts(analyzed_models)
        except CqrsGenError as e:
            result.add_failure(e)

    return result
