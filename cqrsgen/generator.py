"""Generation pipeline: model modules in, spliced lifecycle module out."""

import logging
from pathlib import Path
from typing import Any, Sequence

from .analysis.capabilities import describe_model
from .analysis.classifier import classify_operations
from .analysis.models import AnalyzedModel
from .analysis.tagged_types import extract_tagged_types
from .config.models import Conventions, GeneratorConfig
from .errors import InvalidInvocationError
from .output.emitter import emit_api, splice
from .parsing.declarations import ClassDecl, ParsedModule
from .parsing.parser import parse_module
from .parsing.resolver import ModuleReader, SourceModule
from .synthesis.aggregator import aggregate
from .synthesis.fragments import GeneratedApi

logger = logging.getLogger(__name__)


def default_reader(config: GeneratorConfig) -> ModuleReader:
    """Module reader rooted at the configuration file's directory."""
    return ModuleReader(config.base_dir, config.conventions.source_roots)


def find_lifecycle_class(module: ParsedModule, marker: str = "Lifecycle") -> ClassDecl:
    """Find the one class in a module deriving from the lifecycle marker.

    Raises:
        InvalidInvocationError: If there is no such class or more than one.
    """
    matches = [c for c in module.classes if marker in c.base_names]
    if len(matches) != 1:
        found = ", ".join(c.name for c in matches) or "none"
        raise InvalidInvocationError(
            f"Expected exactly one class deriving from '{marker}' in {module.path}, "
            f"found: {found}. The API is generated right after that class.",
            module.path,
        )
    return matches[0]


def analyze_source(source: SourceModule, conventions: Conventions | None = None) -> AnalyzedModel:
    """Run capability, tagged-type and operation analysis on one module."""
    conventions = conventions or Conventions()
    module = parse_module(source.text, source.path)
    model = describe_model(module, source.import_prefix, conventions)
    effects = extract_tagged_types(module, model, conventions)
    operations = classify_operations(module, effects, conventions)
    logger.info(
        "Analysed %s: %s with %d effect variant(s), %d operation(s) "
        "(%d quer(ies), %d command(s))",
        source.path,
        model.domain_type,
        len(effects.effect_variants),
        operations.total,
        len(operations.queries),
        len(operations.commands),
    )
    return AnalyzedModel(effects=effects, operations=operations)


def analyze_module(
    path: str | Path, reader: ModuleReader, conventions: Conventions | None = None
) -> AnalyzedModel:
    """Read and analyse one model module."""
    return analyze_source(reader.load(path), conventions)


def build_api(
    module_paths: Sequence[str | Path],
    config: GeneratorConfig | None = None,
    reader: ModuleReader | None = None,
    lifecycle_type: str = "object",
) -> GeneratedApi:
    """Analyse every model module and aggregate the API fragments.

    Raises:
        InvalidInvocationError: If no module is given.
        CqrsGenError: Any analysis or aggregation failure.
    """
    config = config or GeneratorConfig()
    reader = reader or default_reader(config)

    if not module_paths:
        raise InvalidInvocationError(
            "No model modules given. Pass at least one module path, "
            "e.g. 'src/my_app/domain/todo_list.py'."
        )

    models = [analyze_module(path, reader, config.conventions) for path in module_paths]
    return aggregate(models, config.runtime.result_module, lifecycle_type)


def generate_api(
    lifecycle_source: str,
    module_paths: Sequence[str | Path],
    config: GeneratorConfig | None = None,
    reader: ModuleReader | None = None,
    lifecycle_path: str = "<lifecycle>",
) -> str:
    """Generate the API and splice it into the lifecycle module.

    Args:
        lifecycle_source: Text of the module holding the lifecycle class.
        module_paths: Model modules, in the order they appear in the API.
        config: Generator configuration (defaults apply when omitted).
        reader: Reader for model modules.
        lifecycle_path: Path of the lifecycle module for diagnostics.

    Returns:
        The lifecycle module text with the generated block inserted right
        after the lifecycle class.

    Raises:
        InvalidInvocationError: If no module is given or the lifecycle
            class cannot be found.
        CqrsGenError: Any parse, analysis or aggregation failure.
    """
    config = config or GeneratorConfig()

    if not module_paths:
        raise InvalidInvocationError(
            "No model modules given. Pass at least one module path, "
            "e.g. 'src/my_app/domain/todo_list.py'.",
            lifecycle_path,
        )

    lifecycle_module = parse_module(lifecycle_source, lifecycle_path)
    lifecycle = find_lifecycle_class(lifecycle_module, config.conventions.lifecycle_marker)

    api = build_api(module_paths, config, reader, lifecycle.name)
    return splice(lifecycle_source, emit_api(api), lifecycle.end_lineno)


def generate_from_config(config: GeneratorConfig, reader: ModuleReader | None = None) -> str:
    """Generate using the lifecycle module and models named in a configuration.

    Raises:
        InvalidInvocationError: If the configuration names no lifecycle module.
    """
    if not config.lifecycle:
        raise InvalidInvocationError(
            "No lifecycle module configured. Set 'lifecycle' in cqrsgen.yaml "
            "or pass --lifecycle."
        )
    reader = reader or default_reader(config)
    lifecycle_source = reader.read(config.lifecycle)
    return generate_api(lifecycle_source, config.models, config, reader, config.lifecycle)


def describe_model_data(analyzed: AnalyzedModel) -> dict[str, Any]:
    """Plain-data summary of an analysed model, suitable for YAML output."""
    effects = analyzed.effects
    model = analyzed.model

    def operations(category_ops) -> list[dict[str, Any]]:
        return [
            {
                "name": op.name,
                "variant": op.variant,
                "arguments": [
                    {"name": a.name, "type": a.annotation, "keyword_only": a.keyword_only}
                    for a in op.arguments
                ],
            }
            for op in category_ops
        ]

    return {
        "path": model.path,
        "import_prefix": model.import_prefix,
        "domain_type": model.domain_type,
        "handle_type": model.handle_type,
        "handle_attribute": model.handle_attribute,
        "effect": {
            "type": effects.effect_type,
            "variants": [v.name for v in effects.effect_variants],
        },
        "error": effects.error_type,
        "queries": operations(analyzed.operations.queries),
        "commands": operations(analyzed.operations.commands),
        "near_misses": [
            {"operation": m.operation, "code": m.code, "reason": m.reason}
            for m in analyzed.operations.near_misses
        ],
    }


def describe_models(
    module_paths: Sequence[str | Path],
    config: GeneratorConfig | None = None,
    reader: ModuleReader | None = None,
) -> list[dict[str, Any]]:
    """Analyse modules and summarize them without generating code."""
    config = config or GeneratorConfig()
    reader = reader or default_reader(config)
    return [
        describe_model_data(analyze_module(path, reader, config.conventions))
        for path in module_paths
    ]
