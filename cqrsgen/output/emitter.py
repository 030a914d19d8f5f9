"""Serialize a GeneratedApi into Python source text.

Emission order is fixed: imports, the ``process`` generic function,
``ProcessingError``, ``Effect`` and then, per model, the Query and Command
enumerations, the effect mapping and the Query and Command dispatch
functions. Output uses four-space indentation, two blank lines between
top-level statements and string annotations throughout, so the block can
be placed anywhere in a module.
"""

from ..synthesis.aggregator import (
    DISPATCH_FUNCTION,
    EFFECT_TYPE,
    NOT_PERSISTED,
    PROCESSING_ERROR_TYPE,
)
from ..synthesis.fragments import (
    Dispatch,
    DispatchArm,
    EffectMapping,
    Enumeration,
    GeneratedApi,
)

INDENT = "    "
SEPARATOR = "\n\n\n"

GENERATED_HEADER = "# --- Generated by cqrsgen. Do not edit, regenerate instead. ---"


def _indent(lines: list[str], level: int = 1) -> list[str]:
    prefix = INDENT * level
    return [f"{prefix}{line}" if line else "" for line in lines]


def _quoted(annotation: str) -> str:
    if '"' in annotation:
        return repr(annotation)
    return f'"{annotation}"'


def emit_enumeration(enumeration: Enumeration) -> str:
    """Namespace class with one frozen dataclass per variant."""
    lines = [f"class {enumeration.name}:"]
    body: list[str] = []

    if enumeration.docstring:
        body.append(f'"""{enumeration.docstring}"""')

    for variant in enumeration.variants:
        if body:
            body.append("")
        body.append("@dataclass(frozen=True)")
        body.append(f"class {variant.name}:")
        variant_body: list[str] = []
        if variant.docstring:
            variant_body.append(f'"""{variant.docstring}"""')
        if variant.fields:
            if variant_body:
                variant_body.append("")
            for field in variant.fields:
                variant_body.append(f"{field.name}: {_quoted(field.annotation)}")
        if not variant_body:
            variant_body.append("pass")
        body.extend(_indent(variant_body))

    if not body:
        body.append("pass")

    lines.extend(_indent(body))
    return "\n".join(lines)


def emit_process_function(api: GeneratedApi) -> str:
    """The single-dispatch entry point all requests go through."""
    returns = f"Result[list[{EFFECT_TYPE}], {PROCESSING_ERROR_TYPE}]"
    lines = [
        "@singledispatch",
        f"def {DISPATCH_FUNCTION}(",
        f"    request: object, lifecycle: {_quoted(api.lifecycle_type)}",
        f") -> {_quoted(returns)}:",
        '    """Process a query or command of any model."""',
        '    raise TypeError(f"No processing registered for {type(request).__name__}")',
    ]
    return "\n".join(lines)


def emit_effect_mapping(mapping: EffectMapping) -> str:
    """Function converting one model's effects into aggregated ones."""
    lines = [f"def {mapping.function_name}(effect):"]
    if mapping.arms:
        lines.append("    match effect:")
        for arm in mapping.arms:
            pattern = arm.source if arm.member else f"{arm.source}()"
            values = ", ".join(f"effect.{name}" for name in arm.fields)
            lines.append(f"        case {pattern}:")
            lines.append(f"            return {EFFECT_TYPE}.{arm.target}({values})")
    lines.append('    raise TypeError(f"Unknown effect {effect!r}")')
    return "\n".join(lines)


def _call(dispatch: Dispatch, arm: DispatchArm) -> str:
    values = [
        f"{a.name}=request.{a.name}" if a.keyword_only else f"request.{a.name}"
        for a in arm.arguments
    ]
    return f"{dispatch.handle_attribute}.{arm.operation}({', '.join(values)})"


def emit_dispatch(dispatch: Dispatch) -> str:
    """Dispatch function registered on ``process`` for every variant."""
    mapped = f"Ok([{dispatch.effect_mapper}(effect) for effect in effects])"

    lines = [
        f"@{DISPATCH_FUNCTION}.register({dispatch.enumeration}.{arm.variant})"
        for arm in dispatch.arms
    ]
    lines.extend(
        [
            f"def {dispatch.function_name}(request, lifecycle):",
            "    app_state = lifecycle.app_state",
            f"    {dispatch.handle_attribute} = app_state.{dispatch.handle_attribute}",
            "    match request:",
        ]
    )
    for arm in dispatch.arms:
        lines.append(f"        case {dispatch.enumeration}.{arm.variant}():")
        lines.append(f"            result = {_call(dispatch, arm)}")
    lines.extend(
        [
            "        case _:",
            '            raise TypeError(f"Unknown request {request!r}")',
            "    match result:",
            "        case Err(error):",
            f"            return Err({PROCESSING_ERROR_TYPE}.{dispatch.error_variant}(error))",
        ]
    )
    if dispatch.persists:
        lines.extend(
            [
                "        case Ok((state_changed, effects)):",
                "            if state_changed:",
                "                app_state.mark_dirty()",
                "                match lifecycle.persist():",
                "                    case Err(error):",
                f"                        return Err({PROCESSING_ERROR_TYPE}.{NOT_PERSISTED}(error))",
                f"            return {mapped}",
            ]
        )
    else:
        lines.extend(
            [
                "        case Ok(effects):",
                f"            return {mapped}",
            ]
        )
    lines.append('    raise TypeError(f"Unexpected result {result!r}")')
    return "\n".join(lines)


def emit_api(api: GeneratedApi) -> str:
    """Render the complete generated block.

    Args:
        api: The aggregated API.

    Returns:
        Source text ending with a newline.
    """
    blocks = [
        GENERATED_HEADER + "\n" + "\n".join(statement.render() for statement in api.imports),
        emit_process_function(api),
        emit_enumeration(api.processing_error),
        emit_enumeration(api.effect),
    ]
    for model_api in api.models:
        blocks.append(emit_enumeration(model_api.query))
        blocks.append(emit_enumeration(model_api.command))
        blocks.append(emit_effect_mapping(model_api.effect_mapping))
        blocks.extend(emit_dispatch(dispatch) for dispatch in model_api.dispatches)

    return SEPARATOR.join(blocks) + "\n"


def splice(source: str, block: str, after_line: int) -> str:
    """Insert a block into source text after a given line.

    Args:
        source: The lifecycle module text.
        block: Text to insert.
        after_line: 1-based number of the last line kept before the block.

    Returns:
        The combined text, with two blank lines around the block.
    """
    lines = source.splitlines(keepends=True)
    head = "".join(lines[:after_line]).rstrip("\n")
    tail = "".join(lines[after_line:]).strip("\n")

    parts = [head] if head else []
    parts.append(block.strip("\n"))
    if tail:
        parts.append(tail)
    return SEPARATOR.join(parts) + "\n"
