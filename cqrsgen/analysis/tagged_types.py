"""Find a module's Effect and Error types.

Discovery is a predicate lookup over the module's enumerated types. The
predicates shipped here match by name keyword or by decorator; any
``Callable[[ClassDecl], bool]`` can be passed instead.
"""

import logging
from typing import Callable

from ..config.models import Conventions, TypeSelector
from ..parsing.declarations import ClassDecl, ParsedModule
from .errors import AmbiguousTaggedTypeError, MissingTaggedTypeError
from .models import EffectDescriptor, ModelDescriptor

logger = logging.getLogger(__name__)

TypePredicate = Callable[[ClassDecl], bool]


def name_contains(keyword: str) -> TypePredicate:
    """Match enumerated types whose name contains a keyword."""

    def predicate(class_decl: ClassDecl) -> bool:
        return keyword in class_decl.name

    return predicate


def decorated_with(decorator: str) -> TypePredicate:
    """Match enumerated types carrying a decorator of the given name."""

    def predicate(class_decl: ClassDecl) -> bool:
        return decorator in class_decl.decorators

    return predicate


def selector_predicate(selector: TypeSelector) -> TypePredicate:
    """Build the predicate described by a configured selector."""
    if selector.keyword is not None:
        return name_contains(selector.keyword)
    return decorated_with(selector.decorator or "")


def find_tagged_type(
    module: ParsedModule, predicate: TypePredicate, label: str, rule: str = ""
) -> ClassDecl:
    """Find the single enumerated type matching a predicate.

    Args:
        module: The parsed module.
        predicate: Selection rule.
        label: Name of the tagged type in diagnostics ("Effect", "Error").
        rule: Description of the selection rule for diagnostics.

    Raises:
        MissingTaggedTypeError: If no enumerated type matches.
        AmbiguousTaggedTypeError: If more than one matches.
    """
    matches = [c for c in module.enumerations if predicate(c)]
    logger.debug("%s candidates in %s: %s", label, module.path, [c.name for c in matches])

    hint = f" Needs to be an enumerated type with a {rule}." if rule else ""
    if not matches:
        raise MissingTaggedTypeError(
            f"No {label} type found in module {module.path}.{hint}", module.path
        )
    if len(matches) > 1:
        names = [c.name for c in matches]
        raise AmbiguousTaggedTypeError(
            f"More than one {label} type found in module {module.path}! "
            f"Please combine all {label} cases in one type. Found: {', '.join(names)}",
            module.path,
            names,
        )
    return matches[0]


def extract_tagged_types(
    module: ParsedModule, model: ModelDescriptor, conventions: Conventions | None = None
) -> EffectDescriptor:
    """Attach the module's Effect and Error types to its model.

    The Effect type's variants are captured; the Error type is only named,
    its variants are passed through untouched.
    """
    conventions = conventions or Conventions()

    effect = find_tagged_type(
        module,
        selector_predicate(conventions.effect),
        "Effect",
        conventions.effect.describe(),
    )
    error = find_tagged_type(
        module,
        selector_predicate(conventions.error),
        "Error",
        conventions.error.describe(),
    )

    return EffectDescriptor(
        model=model,
        effect_type=effect.name,
        effect_variants=effect.variants,
        error_type=error.name,
    )
