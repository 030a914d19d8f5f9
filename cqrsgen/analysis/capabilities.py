"""Find the types implementing the domain-model marker capabilities."""

import logging
from typing import Sequence

from ..config.models import Conventions
from ..parsing.declarations import ParsedModule
from .errors import DuplicateCapabilityError, MissingCapabilityError
from .models import ModelDescriptor

logger = logging.getLogger(__name__)


def extract_capabilities(module: ParsedModule, capabilities: Sequence[str]) -> dict[str, str]:
    """Map each requested capability to the one class implementing it.

    A class implements a capability when one of its bases has the
    capability's name; qualification and generic parameters are ignored,
    so ``cqrs.CqrsModelLock[TodoListModel]`` implements ``CqrsModelLock``.

    Args:
        module: The parsed module.
        capabilities: Capability (base class) names to look for.

    Returns:
        Mapping from capability name to implementing class name.

    Raises:
        DuplicateCapabilityError: If a capability has more than one implementer.
        MissingCapabilityError: If a capability has no implementer.
    """
    requested = set(capabilities)
    found: dict[str, list[str]] = {}

    for class_decl in module.classes:
        for base in class_decl.base_names:
            if base in requested:
                implementers = found.setdefault(base, [])
                if class_decl.name not in implementers:
                    implementers.append(class_decl.name)

    for capability in sorted(found):
        implementers = found[capability]
        if len(implementers) > 1:
            raise DuplicateCapabilityError(
                f"Expected exactly one type implementing '{capability}' in module "
                f"{module.path}, found {len(implementers)}: "
                f"{', '.join(sorted(implementers))}",
                module.path,
                sorted(implementers),
            )

    if len(found) != len(requested):
        missing = sorted(requested - set(found))
        found_desc = ", ".join(
            f"{capability}: {found[capability][0]}" for capability in sorted(found)
        )
        raise MissingCapabilityError(
            f"Expected exactly one type implementing '{missing[0]}' in module "
            f"{module.path}, found 0.\n"
            f" Searched implementations of {sorted(requested)}\n"
            f" but found only these implementing types: {{{found_desc}}}",
            module.path,
        )

    result = {capability: found[capability][0] for capability in sorted(found)}
    logger.debug("Capabilities in %s: %s", module.path, result)
    return result


def describe_model(
    module: ParsedModule, import_prefix: str, conventions: Conventions | None = None
) -> ModelDescriptor:
    """Build the ModelDescriptor of a module.

    Raises:
        DuplicateCapabilityError: See extract_capabilities.
        MissingCapabilityError: See extract_capabilities.
    """
    conventions = conventions or Conventions()
    found = extract_capabilities(
        module, [conventions.domain_model_marker, conventions.handle_marker]
    )
    return ModelDescriptor(
        path=module.path,
        import_prefix=import_prefix,
        domain_type=found[conventions.domain_model_marker],
        handle_type=found[conventions.handle_marker],
    )
