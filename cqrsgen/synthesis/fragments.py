"""Immutable fragments of the generated API.

Synthesizers build these, the emitter serializes them. Nothing here knows
how the final text looks.
"""

from dataclasses import dataclass

from ..analysis.models import Category, ModelDescriptor
from ..parsing.declarations import VariantField


@dataclass(frozen=True)
class ImportStatement:
    """``from <module> import <names>``."""

    module: str
    names: tuple[str, ...] = ("*",)

    def render(self) -> str:
        return f"from {self.module} import {', '.join(self.names)}"


@dataclass(frozen=True)
class EnumVariant:
    """A variant of a generated enumeration."""

    name: str
    fields: tuple[VariantField, ...] = ()
    docstring: str | None = None


@dataclass(frozen=True)
class Enumeration:
    """A namespace class whose nested dataclasses are the variants."""

    name: str
    variants: tuple[EnumVariant, ...] = ()
    docstring: str | None = None

    def get_variant(self, name: str) -> EnumVariant | None:
        """Get a variant by name."""
        for variant in self.variants:
            if variant.name == name:
                return variant
        return None


@dataclass(frozen=True)
class EffectArm:
    """Maps one domain effect variant onto its aggregated counterpart."""

    source: str  # e.g. TodoListEffect.ItemAdded
    target: str  # e.g. TodoListModelItemAdded
    fields: tuple[str, ...] = ()
    member: bool = False  # Enum members are matched by value


@dataclass(frozen=True)
class EffectMapping:
    """Function converting a model's effects into aggregated effects."""

    function_name: str
    arms: tuple[EffectArm, ...] = ()


@dataclass(frozen=True)
class CallArgument:
    """A payload field passed on to a handle operation."""

    name: str
    keyword_only: bool = False


@dataclass(frozen=True)
class DispatchArm:
    """Routes one request variant to one handle operation."""

    variant: str
    operation: str
    arguments: tuple[CallArgument, ...] = ()


@dataclass(frozen=True)
class Dispatch:
    """Dispatch function for one generated enumeration."""

    function_name: str
    enumeration: str
    category: Category
    handle_attribute: str
    error_variant: str
    effect_mapper: str
    arms: tuple[DispatchArm, ...] = ()

    @property
    def persists(self) -> bool:
        """Commands persist the application state when it changed."""
        return self.category is Category.COMMAND


@dataclass(frozen=True)
class ModelApi:
    """All fragments generated for one model, in emission order."""

    model: ModelDescriptor
    query: Enumeration
    command: Enumeration
    effect_mapping: EffectMapping
    query_dispatch: Dispatch | None = None
    command_dispatch: Dispatch | None = None

    @property
    def dispatches(self) -> list[Dispatch]:
        """Dispatch functions of the non-empty enumerations."""
        return [d for d in (self.query_dispatch, self.command_dispatch) if d is not None]


@dataclass(frozen=True)
class GeneratedApi:
    """The complete generated block."""

    imports: tuple[ImportStatement, ...]
    processing_error: Enumeration
    effect: Enumeration
    models: tuple[ModelApi, ...]
    lifecycle_type: str = "object"
