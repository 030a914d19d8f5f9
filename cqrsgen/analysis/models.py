"""Data models produced by model analysis."""

from dataclasses import dataclass
from enum import Enum

from ..naming import snake_case
from ..parsing.declarations import Argument, VariantDecl


class Category(str, Enum):
    """Kind of a CQRS operation."""

    QUERY = "Query"  # returns effects only
    COMMAND = "Command"  # returns a state-changed flag and effects


class ReturnShape(str, Enum):
    """Outcome of matching an operation's return type."""

    NOT_A_RESULT = "not_a_result"  # not Result[S, E] at all
    FOREIGN_ERROR = "foreign_error"  # Result[S, E] with another error type
    UNSUPPORTED_SUCCESS = "unsupported_success"  # right error, unknown success shape
    QUERY = "query"
    COMMAND = "command"

    @property
    def category(self) -> Category | None:
        """The operation category, or None for shapes that are not CQRS."""
        if self is ReturnShape.QUERY:
            return Category.QUERY
        if self is ReturnShape.COMMAND:
            return Category.COMMAND
        return None


@dataclass(frozen=True)
class ModelDescriptor:
    """A module's domain model and the handle guarding it."""

    path: str
    import_prefix: str
    domain_type: str
    handle_type: str

    @property
    def handle_attribute(self) -> str:
        """Attribute of the application state holding the handle."""
        return snake_case(self.handle_type)


@dataclass(frozen=True)
class EffectDescriptor:
    """A model together with its Effect and Error types."""

    model: ModelDescriptor
    effect_type: str
    effect_variants: tuple[VariantDecl, ...]
    error_type: str

    @property
    def domain_type(self) -> str:
        return self.model.domain_type

    @property
    def path(self) -> str:
        return self.model.path


@dataclass(frozen=True)
class ClassifiedOperation:
    """A handle operation exposed as a query or a command."""

    name: str  # e.g. add_item
    variant: str  # e.g. AddItem
    category: Category
    arguments: tuple[Argument, ...] = ()


@dataclass(frozen=True)
class NearMiss:
    """An operation that looks like CQRS but was left out."""

    operation: str
    shape: ReturnShape
    code: str  # e.g. FOREIGN_ERROR_TYPE
    reason: str
    lineno: int = 0


@dataclass(frozen=True)
class Classification:
    """Queries and commands of one handle, each sorted by operation name."""

    queries: tuple[ClassifiedOperation, ...] = ()
    commands: tuple[ClassifiedOperation, ...] = ()
    near_misses: tuple[NearMiss, ...] = ()

    def by_category(self, category: Category) -> tuple[ClassifiedOperation, ...]:
        """Get the operations of one category."""
        if category is Category.QUERY:
            return self.queries
        return self.commands

    @property
    def total(self) -> int:
        """Number of classified operations."""
        return len(self.queries) + len(self.commands)


@dataclass(frozen=True)
class AnalyzedModel:
    """Everything the synthesizers need to know about one module."""

    effects: EffectDescriptor
    operations: Classification

    @property
    def model(self) -> ModelDescriptor:
        return self.effects.model
