"""Typed declaration tree built from a parsed module."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TypeRef:
    """A normalized type annotation.

    ``name`` is the last dotted segment of the annotation (``result.Result``
    becomes ``Result``), ``typing`` aliases are folded into builtins
    (``List`` becomes ``list``) and unions are represented as ``Union``.
    """

    name: str
    args: tuple["TypeRef", ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}[{', '.join(str(arg) for arg in self.args)}]"


@dataclass(frozen=True)
class Argument:
    """A non-receiver argument of an operation."""

    name: str
    annotation: str | None = None  # source text, e.g. "list[str]"
    type_ref: TypeRef | None = None
    keyword_only: bool = False


@dataclass(frozen=True)
class FunctionDecl:
    """A method declared in a class body."""

    name: str
    arguments: tuple[Argument, ...] = ()
    returns: TypeRef | None = None
    is_async: bool = False
    decorators: tuple[str, ...] = ()
    lineno: int = 0


@dataclass(frozen=True)
class VariantField:
    """A payload field of an enumerated type's variant."""

    name: str
    annotation: str


@dataclass(frozen=True)
class VariantDecl:
    """A variant of an enumerated type.

    ``member`` is True for ``Enum`` members (matched by value) and False
    for nested variant classes (matched by class).
    """

    name: str
    fields: tuple[VariantField, ...] = ()
    member: bool = False


@dataclass(frozen=True)
class ClassDecl:
    """A top-level class statement."""

    name: str
    bases: tuple[TypeRef, ...] = ()
    decorators: tuple[str, ...] = ()
    methods: tuple[FunctionDecl, ...] = ()
    variants: tuple[VariantDecl, ...] = ()
    is_enumeration: bool = False
    lineno: int = 0
    end_lineno: int = 0

    @property
    def base_names(self) -> list[str]:
        """Names of the base classes without generic parameters."""
        return [base.name for base in self.bases]

    def get_method(self, name: str) -> FunctionDecl | None:
        """Get a method by name."""
        for method in self.methods:
            if method.name == name:
                return method
        return None


@dataclass(frozen=True)
class ParsedModule:
    """Declaration tree of one module."""

    path: str
    classes: tuple[ClassDecl, ...] = field(default_factory=tuple)

    @property
    def enumerations(self) -> list[ClassDecl]:
        """All classes recognized as enumerated types, in source order."""
        return [c for c in self.classes if c.is_enumeration]

    def get_class(self, name: str) -> ClassDecl | None:
        """Get a top-level class by name."""
        for class_decl in self.classes:
            if class_decl.name == name:
                return class_decl
        return None
