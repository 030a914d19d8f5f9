"""Build the declaration tree of a module with the ``ast`` module."""

import ast
import logging

from .declarations import (
    Argument,
    ClassDecl,
    FunctionDecl,
    ParsedModule,
    TypeRef,
    VariantDecl,
    VariantField,
)
from .errors import ParseError

logger = logging.getLogger(__name__)

# typing aliases folded into their builtin spelling
TYPING_ALIASES = {
    "List": "list",
    "Tuple": "tuple",
    "Dict": "dict",
    "Set": "set",
    "FrozenSet": "frozenset",
    "Type": "type",
}

# Base classes that make a class an enumerated type by membership
ENUM_BASES = frozenset({"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag"})


def parse_module(text: str, path: str = "<string>") -> ParsedModule:
    """Parse module text into a ParsedModule.

    Args:
        text: The module's source code.
        path: Path used in diagnostics.

    Returns:
        The declaration tree of every top-level class.

    Raises:
        ParseError: If the text is not valid Python.
    """
    try:
        tree = ast.parse(text, filename=path)
    except SyntaxError as e:
        raise ParseError(
            f"Cannot parse module {path}: {e.msg} (line {e.lineno})", path, e.lineno
        ) from e

    classes = tuple(
        parse_class(node) for node in tree.body if isinstance(node, ast.ClassDef)
    )
    logger.debug("Parsed %d class(es) from %s", len(classes), path)
    return ParsedModule(path=path, classes=classes)


def parse_class(node: ast.ClassDef) -> ClassDecl:
    """Convert a class statement into a ClassDecl."""
    bases = tuple(type_ref(base) for base in node.bases)
    methods = tuple(
        parse_function(item)
        for item in node.body
        if isinstance(item, (ast.FunctionDef, ast.AsyncFunctionDef))
    )

    if any(base.name in ENUM_BASES for base in bases):
        variants = _enum_members(node)
        is_enumeration = True
    else:
        nested = [item for item in node.body if isinstance(item, ast.ClassDef)]
        variants = tuple(_variant_class(item) for item in nested)
        is_enumeration = bool(nested)

    return ClassDecl(
        name=node.name,
        bases=bases,
        decorators=tuple(decorator_name(d) for d in node.decorator_list),
        methods=methods,
        variants=variants,
        is_enumeration=is_enumeration,
        lineno=node.lineno,
        end_lineno=node.end_lineno or node.lineno,
    )


def parse_function(node: ast.FunctionDef | ast.AsyncFunctionDef) -> FunctionDecl:
    """Convert a method into a FunctionDecl, dropping the receiver."""
    decorators = tuple(decorator_name(d) for d in node.decorator_list)

    positional = list(node.args.posonlyargs) + list(node.args.args)
    if positional and "staticmethod" not in decorators:
        positional = positional[1:]

    arguments = [_argument(arg) for arg in positional]
    arguments.extend(_argument(arg, keyword_only=True) for arg in node.args.kwonlyargs)

    return FunctionDecl(
        name=node.name,
        arguments=tuple(arguments),
        returns=type_ref(node.returns) if node.returns is not None else None,
        is_async=isinstance(node, ast.AsyncFunctionDef),
        decorators=decorators,
        lineno=node.lineno,
    )


def type_ref(node: ast.expr) -> TypeRef:
    """Normalize an annotation expression into a TypeRef.

    Handles plain and dotted names, subscripted generics, ``X | Y`` unions,
    ``None`` and string forward references.
    """
    if isinstance(node, ast.Name):
        return TypeRef(TYPING_ALIASES.get(node.id, node.id))

    if isinstance(node, ast.Attribute):
        return TypeRef(TYPING_ALIASES.get(node.attr, node.attr))

    if isinstance(node, ast.Subscript):
        base = type_ref(node.value)
        if isinstance(node.slice, ast.Tuple):
            args = tuple(type_ref(elt) for elt in node.slice.elts)
        else:
            args = (type_ref(node.slice),)
        return TypeRef(base.name, args)

    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        members: list[TypeRef] = []
        for side in (node.left, node.right):
            ref = type_ref(side)
            if ref.name == "Union":
                members.extend(ref.args)
            else:
                members.append(ref)
        return TypeRef("Union", tuple(members))

    if isinstance(node, ast.Constant):
        if node.value is None:
            return TypeRef("None")
        if isinstance(node.value, str):
            try:
                inner = ast.parse(node.value.strip(), mode="eval").body
            except SyntaxError:
                return TypeRef(node.value)
            return type_ref(inner)
        return TypeRef(repr(node.value))

    if isinstance(node, (ast.List, ast.Tuple)):
        return TypeRef("[]", tuple(type_ref(elt) for elt in node.elts))

    return TypeRef(ast.unparse(node))


def annotation_source(node: ast.expr) -> str:
    """Source text of an annotation, unwrapping string forward references."""
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value.strip()
    return ast.unparse(node)


def decorator_name(node: ast.expr) -> str:
    """Name of a decorator: ``@dataclass(frozen=True)`` gives ``dataclass``."""
    if isinstance(node, ast.Call):
        node = node.func
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Name):
        return node.id
    return ast.unparse(node)


def _argument(arg: ast.arg, keyword_only: bool = False) -> Argument:
    if arg.annotation is None:
        return Argument(name=arg.arg, keyword_only=keyword_only)
    return Argument(
        name=arg.arg,
        annotation=annotation_source(arg.annotation),
        type_ref=type_ref(arg.annotation),
        keyword_only=keyword_only,
    )


def _enum_members(node: ast.ClassDef) -> tuple[VariantDecl, ...]:
    """Members of an Enum subclass, in declaration order."""
    names: list[str] = []
    for item in node.body:
        if isinstance(item, ast.Assign):
            targets = [t.id for t in item.targets if isinstance(t, ast.Name)]
        elif isinstance(item, ast.AnnAssign) and item.value is not None:
            targets = [item.target.id] if isinstance(item.target, ast.Name) else []
        else:
            continue
        names.extend(t for t in targets if not t.startswith("_"))
    return tuple(VariantDecl(name=name, member=True) for name in names)


def _variant_class(node: ast.ClassDef) -> VariantDecl:
    """A nested variant class; its annotated attributes are the payload."""
    fields = []
    for item in node.body:
        if not isinstance(item, ast.AnnAssign) or not isinstance(item.target, ast.Name):
            continue
        if type_ref(item.annotation).name == "ClassVar":
            continue
        fields.append(
            VariantField(name=item.target.id, annotation=annotation_source(item.annotation))
        )
    return VariantDecl(name=node.name, fields=tuple(fields))
