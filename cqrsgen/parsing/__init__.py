"""Parsing layer: module text to typed declaration tree."""

from .declarations import (
    Argument,
    ClassDecl,
    FunctionDecl,
    ParsedModule,
    TypeRef,
    VariantDecl,
    VariantField,
)
from .errors import ImportPrefixError, ParseError, SourceModuleNotFoundError
from .parser import parse_module, type_ref
from .resolver import ModuleReader, SourceModule, import_prefix

__all__ = [
    # Declarations
    "Argument",
    "ClassDecl",
    "FunctionDecl",
    "ParsedModule",
    "TypeRef",
    "VariantDecl",
    "VariantField",
    # Errors
    "ImportPrefixError",
    "ParseError",
    "SourceModuleNotFoundError",
    # Parsing
    "parse_module",
    "type_ref",
    # Resolution
    "ModuleReader",
    "SourceModule",
    "import_prefix",
]
