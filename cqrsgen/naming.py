"""Identifier conversions shared by analysis and synthesis."""

import re
from typing import Iterable

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

DEFAULT_OPERATION_PREFIXES = ("command", "com", "query")


def snake_case(name: str) -> str:
    """Convert a CapWords identifier to snake_case.

    >>> snake_case("TodoListModelLock")
    'todo_list_model_lock'
    >>> snake_case("HTTPClientLock")
    'http_client_lock'
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def pascal_case(name: str) -> str:
    """Convert a snake_case identifier to CapWords.

    >>> pascal_case("get_all_items")
    'GetAllItems'
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def strip_operation_prefix(
    name: str, prefixes: Iterable[str] = DEFAULT_OPERATION_PREFIXES
) -> str:
    """Remove a leading prefix token such as ``command_`` from a name.

    Only the token before the first underscore is considered, and a name
    that consists of the prefix alone is kept as is.
    """
    head, sep, rest = name.partition("_")
    if sep and rest and head in set(prefixes):
        return rest
    return name


def variant_name(
    operation_name: str, prefixes: Iterable[str] = DEFAULT_OPERATION_PREFIXES
) -> str:
    """Enumeration variant identifier for an operation.

    >>> variant_name("command_add_item")
    'AddItem'
    """
    return pascal_case(strip_operation_prefix(operation_name, prefixes))
