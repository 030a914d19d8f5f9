"""Reading model modules and deriving their import prefix."""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Sequence

from .errors import ImportPrefixError, ParseError, SourceModuleNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_ROOTS = ("src", "tests")


@dataclass(frozen=True)
class SourceModule:
    """One input file: where it lives, how it is imported and its text."""

    path: str
    import_prefix: str
    text: str


def import_prefix(path: str | PurePath, source_roots: Sequence[str] = DEFAULT_SOURCE_ROOTS) -> str:
    """Derive the dotted import path of a module file.

    Everything up to and including the first source-root segment is
    dropped, as is the ``.py`` suffix or a trailing ``__init__.py``.

    >>> import_prefix("src/todo_app/domain/todo_list.py")
    'todo_app.domain.todo_list'
    >>> import_prefix("src/todo_app/domain/__init__.py")
    'todo_app.domain'

    Raises:
        ImportPrefixError: If the path has no source root or is not a
            ``.py`` file.
    """
    parts = PurePath(path).parts
    roots = [i for i, part in enumerate(parts) if part in source_roots]
    if not roots:
        raise ImportPrefixError(
            f"Module path '{path}' needs to contain one of "
            f"{', '.join(repr(r + '/') for r in source_roots)}",
            str(path),
        )

    segments = list(parts[roots[0] + 1 :])
    if not segments or not segments[-1].endswith(".py"):
        last = segments[-1] if segments else ""
        raise ImportPrefixError(
            f"Module path doesn't end with a '.py' file: '{last}'", str(path)
        )

    if segments[-1] == "__init__.py":
        segments.pop()
    else:
        segments[-1] = segments[-1][: -len(".py")]

    if not segments:
        raise ImportPrefixError(
            f"Module path '{path}' names a source root, not a module", str(path)
        )
    return ".".join(segments)


class ModuleReader:
    """Reads model modules relative to a project directory."""

    def __init__(
        self,
        base_dir: str | Path | None = None,
        source_roots: Sequence[str] = DEFAULT_SOURCE_ROOTS,
    ):
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.source_roots = tuple(source_roots)

    def resolve(self, path: str | Path) -> Path:
        """Resolve a path against the base directory."""
        path = Path(path)
        if self.base_dir is not None and not path.is_absolute():
            return self.base_dir / path
        return path

    def read(self, path: str | Path) -> str:
        """Return the text of a module.

        Raises:
            SourceModuleNotFoundError: If the file cannot be read. The
                message names the attempted path and the working directory.
            ParseError: If the file is not valid UTF-8.
        """
        resolved = self.resolve(path)
        try:
            text = resolved.read_text(encoding="utf-8")
        except OSError as e:
            cwd = str(Path.cwd())
            raise SourceModuleNotFoundError(
                f"Error loading the given file: {e}\n"
                f'Looked in: {cwd} / "{resolved}"\n'
                "File paths need to start from the project root.",
                str(path),
                cwd,
            ) from e
        except UnicodeDecodeError as e:
            raise ParseError(
                f"Module {resolved} is not valid UTF-8: cannot decode byte "
                f"0x{e.object[e.start]:02x} at offset {e.start}",
                str(path),
            ) from e
        logger.debug("Read %d characters from %s", len(text), resolved)
        return text

    def load(self, path: str | Path) -> SourceModule:
        """Read a module and derive its import prefix."""
        text = self.read(path)
        prefix = import_prefix(path, self.source_roots)
        logger.debug("Import prefix of %s is %s", path, prefix)
        return SourceModule(path=str(path), import_prefix=prefix, text=text)
