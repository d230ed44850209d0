"""
Namespace resolution for output directories.

Generated modules import each other with absolute imports, so a file needs
to know the import package its output directory belongs to. The package is
found by walking up from the directory through enclosing regular packages
(directories holding ``__init__.py``), the way the import system would see
them.

Example:
    ``out/`` is a plain directory, ``out/app/__init__.py`` exists::

        >>> resolve_namespace(Path("out/app")).qualify("gen", "account")
        'app.gen.account'
        >>> resolve_namespace(Path("out")).qualify("gen", "account")
        'gen.account'
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from genspine.core.errors import NamespaceError


@dataclass(frozen=True)
class NamespaceContext:
    """Import identity of an output directory.

    Attributes:
        package: Dotted package of the directory, empty for an import root
        root: Directory the package is importable from
    """

    package: str
    root: Path

    def qualify(self, *parts: str) -> str:
        """Return the dotted module path of ``parts`` relative to the directory."""
        names = [p for p in (self.package, *parts) if p]
        return ".".join(names)


def resolve_namespace(directory: Path) -> NamespaceContext:
    """Determine the import package of ``directory``.

    Raises:
        NamespaceError: the directory does not exist, is not a directory, or
            one of its enclosing packages is not a valid identifier.
    """
    try:
        current = directory.resolve(strict=True)
    except OSError as e:
        raise NamespaceError(str(directory), cause=e) from e
    if not current.is_dir():
        raise NamespaceError(str(directory), f"{directory} is not a directory")

    names: list[str] = []
    while (current / "__init__.py").is_file():
        if not current.name.isidentifier():
            raise NamespaceError(
                str(directory),
                f"cannot determine import package of {directory}: "
                f'"{current.name}" is not a valid package name',
            )
        names.append(current.name)
        if current.parent == current:
            break
        current = current.parent

    return NamespaceContext(package=".".join(reversed(names)), root=current)
