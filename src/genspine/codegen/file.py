"""
File descriptors.

A File knows which sections make up a generated file and where the file goes
relative to the writer's directory. Paths are POSIX-style relative paths.

Manifesto:
    A File never decides on its own that it may overwrite another file of the
    same run. The writer hands it the set of paths already reserved in the
    session; the File must pick a path outside that set or refuse.

Architecture:
    ```
    Writer ──► file.output_path(reserved) ──► "gen/http/openapi.json"
       │
       └────► file.sections(namespace) ──► [header, body, ...]
    ```

Features:
    - Abstract ``File`` contract used by the writer
    - ``GeneratedFile`` base with a natural path and a collision policy
    - ``unique_path()`` suffixing helper for files that opt into renaming
"""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from collections.abc import Set

from genspine.codegen.namespace import NamespaceContext
from genspine.codegen.section import Section
from genspine.core.errors import PathCollisionError

MAX_RENAME_ATTEMPTS = 1000


class File(ABC):
    """Logic to generate one complete file.

    Attributes:
        overwrite: Whether an existing file on disk may be replaced. Files
            with ``overwrite = False`` are written only when absent.
    """

    overwrite: bool = True

    @abstractmethod
    def sections(self, namespace: NamespaceContext) -> list[Section]:
        """Return the file sections in render order."""

    @abstractmethod
    def output_path(self, reserved: Set[str]) -> str:
        """Return the relative output path.

        The value must not be a member of ``reserved``. Given the same
        reserved set, the same path is returned.

        Raises:
            PathCollisionError: no path outside ``reserved`` is available.
        """


def unique_path(path: str, reserved: Set[str]) -> str:
    """Return ``path`` or the first ``name_N.ext`` variant not in ``reserved``."""
    if path not in reserved:
        return path
    stem, ext = posixpath.splitext(path)
    for i in range(1, MAX_RENAME_ATTEMPTS + 1):
        candidate = f"{stem}_{i}{ext}"
        if candidate not in reserved:
            return candidate
    raise PathCollisionError(path, f"no free output path derived from {path}")


class GeneratedFile(File):
    """A file with a natural output path.

    Subclasses implement ``sections()``. On collision the file fails unless
    ``rename_on_collision`` is set, in which case it is suffixed.
    """

    rename_on_collision: bool = False

    def __init__(self, path: str, *, overwrite: bool = True, rename_on_collision: bool | None = None):
        self.path = path
        self.overwrite = overwrite
        if rename_on_collision is not None:
            self.rename_on_collision = rename_on_collision

    def output_path(self, reserved: Set[str]) -> str:
        if self.path not in reserved:
            return self.path
        if self.rename_on_collision:
            return unique_path(self.path, reserved)
        raise PathCollisionError(self.path)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path!r})"


class SectionsFile(GeneratedFile):
    """A generated file whose sections are known up front."""

    def __init__(self, path: str, sections: list[Section], **kwargs):
        super().__init__(path, **kwargs)
        self._sections = list(sections)

    def sections(self, namespace: NamespaceContext) -> list[Section]:
        return list(self._sections)
