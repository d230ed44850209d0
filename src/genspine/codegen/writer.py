"""
Output writer: one session of file generation.

A ``Writer`` owns an output directory and the registry of relative paths it
has written. Each process of a generation run opens its own writer: the
orchestrator writes the driver into its workspace, the driver writes the
generated files into the caller's output directory.

Manifesto:
    Two files of the same session never end up at the same path. The
    registry is handed to each file when it picks its path and grows only
    when a write fully succeeds.

Architecture:
    ```
    Writer.write(file)
          │
          ├──► rel = file.output_path(registry)       (collision policy)
          ├──► mkdir -p parent
          ├──► namespace = resolve_namespace(dir)     (cached per session)
          ├──► open(path, "w") ◄── section.write() for each section
          ├──► normalize_file(path)                   (.py only)
          └──► registry.add(rel) ──► return path
    ```

Examples:
    >>> w = Writer("out")
    >>> w.write(SectionsFile("gen/http/openapi.json", [section]))
    'out/gen/http/openapi.json'
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path

from genspine.codegen.file import File
from genspine.codegen.namespace import NamespaceContext, resolve_namespace
from genspine.codegen.normalize import normalize_file
from genspine.core.errors import PathCollisionError
from genspine.core.logging import get_logger

logger = get_logger(__name__)

NORMALIZED_SUFFIXES = frozenset({".py"})


class Writer:
    """Writes files into a directory and tracks the paths written.

    Parameters
    ----------
    directory
        Output directory; generated paths are relative to it.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = os.fspath(directory)
        self.files: set[str] = set()
        self._namespace: NamespaceContext | None = None

    @property
    def namespace(self) -> NamespaceContext:
        """Import identity of the output directory, resolved once."""
        if self._namespace is None:
            Path(self.directory).mkdir(parents=True, exist_ok=True)
            self._namespace = resolve_namespace(Path(self.directory))
        return self._namespace

    def write(self, file: File) -> str:
        """Generate ``file`` and return the path it was written to.

        Raises:
            PathCollisionError: the file returned a reserved or invalid path.
            NamespaceError: the output directory's import package is unknown.
            RenderError: a section failed to render.
            NormalizationError: the generated Python source is invalid.
        """
        rel = _clean(file.output_path(frozenset(self.files)))
        if rel in self.files:
            raise PathCollisionError(rel)

        path = os.path.normpath(os.path.join(self.directory, rel))
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        if not file.overwrite and os.path.exists(path):
            logger.info("writer.file_kept", path=path)
            self.files.add(rel)
            return path

        sections = file.sections(self.namespace)
        with open(path, "w", encoding="utf-8") as sink:
            for section in sections:
                section.write(sink)

        if Path(path).suffix in NORMALIZED_SUFFIXES:
            normalize_file(Path(path))

        self.files.add(rel)
        logger.debug("writer.file_written", path=path, sections=len(sections))
        return path


def _clean(rel: str) -> str:
    """Normalize a relative output path and refuse paths leaving the directory."""
    cleaned = posixpath.normpath(rel.replace("\\", "/"))
    if posixpath.isabs(cleaned) or cleaned == ".." or cleaned.startswith("../") or cleaned == ".":
        raise PathCollisionError(rel, f"invalid output path {rel!r}")
    return cleaned
