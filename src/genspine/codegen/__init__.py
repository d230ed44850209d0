"""
Code generation primitives: sections, files, the writer and normalization.

Example:
    >>> from genspine.codegen import Writer, SectionsFile, Section, template_from_string
    >>> section = Section(template_from_string("{{ doc }}\\n"), {"doc": "{}"})
    >>> Writer("out").write(SectionsFile("doc.json", [section]))
    'out/doc.json'
"""

from genspine.codegen.file import File, GeneratedFile, SectionsFile, unique_path
from genspine.codegen.namespace import NamespaceContext, resolve_namespace
from genspine.codegen.normalize import normalize_file, normalize_source
from genspine.codegen.section import (
    ImportSpec,
    Section,
    header,
    load_template,
    template_from_string,
)
from genspine.codegen.writer import Writer

__all__ = [
    "File",
    "GeneratedFile",
    "SectionsFile",
    "unique_path",
    "NamespaceContext",
    "resolve_namespace",
    "normalize_file",
    "normalize_source",
    "ImportSpec",
    "Section",
    "header",
    "load_template",
    "template_from_string",
    "Writer",
]
