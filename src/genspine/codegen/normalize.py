"""
Normalization of generated Python source.

Templates declare imports generously: listing an import a file turns out not
to need is cheaper than missing one. Normalization makes each generated
module minimal and canonical:

Architecture:
    ```
    source text
        │
        ▼
    ast.parse() ──(SyntaxError)──► NormalizationError(diagnostic + content)
        │
        ▼
    module-level imports ──► bound names ──► used names of the tree
        │
        ▼
    drop unused aliases on the source spans (comments survive)
        │
        ▼
    black.format_str() ──► canonical text
    ```

Guardrails:
    - ``from __future__`` and star imports are always kept
    - Only module-level imports are considered; imports inside functions or
      ``try`` blocks belong to the template author
    - Running the pass on its own output changes nothing

Example:
    >>> normalize_source("import os\\nimport sys\\nprint(sys.argv)\\n")
    'import sys\\n\\nprint(sys.argv)\\n'
"""

from __future__ import annotations

import ast
import re
from pathlib import Path

import black

from genspine.core.errors import NormalizationError
from genspine.core.logging import get_logger

logger = get_logger(__name__)

MODE = black.Mode(line_length=88)

_LINE_END = re.compile(r"\r\n|\r|\n")


def normalize_file(path: Path) -> None:
    """Normalize the Python source file at ``path`` in place."""
    content = path.read_text(encoding="utf-8")
    formatted = normalize_source(content, filename=str(path))
    path.write_text(formatted, encoding="utf-8")


def normalize_source(source: str, filename: str = "<generated>") -> str:
    """Remove unused imports from ``source`` and format it canonically.

    Raises:
        NormalizationError: the source does not parse or cannot be formatted.
    """
    try:
        tree = ast.parse(source, filename=filename)
    except SyntaxError as e:
        raise NormalizationError(filename, _diagnostic(e, filename), source, cause=e) from e

    cleaned = remove_unused_imports(source, tree)

    try:
        return black.format_str(cleaned, mode=MODE)
    except ValueError as e:
        raise NormalizationError(filename, f"{filename}: {e}", cleaned, cause=e) from e


def remove_unused_imports(source: str, tree: ast.Module) -> str:
    """Return ``source`` without the module-level imports ``tree`` never uses."""
    used = used_names(tree)
    edits: list[tuple[ast.stmt, str | None]] = []

    for node in tree.body:
        if isinstance(node, ast.Import):
            keep = [a for a in node.names if bound_name(a, node) in used]
            replacement: ast.stmt = ast.Import(names=keep)
        elif isinstance(node, ast.ImportFrom):
            if node.module == "__future__" or any(a.name == "*" for a in node.names):
                continue
            keep = [a for a in node.names if bound_name(a, node) in used]
            replacement = ast.ImportFrom(module=node.module, names=keep, level=node.level)
        else:
            continue

        if len(keep) == len(node.names):
            continue
        for alias in node.names:
            if alias not in keep:
                logger.debug("normalize.import_removed", name=alias.name, line=node.lineno)
        edits.append((node, ast.unparse(replacement) if keep else None))

    if not edits:
        return source

    # Offsets reported by ast are UTF-8 byte offsets.
    lines = [line.encode("utf-8") for line in split_lines(source)]
    for node, text in reversed(edits):
        first, last = node.lineno - 1, node.end_lineno - 1
        prefix = lines[first][: node.col_offset]
        suffix = lines[last][node.end_col_offset :]
        if text is not None:
            lines[first : last + 1] = [prefix + text.encode("utf-8") + suffix]
            continue
        whole_lines = not prefix.strip() and (
            not suffix.strip() or suffix.lstrip().startswith(b"#")
        )
        if whole_lines:
            del lines[first : last + 1]
            continue
        # The statement shares its line; drop it with one ";" separator.
        rest = suffix.lstrip(b" \t")
        if rest.startswith(b";"):
            suffix = rest[1:].lstrip(b" \t")
        else:
            prefix = prefix.rstrip(b" \t").removesuffix(b";")
        lines[first : last + 1] = [prefix + suffix]

    return b"".join(lines).decode("utf-8")


def split_lines(source: str) -> list[str]:
    """Split ``source`` into physical lines, line endings kept.

    Only ``\\n``, ``\\r\\n`` and ``\\r`` end a line, as for the Python
    tokenizer; form feeds and other Unicode separators do not.
    """
    lines: list[str] = []
    start = 0
    for match in _LINE_END.finditer(source):
        lines.append(source[start : match.end()])
        start = match.end()
    if start < len(source):
        lines.append(source[start:])
    return lines


def bound_name(alias: ast.alias, node: ast.Import | ast.ImportFrom) -> str:
    """Name an import statement binds in the module namespace."""
    if alias.asname:
        return alias.asname
    if isinstance(node, ast.Import):
        return alias.name.split(".")[0]
    return alias.name


def used_names(tree: ast.Module) -> set[str]:
    """Names read anywhere in ``tree``, string annotations and ``__all__`` included."""
    names: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Name) and not isinstance(node.ctx, ast.Store):
            names.add(node.id)
        for annotation in _annotations(node):
            names.update(_string_annotation_names(annotation))
    names.update(_dunder_all(tree))
    return names


def _annotations(node: ast.AST) -> list[ast.expr]:
    if isinstance(node, ast.arg) and node.annotation is not None:
        return [node.annotation]
    if isinstance(node, ast.AnnAssign):
        return [node.annotation]
    if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.returns is not None:
        return [node.returns]
    return []


def _string_annotation_names(annotation: ast.expr) -> set[str]:
    names: set[str] = set()
    for node in ast.walk(annotation):
        if isinstance(node, ast.Constant) and isinstance(node.value, str):
            try:
                parsed = ast.parse(node.value, mode="eval")
            except SyntaxError:
                continue
            names.update(
                n.id for n in ast.walk(parsed) if isinstance(n, ast.Name)
            )
    return names


def _dunder_all(tree: ast.Module) -> set[str]:
    names: set[str] = set()
    for node in tree.body:
        if isinstance(node, ast.Assign):
            targets, value = node.targets, node.value
        elif isinstance(node, (ast.AnnAssign, ast.AugAssign)):
            targets, value = [node.target], node.value
        else:
            continue
        if not any(isinstance(t, ast.Name) and t.id == "__all__" for t in targets):
            continue
        if isinstance(value, (ast.List, ast.Tuple)):
            names.update(
                e.value
                for e in value.elts
                if isinstance(e, ast.Constant) and isinstance(e.value, str)
            )
    return names


def _diagnostic(error: SyntaxError, filename: str) -> str:
    location = f"{error.filename or filename}:{error.lineno}"
    if error.offset:
        location += f":{error.offset}"
    return f"{location}: {error.msg}"
