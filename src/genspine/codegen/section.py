"""
Sections: templates paired with render data.

A generated file is the concatenation of its sections rendered in order.
Templates are compiled once and reused; the data context changes per
section.

Architecture:
    ```
    Section(template, data)
          │
          ▼
    template.render(data) ──► text ──► sink.write(text)
    ```

Example:
    >>> section = Section(template_from_string("x = {{ value }}\\n"), {"value": 1})
    >>> section.render()
    'x = 1\\n'
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError

from genspine.core.errors import RenderError
from genspine.version import VERSION

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
)


def load_template(name: str) -> Template:
    """Load a template from the genspine template directory."""
    return env.get_template(name)


def template_from_string(source: str) -> Template:
    """Compile a template from source text with the shared environment."""
    return env.from_string(source)


@dataclass(frozen=True)
class ImportSpec:
    """A generated import statement.

    Attributes:
        path: Dotted module path
        name: Local alias (``import path as name``)
        symbols: Names imported from the module (``from path import a, b``)
    """

    path: str
    name: str = ""
    symbols: tuple[str, ...] = ()

    def code(self) -> str:
        """Return the Python import statement."""
        if self.symbols:
            return f"from {self.path} import {', '.join(self.symbols)}"
        if self.name:
            return f"import {self.path} as {self.name}"
        return f"import {self.path}"


@dataclass(frozen=True)
class Section:
    """A template and the data it renders.

    Attributes:
        template: Compiled Jinja2 template
        data: Render context; a mapping of template variables
    """

    template: Template
    data: Mapping[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        """Render the section to text.

        Raises:
            RenderError: the template failed (syntax or missing data); the
                engine's message is kept verbatim.
        """
        try:
            return self.template.render(dict(self.data))
        except TemplateError as e:
            name = self.template.name or "<string>"
            raise RenderError(f"template {name}: {e}", cause=e) from e

    def write(self, sink: TextIO) -> None:
        """Render the section into ``sink``."""
        sink.write(self.render())


_header_template = load_template("header.py.j2")


def header(title: str, imports: Sequence[ImportSpec] = (), *, editable: bool = False) -> Section:
    """Build the leading section of a generated Python module.

    Args:
        title: One-line description of the module
        imports: Import statements declared by the module's templates
        editable: The module is a scaffold meant to be edited by hand
    """
    return Section(
        _header_template,
        {
            "title": title,
            "editable": editable,
            "version": VERSION,
            "imports": [spec.code() for spec in imports],
        },
    )
