"""
Scaffold generator: service implementation stubs.

Stubs are written once at the root of the output directory and never replace
an existing file, so they can be edited freely after the first run.
"""

from __future__ import annotations

from genspine.codegen import File, GeneratedFile, ImportSpec, NamespaceContext, Section, header, load_template
from genspine.design import ServiceExpr
from genspine.evaluator import Root
from genspine.generators.common import apis, service_data

NAME = "scaffold"

_scaffold_template = load_template("scaffold.py.j2")


class StubFile(GeneratedFile):
    """Implementation stub of a service."""

    def __init__(self, svc: ServiceExpr):
        super().__init__(f"{svc.name}.py", overwrite=False)
        self.service = svc

    def sections(self, namespace: NamespaceContext) -> list[Section]:
        data = service_data(self.service)
        return [
            header(
                f"{data['class_name']} service implementation",
                [
                    ImportSpec("__future__", symbols=("annotations",)),
                    ImportSpec("typing", symbols=("Any",)),
                    ImportSpec(namespace.qualify("gen", self.service.name), symbols=("service",)),
                ],
                editable=True,
            ),
            Section(_scaffold_template, data),
        ]


def generate(roots: list[Root]) -> list[File]:
    """Produce one implementation stub per service."""
    return [StubFile(svc) for api in apis(roots, NAME) for svc in api.services]
