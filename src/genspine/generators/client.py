"""Client generator: one HTTP client module per service."""

from __future__ import annotations

from genspine.codegen import File, GeneratedFile, ImportSpec, NamespaceContext, Section, header, load_template
from genspine.design import ServiceExpr
from genspine.evaluator import Root
from genspine.generators.common import apis, service_data

NAME = "client"

_client_template = load_template("http/client.py.j2")


class ClientFile(GeneratedFile):
    """The HTTP client transport module of a service."""

    def __init__(self, svc: ServiceExpr):
        super().__init__(f"gen/http/{svc.name}/client.py")
        self.service = svc

    def sections(self, namespace: NamespaceContext) -> list[Section]:
        data = service_data(self.service)
        return [
            header(
                f"{data['class_name']} HTTP client",
                [
                    ImportSpec("__future__", symbols=("annotations",)),
                    ImportSpec("json"),
                    ImportSpec("urllib.parse"),
                    ImportSpec("urllib.request"),
                    ImportSpec("typing", symbols=("Any", "Callable")),
                ],
            ),
            Section(_client_template, data),
        ]


def generate(roots: list[Root]) -> list[File]:
    """Produce the client transport files."""
    return [ClientFile(svc) for api in apis(roots, NAME) for svc in api.services]
