"""
Server generator: service interfaces and HTTP server transport.

For every service of every API root it produces:

- ``gen/<service>/service.py``: payload and result dataclasses and the
  abstract ``Service`` class the user implements;
- ``gen/http/<service>/server.py``: a ``Server`` that routes HTTP requests to
  a ``Service`` implementation.
"""

from __future__ import annotations

from genspine.codegen import File, GeneratedFile, ImportSpec, NamespaceContext, Section, header, load_template
from genspine.design import ServiceExpr
from genspine.evaluator import Root
from genspine.generators.common import apis, service_data

NAME = "server"

_service_template = load_template("service.py.j2")
_server_template = load_template("http/server.py.j2")


class ServiceFile(GeneratedFile):
    """The service interface module."""

    def __init__(self, svc: ServiceExpr):
        super().__init__(f"gen/{svc.name}/service.py")
        self.service = svc

    def sections(self, namespace: NamespaceContext) -> list[Section]:
        data = service_data(self.service)
        return [
            header(
                f"{data['class_name']} service interface",
                [
                    ImportSpec("__future__", symbols=("annotations",)),
                    ImportSpec("abc", symbols=("ABC", "abstractmethod")),
                    ImportSpec("dataclasses", symbols=("dataclass",)),
                    ImportSpec("typing", symbols=("Any",)),
                ],
            ),
            Section(_service_template, data),
        ]


class ServerFile(GeneratedFile):
    """The HTTP server transport module."""

    def __init__(self, svc: ServiceExpr):
        super().__init__(f"gen/http/{svc.name}/server.py")
        self.service = svc

    def sections(self, namespace: NamespaceContext) -> list[Section]:
        data = service_data(self.service)
        return [
            header(
                f"{data['class_name']} HTTP server",
                [
                    ImportSpec("__future__", symbols=("annotations",)),
                    ImportSpec("dataclasses"),
                    ImportSpec("json"),
                    ImportSpec("re"),
                    ImportSpec("urllib.parse"),
                    ImportSpec("typing", symbols=("Any",)),
                    ImportSpec(namespace.qualify("gen", self.service.name), symbols=("service",)),
                ],
            ),
            Section(_server_template, data),
        ]


def generate(roots: list[Root]) -> list[File]:
    """Produce the service and server transport files."""
    files: list[File] = []
    for api in apis(roots, NAME):
        for svc in api.services:
            files.append(ServiceFile(svc))
            files.append(ServerFile(svc))
    return files
