"""
OpenAPI generator: one OpenAPI 3 document per API root.

The document is written to ``gen/http/openapi.json``. A second API root in the
same description gets a suffixed name (``openapi_1.json``) instead of failing.
"""

from __future__ import annotations

import json
from typing import Any

from genspine.codegen import File, Section, SectionsFile, template_from_string
from genspine.design import APIExpr, MethodExpr, openapi_type
from genspine.evaluator import Root
from genspine.generators.common import apis

NAME = "openapi"

OPENAPI_VERSION = "3.0.3"

_document_template = template_from_string("{{ document }}\n")


def _schema(attrs: dict[str, str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {name: {"type": openapi_type(typ)} for name, typ in attrs.items()},
        "required": list(attrs),
    }


def _operation(service: str, m: MethodExpr) -> dict[str, Any]:
    op: dict[str, Any] = {
        "tags": [service],
        "operationId": f"{service}#{m.name}",
        "summary": f"{m.name} {service}",
    }
    if m.description:
        op["description"] = m.description
    if m.params:
        op["parameters"] = [
            {
                "name": p,
                "in": "path",
                "required": True,
                "schema": {"type": openapi_type(m.payload[p])},
            }
            for p in m.params
        ]
    if m.body:
        op["requestBody"] = {
            "required": True,
            "content": {
                "application/json": {
                    "schema": _schema({name: m.payload[name] for name in m.body}),
                },
            },
        }
    response: dict[str, Any] = {"description": "OK response."}
    if m.result:
        response["content"] = {"application/json": {"schema": _schema(m.result)}}
    op["responses"] = {"200": response}
    return op


def document(api: APIExpr) -> dict[str, Any]:
    """Build the OpenAPI document of ``api``."""
    info: dict[str, Any] = {"title": api.title or api.name, "version": api.version}
    if api.description:
        info["description"] = api.description

    paths: dict[str, dict[str, Any]] = {}
    for svc in api.services:
        for m in svc.methods:
            paths.setdefault(m.path, {})[m.verb.lower()] = _operation(svc.name, m)

    return {"openapi": OPENAPI_VERSION, "info": info, "paths": paths}


def generate(roots: list[Root]) -> list[File]:
    """Produce the OpenAPI document files."""
    return [
        SectionsFile(
            "gen/http/openapi.json",
            [Section(_document_template, {"document": json.dumps(document(api), indent=2)})],
            rename_on_collision=True,
        )
        for api in apis(roots, NAME)
    ]
