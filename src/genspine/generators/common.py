"""Helpers shared by the concrete generators."""

from __future__ import annotations

from typing import Any

from genspine.core.errors import GenerationError
from genspine.design import APIExpr, MethodExpr, ServiceExpr, python_type
from genspine.evaluator import Root


def apis(roots: list[Root], generator: str) -> list[APIExpr]:
    """Return the API roots, failing when the description declares none."""
    found = [r for r in roots if isinstance(r, APIExpr)]
    if not found:
        raise GenerationError("description declares no API", generator=generator)
    return found


def camel(name: str) -> str:
    """``list_accounts`` → ``ListAccounts``."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def docstring(text: str, default: str) -> str:
    """Text safe to place between triple double quotes."""
    text = (text or default).strip()
    return text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


def _attributes(attrs: dict[str, str] | None) -> list[dict[str, str]]:
    return [
        {"name": name, "type": typ, "pytype": python_type(typ)}
        for name, typ in (attrs or {}).items()
    ]


def method_data(m: MethodExpr) -> dict[str, Any]:
    """Template context of a method."""
    return {
        "name": m.name,
        "verb": m.verb,
        "path": m.path,
        "doc": docstring(m.description, f"{camel(m.name)} implements the {m.name} method."),
        "params": m.params,
        "body": m.body,
        "payload": _attributes(m.payload),
        "payload_class": f"{camel(m.name)}Payload",
        "result": _attributes(m.result),
        "result_class": f"{camel(m.name)}Result",
    }


def service_data(svc: ServiceExpr) -> dict[str, Any]:
    """Template context of a service."""
    return {
        "name": svc.name,
        "class_name": camel(svc.name),
        "doc": docstring(svc.description, f"{camel(svc.name)} service."),
        "methods": [method_data(m) for m in svc.methods],
    }
