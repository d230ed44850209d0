"""
A small description language for HTTP services.

Descriptions are plain Python modules. Calling :func:`api` declares an
``APIExpr`` root with the evaluation context; the driver evaluates it and
hands the roots to the generators.

Example:
    ``design/account.py``::

        from genspine.design import api, method, service

        api(
            "bank",
            service(
                "account",
                method("list", "GET", "/accounts", result={"ids": "string"}),
                method("show", "GET", "/accounts/{id}", payload={"id": "integer"}),
                method("create", "POST", "/accounts", payload={"name": "string"}),
                method("delete", "DELETE", "/accounts/{id}", payload={"id": "integer"}),
            ),
            title="Bank API",
        )
"""

from __future__ import annotations

import keyword
import re
from dataclasses import dataclass, field

from genspine.evaluator import Root, context

VERBS = ("GET", "POST", "PUT", "PATCH", "DELETE")

# Attribute type → (Python annotation, OpenAPI schema type)
TYPES = {
    "string": ("str", "string"),
    "integer": ("int", "integer"),
    "number": ("float", "number"),
    "boolean": ("bool", "boolean"),
}

_PATH_PARAM = re.compile(r"{([^{}]*)}")


def _is_name(value: str) -> bool:
    return value.isidentifier() and not keyword.iskeyword(value)


@dataclass
class MethodExpr:
    """One service method exposed over HTTP."""

    name: str
    verb: str
    path: str
    description: str = ""
    payload: dict[str, str] = field(default_factory=dict)
    result: dict[str, str] | None = None

    @property
    def params(self) -> list[str]:
        """Path parameter names in order of appearance."""
        return _PATH_PARAM.findall(self.path)

    @property
    def body(self) -> list[str]:
        """Payload attributes not carried by the path."""
        params = set(self.params)
        return [name for name in self.payload if name not in params]

    def validate(self, service: str) -> list[str]:
        where = f'method "{self.name}" of service "{service}"'
        errors = []
        if not _is_name(self.name):
            errors.append(f"{where}: name is not a valid identifier")
        if self.verb not in VERBS:
            errors.append(f'{where}: unsupported HTTP verb "{self.verb}"')
        if not self.path.startswith("/"):
            errors.append(f'{where}: path "{self.path}" must start with "/"')
        for param in self.params:
            if param not in self.payload:
                errors.append(f'{where}: path parameter "{param}" is not a payload attribute')
        for attr, typ in {**self.payload, **(self.result or {})}.items():
            if not _is_name(attr):
                errors.append(f'{where}: attribute "{attr}" is not a valid identifier')
            if typ not in TYPES:
                errors.append(f'{where}: attribute "{attr}" has unknown type "{typ}"')
        return errors


@dataclass
class ServiceExpr:
    """A named group of methods."""

    name: str
    methods: list[MethodExpr] = field(default_factory=list)
    description: str = ""

    def validate(self) -> list[str]:
        errors = []
        if not _is_name(self.name):
            errors.append(f'service "{self.name}": name is not a valid identifier')
        if not self.methods:
            errors.append(f'service "{self.name}": no method defined')
        seen: set[str] = set()
        routes: set[tuple[str, str]] = set()
        for m in self.methods:
            if m.name in seen:
                errors.append(f'service "{self.name}": method "{m.name}" is defined more than once')
            seen.add(m.name)
            route = (m.verb, _PATH_PARAM.sub("{}", m.path))
            if route in routes:
                errors.append(f'service "{self.name}": route {m.verb} {m.path} is defined more than once')
            routes.add(route)
            errors.extend(m.validate(self.name))
        return errors


@dataclass
class APIExpr(Root):
    """The root of an HTTP service description."""

    name: str
    services: list[ServiceExpr] = field(default_factory=list)
    title: str = ""
    version: str = "1.0"
    description: str = ""

    def validate(self) -> list[str]:
        errors = []
        if not self.name:
            errors.append("api: name must not be empty")
        if not self.services:
            errors.append(f'api "{self.name}": no service defined')
        seen: set[str] = set()
        for svc in self.services:
            if svc.name in seen:
                errors.append(f'api "{self.name}": service "{svc.name}" is defined more than once')
            seen.add(svc.name)
            errors.extend(svc.validate())
        return errors

    def finalize(self) -> None:
        if not self.title:
            self.title = self.name


def method(
    name: str,
    verb: str,
    path: str,
    *,
    description: str = "",
    payload: dict[str, str] | None = None,
    result: dict[str, str] | None = None,
) -> MethodExpr:
    """Declare a method bound to ``verb path``."""
    return MethodExpr(
        name=name,
        verb=verb.upper(),
        path=path,
        description=description,
        payload=dict(payload or {}),
        result=dict(result) if result is not None else None,
    )


def service(name: str, *methods: MethodExpr, description: str = "") -> ServiceExpr:
    """Declare a service exposing ``methods``."""
    return ServiceExpr(name=name, methods=list(methods), description=description)


def api(
    name: str,
    *services: ServiceExpr,
    title: str = "",
    version: str = "1.0",
    description: str = "",
) -> APIExpr:
    """Declare the API root and register it for evaluation."""
    root = APIExpr(
        name=name,
        services=list(services),
        title=title,
        version=version,
        description=description,
    )
    context.register(root)
    return root


def python_type(name: str) -> str:
    """Python annotation of an attribute type."""
    return TYPES[name][0]


def openapi_type(name: str) -> str:
    """OpenAPI schema type of an attribute type."""
    return TYPES[name][1]
