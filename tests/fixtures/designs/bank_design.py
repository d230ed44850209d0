"""Bank API: one service, four methods."""

from genspine.design import api, method, service

api(
    "bank",
    service(
        "account",
        method(
            "list",
            "GET",
            "/accounts",
            description="List all accounts.",
            result={"ids": "string"},
        ),
        method(
            "show",
            "GET",
            "/accounts/{id}",
            payload={"id": "integer"},
            result={"id": "integer", "name": "string", "balance": "number"},
        ),
        method("create", "POST", "/accounts", payload={"name": "string"}, result={"id": "integer"}),
        method("delete", "DELETE", "/accounts/{id}", payload={"id": "integer"}),
        description="Manage bank accounts.",
    ),
    title="Bank API",
    version="2.0",
)
