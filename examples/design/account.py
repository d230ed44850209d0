"""Account service description.

Generate from the ``examples`` directory:

    genspine gen server openapi design.account -o out
"""

from genspine.design import api, method, service

api(
    "bank",
    service(
        "account",
        method(
            "list",
            "GET",
            "/accounts",
            description="List the identifiers of all accounts.",
            result={"ids": "string"},
        ),
        method(
            "show",
            "GET",
            "/accounts/{id}",
            description="Show one account.",
            payload={"id": "integer"},
            result={"id": "integer", "name": "string", "balance": "number"},
        ),
        method(
            "create",
            "POST",
            "/accounts",
            description="Open an account.",
            payload={"name": "string"},
            result={"id": "integer"},
        ),
        method(
            "delete",
            "DELETE",
            "/accounts/{id}",
            description="Close an account.",
            payload={"id": "integer"},
        ),
        description="The account service manages bank accounts.",
    ),
    title="Bank API",
    description="A minimal bank.",
)
