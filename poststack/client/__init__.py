"""poststack fluent client."""
from poststack.client.api import ApiClient, TableApi, function_api
from poststack.client.builders import (
    DeleteBuilder,
    InsertBuilder,
    SelectBuilder,
    UpdateBuilder,
    make_condition,
)

__all__ = [
    "ApiClient",
    "TableApi",
    "function_api",
    "DeleteBuilder",
    "InsertBuilder",
    "SelectBuilder",
    "UpdateBuilder",
    "make_condition",
]
