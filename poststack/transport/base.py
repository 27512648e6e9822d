"""Transport interface consumed by the fluent client.

Every operation raises :class:`~poststack.errors.OperationNotImplementedError`
unless a subclass overrides it, so a transport can back only the operations
it supports.
"""
from __future__ import annotations

from typing import Any

from poststack.errors import OperationNotImplementedError
from poststack.query.commands import (
    CallCommand,
    DeleteCommand,
    InsertCommand,
    SelectQuery,
    UpdateCommand,
)


class Transport:
    """Executes queries and commands built by :class:`~poststack.client.ApiClient`."""

    def select(self, query: SelectQuery) -> list[dict[str, Any]]:
        raise OperationNotImplementedError("select", type(self).__name__)

    def insert(self, command: InsertCommand) -> list[dict[str, Any]]:
        raise OperationNotImplementedError("insert", type(self).__name__)

    def update(self, command: UpdateCommand) -> list[dict[str, Any]]:
        raise OperationNotImplementedError("update", type(self).__name__)

    def delete(self, command: DeleteCommand) -> list[dict[str, Any]]:
        raise OperationNotImplementedError("delete", type(self).__name__)

    def call(self, command: CallCommand) -> Any:
        raise OperationNotImplementedError("call", type(self).__name__)
