"""Schema-driven fluent client.

``ApiClient`` exposes one :class:`TableApi` per table and one callable per
routine of a resolved :class:`~poststack.schema.snapshot.Schema`::

    client = ApiClient(schema, DbTransport(engine))

    client.users.select(["id", "email"]).where("status", "active").fetch()
    client.users.insert({"email": "a@example.com"}).returning("*").execute()
    client.users.update({"status": "inactive"}).where("id", 7).execute()
    client.users.delete().where("deleted_at", "is not null").execute()
    client.add_user_to_group(7, 3)

Names that are not Python identifiers are reachable through
:meth:`ApiClient.table` and :meth:`ApiClient.function`.
"""
from __future__ import annotations

from typing import Any, Callable, Literal

from poststack.client.builders import (
    ALL,
    DeleteBuilder,
    InsertBuilder,
    SelectBuilder,
    UpdateBuilder,
)
from poststack.query.commands import CallCommand
from poststack.schema.snapshot import Routine, Schema, Table
from poststack.transport.base import Transport


class TableApi:
    """Entry points for building queries and commands against one table."""

    def __init__(self, transport: Transport, table: Table) -> None:
        self.transport = transport
        self.table = table

    def select(self, columns: Literal["*"] | list[str] = ALL) -> SelectBuilder:
        return SelectBuilder(self.transport, self.table, columns)

    def insert(
        self,
        row_or_columns: dict[str, Any] | list[str],
        rows: list[dict[str, Any]] | None = None,
    ) -> InsertBuilder:
        """Insert one row (``insert(row)``) or many (``insert(columns, rows)``)."""
        return InsertBuilder(self.transport, self.table, row_or_columns, rows)

    def update(self, row: dict[str, Any]) -> UpdateBuilder:
        return UpdateBuilder(self.transport, self.table, row)

    def delete(self) -> DeleteBuilder:
        return DeleteBuilder(self.transport, self.table)

    def __repr__(self) -> str:
        return f"TableApi({self.table.name!r})"


def function_api(transport: Transport, routine: Routine) -> Callable[..., Any]:
    """Return a callable forwarding its positional arguments to ``transport.call``."""

    def call(*parameters: Any) -> Any:
        return transport.call(
            CallCommand(procedure=routine.name, parameters=list(parameters))
        )

    call.__name__ = routine.name
    call.__doc__ = f"Call {routine.name}({', '.join(p.name for p in routine.parameters)})."
    return call


class ApiClient:
    """Query-building client generated from a schema.

    Tables take precedence over routines of the same name for attribute
    access; both stay reachable through :meth:`table` and :meth:`function`.

    Args:
        schema: The resolved schema.
        transport: Transport executing every query and command.
    """

    def __init__(self, schema: Schema, transport: Transport) -> None:
        self.schema = schema
        self.transport = transport
        self._tables = {t.name: TableApi(transport, t) for t in schema.tables}
        self._functions: dict[str, Callable[..., Any]] = {}
        for f in schema.functions:
            # Overloads share a name; the first one listed wins.
            self._functions.setdefault(f.name, function_api(transport, f))

    def table(self, name: str) -> TableApi:
        """Returns the TableApi for ``name``.

        Raises:
            KeyError: If the schema has no such table.
        """
        return self._tables[name]

    def function(self, name: str) -> Callable[..., Any]:
        """Returns the callable for routine ``name``.

        Raises:
            KeyError: If the schema has no such routine.
        """
        return self._functions[name]

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._tables:
            return self._tables[name]
        if name in self._functions:
            return self._functions[name]
        raise AttributeError(f"Schema has no table or function named '{name}'.")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._tables) | set(self._functions))
