"""Query and command builders.

Each builder owns one query/command model instance.  Chain methods mutate
it and return the same builder; a terminal ``fetch()`` / ``execute()``
hands it to the transport.  Builders are single-use and must not be shared
between threads: create one per call site::

    rows = client.users.select(["id"]).where("status", "=", "active").limit(10).fetch()

Column names are checked against the table when they are given, so a typo
fails at the call that introduced it rather than at execution.
"""
from __future__ import annotations

from typing import Any, Literal

from poststack.errors import InvalidOperatorError, InvalidOrderDirectionError, UnknownColumnError
from poststack.query.commands import (
    DeleteCommand,
    InsertCommand,
    OrderBy,
    SelectQuery,
    UpdateCommand,
)
from poststack.query.conditions import (
    BINARY_OPERATORS,
    BinaryCondition,
    Condition,
    UnaryCondition,
    is_binary_operator,
    is_unary_operator,
)
from poststack.schema.snapshot import Table
from poststack.transport.base import Transport

ALL = "*"

_MISSING: Any = object()


def _check_columns(table: Table, columns: list[str]) -> None:
    allowed = table.column_names
    for column in columns:
        if column not in allowed:
            raise UnknownColumnError(table.name, column, allowed)


def _column_list(columns: list[str]) -> list[str]:
    if isinstance(columns, str):
        raise TypeError(f"columns must be a list of names, not the string {columns!r}")
    return list(columns)


def _returning(table: Table, columns: Literal["*"] | list[str]) -> list[str]:
    if columns == ALL:
        return [ALL]
    columns = _column_list(columns)
    _check_columns(table, columns)
    return columns


def make_condition(column: str, operator: Any, value: Any = _MISSING) -> Condition:
    """Build a condition from the three ``where`` call forms.

    - ``(column, value)`` → ``column = value``
    - ``(column, unary_operator)`` → ``column is null`` / ``is not null``
    - ``(column, binary_operator, value)`` → ``column <op> value``

    Raises:
        InvalidOperatorError: If a value is given with an operator that is
            not a binary operator.
    """
    if value is not _MISSING:
        if not is_binary_operator(operator):
            raise InvalidOperatorError(operator, list(BINARY_OPERATORS))
        return BinaryCondition(column=column, operator=operator, value=value)
    if is_unary_operator(operator):
        return UnaryCondition(column=column, operator=operator)
    return BinaryCondition(column=column, operator="=", value=operator)


class _WhereMixin:
    """``where(...)`` chaining shared by select, update and delete builders."""

    table: Table

    def _conditions(self) -> list[Condition]:
        raise NotImplementedError

    def where(self, column: str, operator: Any, value: Any = _MISSING):
        """Append a condition and return this builder.

        Call as ``where(column, value)``, ``where(column, "is null")`` or
        ``where(column, ">=", value)``; see :func:`make_condition`.
        """
        _check_columns(self.table, [column])
        self._conditions().append(make_condition(column, operator, value))
        return self


class SelectBuilder(_WhereMixin):
    """Select query builder.

    Args:
        transport: Transport executing the query.
        table: The table being queried.
        columns: ``"*"`` or a list of column names.
    """

    def __init__(
        self,
        transport: Transport,
        table: Table,
        columns: Literal["*"] | list[str] = ALL,
    ) -> None:
        self.transport = transport
        self.table = table
        self.query = SelectQuery(table=table.name)
        if columns != ALL:
            columns = _column_list(columns)
            _check_columns(table, columns)
            self.query.selected = columns

    def _conditions(self) -> list[Condition]:
        if self.query.conditions is None:
            self.query.conditions = []
        return self.query.conditions

    def limit(self, n: int) -> SelectBuilder:
        self.query.limit = n
        return self

    def offset(self, n: int) -> SelectBuilder:
        self.query.offset = n
        return self

    def order_by(self, columns: list[str], direction: str = "asc") -> SelectBuilder:
        """Set the ordering, replacing any previous one.

        Raises:
            InvalidOrderDirectionError: If ``direction`` is not ``"asc"`` or
                ``"desc"``.
            TypeError: If ``columns`` is a single string.
        """
        if direction not in ("asc", "desc"):
            raise InvalidOrderDirectionError(direction)
        columns = _column_list(columns)
        _check_columns(self.table, columns)
        self.query.order_by = OrderBy(columns=columns, direction=direction)
        return self

    def fetch(self) -> list[dict[str, Any]]:
        return self.transport.select(self.query)


class InsertBuilder:
    """Insert command builder.

    Accepts either a single row mapping, or a list of columns and a list of
    row mappings providing those columns.
    """

    def __init__(
        self,
        transport: Transport,
        table: Table,
        row_or_columns: dict[str, Any] | list[str],
        rows: list[dict[str, Any]] | None = None,
    ) -> None:
        self.transport = transport
        self.table = table
        if isinstance(row_or_columns, dict):
            if rows is not None:
                raise TypeError("rows must not be given with a single row mapping")
            columns = list(row_or_columns)
            rows = [dict(row_or_columns)]
        else:
            columns = _column_list(row_or_columns)
            rows = [dict(r) for r in rows or []]
        _check_columns(table, columns)
        self.command = InsertCommand(table=table.name, columns=columns, rows=rows)

    def returning(self, columns: Literal["*"] | list[str]) -> InsertBuilder:
        self.command.returning = _returning(self.table, columns)
        return self

    def execute(self) -> list[dict[str, Any]]:
        return self.transport.insert(self.command)


class UpdateBuilder(_WhereMixin):
    """Update command builder."""

    def __init__(self, transport: Transport, table: Table, row: dict[str, Any]) -> None:
        self.transport = transport
        self.table = table
        _check_columns(table, list(row))
        self.command = UpdateCommand(table=table.name, values=dict(row))

    def _conditions(self) -> list[Condition]:
        if self.command.conditions is None:
            self.command.conditions = []
        return self.command.conditions

    def returning(self, columns: Literal["*"] | list[str]) -> UpdateBuilder:
        self.command.returning = _returning(self.table, columns)
        return self

    def execute(self) -> list[dict[str, Any]]:
        return self.transport.update(self.command)


class DeleteBuilder(_WhereMixin):
    """Delete command builder."""

    def __init__(self, transport: Transport, table: Table) -> None:
        self.transport = transport
        self.table = table
        self.command = DeleteCommand(table=table.name)

    def _conditions(self) -> list[Condition]:
        if self.command.conditions is None:
            self.command.conditions = []
        return self.command.conditions

    def returning(self, columns: Literal["*"] | list[str]) -> DeleteBuilder:
        self.command.returning = _returning(self.table, columns)
        return self

    def execute(self) -> list[dict[str, Any]]:
        return self.transport.delete(self.command)
