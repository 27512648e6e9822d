"""Clause-level SQL builders.

Each class handles exactly one SQL clause.  Builders that render values
share the statement's :class:`~poststack.compile.expression_builder.ValueBuilder`
so placeholder names stay unique across the whole statement.

Classes
-------
SelectClauseBuilder     - ``SELECT <columns | *>``
WhereClauseBuilder      - ``WHERE <cond> AND <cond> ...``
OrderByClauseBuilder    - ``ORDER BY <columns> ASC|DESC``
ReturningClauseBuilder  - ``RETURNING <columns | *>``
"""
from __future__ import annotations

from poststack.compile.context import CompilationContext
from poststack.compile.expression_builder import ConditionBuilder
from poststack.errors import CompilationError
from poststack.query.commands import OrderBy
from poststack.query.conditions import Condition


def _column_list(ctx: CompilationContext, columns: list[str] | None) -> str:
    if not columns or columns == ["*"]:
        return "*"
    return ", ".join(ctx.compiler.quote_identifier(c) for c in columns)


class SelectClauseBuilder:
    """Builds the ``SELECT …`` clause."""

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, selected: list[str] | None) -> str:
        return f"SELECT {_column_list(self._ctx, selected)}"


class WhereClauseBuilder:
    """Builds the ``WHERE …`` clause; empty when there are no conditions."""

    def __init__(self, condition_builder: ConditionBuilder) -> None:
        self._cond = condition_builder

    def build(self, conditions: list[Condition] | None) -> str:
        if not conditions:
            return ""
        return f"WHERE {self._cond.build_all(conditions)}"


class OrderByClauseBuilder:
    """Builds the ``ORDER BY …`` clause."""

    _DIRECTIONS = {"asc": "ASC", "desc": "DESC"}

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, order_by: OrderBy | None) -> str:
        if order_by is None:
            return ""
        direction = self._DIRECTIONS.get(order_by.direction)
        if direction is None:
            raise CompilationError(
                f"Invalid order direction '{order_by.direction}'.", clause="ORDER BY"
            )
        if not order_by.columns:
            raise CompilationError("ORDER BY has no columns.", clause="ORDER BY")
        quote = self._ctx.compiler.quote_identifier
        columns = ", ".join(quote(c) for c in order_by.columns)
        return f"ORDER BY {columns} {direction}"


class ReturningClauseBuilder:
    """Builds the ``RETURNING …`` clause; empty when nothing is returned."""

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, returning: list[str] | None) -> str:
        if not returning:
            return ""
        return f"RETURNING {_column_list(self._ctx, returning)}"
