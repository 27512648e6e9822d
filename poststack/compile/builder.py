"""Core SelectQuery → SQL compilation logic.

``QueryBuilder`` is the top-level orchestrator for select queries.  It
wires together the clause-level sub-builders and assembles the statement.
All dialect-specific behaviour is delegated to the injected ``SQLCompiler``.

Sub-builder hierarchy
---------------------
QueryBuilder
  ├── ValueBuilder            (expression_builder.py)
  ├── ConditionBuilder        (expression_builder.py)
  ├── SelectClauseBuilder     (clause_builders.py)
  ├── WhereClauseBuilder      (clause_builders.py)
  └── OrderByClauseBuilder    (clause_builders.py)

A fresh :class:`~poststack.compile.expression_builder.RuntimeContext` is
created per ``build()`` call, so one builder can compile many queries.
"""

from __future__ import annotations

from poststack.compile.base import CompiledSQL, SQLCompiler
from poststack.compile.clause_builders import (
    OrderByClauseBuilder,
    SelectClauseBuilder,
    WhereClauseBuilder,
)
from poststack.compile.context import CompilationContext
from poststack.compile.expression_builder import (
    ConditionBuilder,
    RuntimeContext,
    ValueBuilder,
)
from poststack.query.commands import SelectQuery


class QueryBuilder:
    """Compiles a :class:`SelectQuery` to SQL.

    Args:
        compiler: Dialect-specific compiler instance.
        inline_values: Render condition values as escaped literals instead
            of placeholders.
    """

    def __init__(self, compiler: SQLCompiler, inline_values: bool = False) -> None:
        self._ctx = CompilationContext(compiler=compiler, inline_values=inline_values)

    def build(self, query: SelectQuery) -> CompiledSQL:
        """Compile ``query`` to SQL.

        Clauses are emitted only when present: ``WHERE`` when there is at
        least one condition, ``ORDER BY`` when an ordering was set, and
        ``LIMIT`` / ``OFFSET`` when non-zero.

        Returns:
            :class:`~poststack.compile.base.CompiledSQL` with ``sql`` string
            and ``params``.
        """
        runtime = RuntimeContext()
        conditions = ConditionBuilder(self._ctx, ValueBuilder(self._ctx, runtime))
        quote = self._ctx.compiler.quote_identifier

        parts: list[str] = [
            SelectClauseBuilder(self._ctx).build(query.selected),
            f"FROM {quote(query.table)}",
        ]

        where_sql = WhereClauseBuilder(conditions).build(query.conditions)
        if where_sql:
            parts.append(where_sql)

        order_sql = OrderByClauseBuilder(self._ctx).build(query.order_by)
        if order_sql:
            parts.append(order_sql)

        if query.limit:
            parts.append(f"LIMIT {int(query.limit)}")

        if query.offset:
            parts.append(f"OFFSET {int(query.offset)}")

        return CompiledSQL(
            sql="\n".join(parts),
            params=runtime.params,
            dialect=self._ctx.compiler.dialect_name,
        )
