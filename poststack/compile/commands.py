"""Command → SQL compilation for direct execution.

``CommandBuilder`` renders insert, update, delete and call commands.  It is
used by :class:`~poststack.transport.db.DbTransport`; remote transports
forward commands unrendered.

Insert encoding: ``columns`` fixes the VALUES order and every row must
provide every listed column (extra keys are ignored)::

    InsertCommand(table="users", columns=["id", "name"],
                  rows=[{"id": 1, "name": "ann"}, {"id": 2, "name": "bo"}])
    # INSERT INTO "users" ("id", "name")
    # VALUES (%(param_0)s, %(param_1)s), (%(param_2)s, %(param_3)s)
"""
from __future__ import annotations

from poststack.compile.base import CompiledSQL, SQLCompiler
from poststack.compile.clause_builders import ReturningClauseBuilder, WhereClauseBuilder
from poststack.compile.context import CompilationContext
from poststack.compile.expression_builder import (
    ConditionBuilder,
    RuntimeContext,
    ValueBuilder,
)
from poststack.errors import InvalidCommandError
from poststack.query.commands import (
    CallCommand,
    DeleteCommand,
    InsertCommand,
    UpdateCommand,
)


class CommandBuilder:
    """Compiles insert / update / delete / call commands to SQL.

    Args:
        compiler: Dialect-specific compiler instance.
        inline_values: Render values as escaped literals instead of
            placeholders.
    """

    def __init__(self, compiler: SQLCompiler, inline_values: bool = False) -> None:
        self._ctx = CompilationContext(compiler=compiler, inline_values=inline_values)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_insert(self, command: InsertCommand) -> CompiledSQL:
        """Compile an insert command.

        Raises:
            InvalidCommandError: If there are no columns or rows, or a row
                lacks a listed column.
        """
        if not command.columns:
            raise InvalidCommandError("Insert has no columns.", command="insert")
        if not command.rows:
            raise InvalidCommandError("Insert has no rows.", command="insert")

        runtime = RuntimeContext()
        value = ValueBuilder(self._ctx, runtime)
        quote = self._ctx.compiler.quote_identifier

        tuples: list[str] = []
        for index, row in enumerate(command.rows):
            missing = [c for c in command.columns if c not in row]
            if missing:
                raise InvalidCommandError(
                    f"Insert row {index} is missing columns: {missing}.",
                    command="insert",
                )
            tuples.append(f"({', '.join(value.build(row[c]) for c in command.columns)})")

        columns = ", ".join(quote(c) for c in command.columns)
        parts = [
            f"INSERT INTO {quote(command.table)} ({columns})",
            f"VALUES {', '.join(tuples)}",
        ]
        self._append(parts, ReturningClauseBuilder(self._ctx).build(command.returning))
        return self._compiled(parts, runtime)

    def build_update(self, command: UpdateCommand) -> CompiledSQL:
        """Compile an update command.

        Raises:
            InvalidCommandError: If there are no values to set.
        """
        if not command.values:
            raise InvalidCommandError("Update has no values.", command="update")

        runtime = RuntimeContext()
        value = ValueBuilder(self._ctx, runtime)
        quote = self._ctx.compiler.quote_identifier

        assignments = ", ".join(
            f"{quote(column)} = {value.build(v)}" for column, v in command.values.items()
        )
        parts = [f"UPDATE {quote(command.table)}", f"SET {assignments}"]
        self._append(parts, self._where(runtime, command.conditions))
        self._append(parts, ReturningClauseBuilder(self._ctx).build(command.returning))
        return self._compiled(parts, runtime)

    def build_delete(self, command: DeleteCommand) -> CompiledSQL:
        """Compile a delete command."""
        runtime = RuntimeContext()
        quote = self._ctx.compiler.quote_identifier

        parts = [f"DELETE FROM {quote(command.table)}"]
        self._append(parts, self._where(runtime, command.conditions))
        self._append(parts, ReturningClauseBuilder(self._ctx).build(command.returning))
        return self._compiled(parts, runtime)

    def build_call(self, command: CallCommand) -> CompiledSQL:
        """Compile a function call as ``SELECT * FROM fn(...)``."""
        runtime = RuntimeContext()
        value = ValueBuilder(self._ctx, runtime)
        quote = self._ctx.compiler.quote_identifier

        args = ", ".join(value.build(p) for p in command.parameters or [])
        return self._compiled([f"SELECT * FROM {quote(command.procedure)}({args})"], runtime)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _where(self, runtime: RuntimeContext, conditions) -> str:
        builder = ConditionBuilder(self._ctx, ValueBuilder(self._ctx, runtime))
        return WhereClauseBuilder(builder).build(conditions)

    @staticmethod
    def _append(parts: list[str], clause: str) -> None:
        if clause:
            parts.append(clause)

    def _compiled(self, parts: list[str], runtime: RuntimeContext) -> CompiledSQL:
        return CompiledSQL(
            sql="\n".join(parts),
            params=runtime.params,
            dialect=self._ctx.compiler.dialect_name,
        )
