"""PostgreSQL dialect compiler."""

from __future__ import annotations

from typing import Any

from poststack.compile.base import SQLCompiler


class PostgresCompiler(SQLCompiler):
    """Compiles queries to PostgreSQL-flavoured parameterized SQL.

    Parameter style: ``%(name)s`` - compatible with ``psycopg2`` and
    ``psycopg`` named-parameter execution.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def param_placeholder(self, name: str) -> str:
        return f"%({name})s"

    def format_literal(self, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            items = ", ".join(self.format_literal(v) for v in value)
            return f"ARRAY[{items}]"
        return super().format_literal(value)
