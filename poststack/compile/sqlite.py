"""SQLite dialect compiler."""
from __future__ import annotations

from poststack.compile.base import SQLCompiler


class SQLiteCompiler(SQLCompiler):
    """Compiles queries to SQLite-flavoured parameterized SQL.

    Parameter style: ``:name`` - compatible with Python's built-in
    ``sqlite3`` named-parameter execution (``cursor.execute(sql, dict)``).

    SQLite has no boolean type; booleans are stored as ``1`` / ``0``.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def param_placeholder(self, name: str) -> str:
        return f":{name}"

    def format_boolean(self, value: bool) -> str:
        return "1" if value else "0"
