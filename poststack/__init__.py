"""poststack – schema introspection and a typed fluent query client for PostgreSQL.

Public API
----------
``discover``
    Inspect a catalog and return a fully-resolved ``Schema``.

``ApiClient``
    Build per-table / per-function query builders from a ``Schema`` and
    execute them through a ``Transport``.

``render_select``
    Render a ``SelectQuery`` to parameterized SQL for a dialect.

Re-exported types
-----------------
``Schema`` and its parts, ``InspectOptions``, ``UdtOptions``, the
query/command models, transports, compilers, and all error classes.

Dialects
--------
Compilers ship for PostgreSQL (``%(name)s`` placeholders) and SQLite
(``:name`` placeholders).  ``DbTransport`` picks one through
``CompilerFactory`` from the engine's dialect name.
"""

from __future__ import annotations

from poststack.client import ApiClient, TableApi
from poststack.compile import (
    CommandBuilder,
    CompiledSQL,
    CompilerFactory,
    PostgresCompiler,
    QueryBuilder,
    SQLCompiler,
    SQLiteCompiler,
)
from poststack.config import InspectOptions, ProjectConfig, UdtOptions
from poststack.errors import (
    CompilationError,
    CyclicReferenceError,
    InvalidCommandError,
    InvalidOperatorError,
    InvalidOrderDirectionError,
    OperationNotImplementedError,
    PoststackError,
    ProjectConfigError,
    UnknownColumnError,
    UnresolvedReferenceError,
    UnsupportedTypeError,
)
from poststack.inspect import CatalogAccess, SqlAlchemyCatalog, discover, resolve_schema
from poststack.query import (
    BinaryCondition,
    CallCommand,
    DeleteCommand,
    InsertCommand,
    OrderBy,
    SelectQuery,
    UnaryCondition,
    UpdateCommand,
)
from poststack.schema import (
    Attribute,
    CompositeType,
    EnumType,
    Routine,
    Schema,
    SchemaDraft,
    Table,
)
from poststack.transport import DbTransport, Transport, WebTransport

__all__ = [
    # Core pipeline
    "discover",
    "resolve_schema",
    "render_select",
    # Configuration
    "InspectOptions",
    "UdtOptions",
    "ProjectConfig",
    # Catalog access
    "CatalogAccess",
    "SqlAlchemyCatalog",
    # Schema types
    "Schema",
    "SchemaDraft",
    "Attribute",
    "CompositeType",
    "EnumType",
    "Routine",
    "Table",
    # Queries and commands
    "SelectQuery",
    "InsertCommand",
    "UpdateCommand",
    "DeleteCommand",
    "CallCommand",
    "OrderBy",
    "UnaryCondition",
    "BinaryCondition",
    # Client
    "ApiClient",
    "TableApi",
    # Compilation
    "CompiledSQL",
    "SQLCompiler",
    "CompilerFactory",
    "PostgresCompiler",
    "SQLiteCompiler",
    "QueryBuilder",
    "CommandBuilder",
    # Transports
    "Transport",
    "DbTransport",
    "WebTransport",
    # Errors
    "PoststackError",
    "UnsupportedTypeError",
    "UnresolvedReferenceError",
    "CyclicReferenceError",
    "InvalidOrderDirectionError",
    "InvalidOperatorError",
    "UnknownColumnError",
    "InvalidCommandError",
    "OperationNotImplementedError",
    "CompilationError",
    "ProjectConfigError",
]


def render_select(
    query: SelectQuery,
    dialect: str = "postgres",
    inline_values: bool = False,
) -> CompiledSQL:
    """Render a select query to SQL.

    Example::

        compiled = poststack.render_select(query, dialect="sqlite")
        cursor.execute(compiled.sql, compiled.params)

    Args:
        query: The select query.
        dialect: A registered dialect name (``'postgres'`` or ``'sqlite'``).
        inline_values: Render values as escaped literals (for display)
            instead of placeholders.

    Returns:
        ``CompiledSQL`` with ``sql`` string, ``params``, and ``dialect``.

    Raises:
        CompilationError: If the dialect is not registered.
    """
    compiler = CompilerFactory.create(dialect)
    return QueryBuilder(compiler, inline_values=inline_values).build(query)
