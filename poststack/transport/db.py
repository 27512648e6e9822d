"""Direct-execution transport over a SQLAlchemy engine.

Queries and commands are compiled with the dialect compiler matching the
engine and executed with ``exec_driver_sql``, so the compiled placeholder
style goes straight to the DB-API driver::

    from sqlalchemy import create_engine
    from poststack.transport.db import DbTransport

    transport = DbTransport(create_engine("postgresql+psycopg://user:pw@host/db"))
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from poststack.compile.base import CompiledSQL, SQLCompiler
from poststack.compile.builder import QueryBuilder
from poststack.compile.commands import CommandBuilder
from poststack.compile.registry import CompilerFactory
from poststack.query.commands import (
    CallCommand,
    DeleteCommand,
    InsertCommand,
    SelectQuery,
    UpdateCommand,
)
from poststack.transport.base import Transport

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


class DbTransport(Transport):
    """Renders SQL and executes it against a database.

    Each select runs on its own connection; each insert / update / delete /
    call runs in its own ``engine.begin()`` block and is committed on success.

    Args:
        engine: A SQLAlchemy :class:`~sqlalchemy.engine.Engine`.
        compiler: Dialect compiler; defaults to the one registered for the
            engine's dialect name.
    """

    def __init__(self, engine: Engine, compiler: SQLCompiler | None = None) -> None:
        self._engine = engine
        compiler = compiler or CompilerFactory.create(engine.dialect.name)
        self._queries = QueryBuilder(compiler)
        self._commands = CommandBuilder(compiler)

    def select(self, query: SelectQuery) -> list[dict[str, Any]]:
        compiled = self._queries.build(query)
        with self._engine.connect() as conn:
            return self._execute(conn, compiled)

    def insert(self, command: InsertCommand) -> list[dict[str, Any]]:
        return self._mutate(self._commands.build_insert(command), bool(command.returning))

    def update(self, command: UpdateCommand) -> list[dict[str, Any]]:
        return self._mutate(self._commands.build_update(command), bool(command.returning))

    def delete(self, command: DeleteCommand) -> list[dict[str, Any]]:
        return self._mutate(self._commands.build_delete(command), bool(command.returning))

    def call(self, command: CallCommand) -> list[dict[str, Any]]:
        with self._engine.begin() as conn:
            return self._execute(conn, self._commands.build_call(command))

    def _mutate(self, compiled: CompiledSQL, returns_rows: bool) -> list[dict[str, Any]]:
        with self._engine.begin() as conn:
            if returns_rows:
                return self._execute(conn, compiled)
            logger.debug("executing %s with %s", compiled.sql, compiled.params)
            conn.exec_driver_sql(compiled.sql, compiled.params)
            return []

    @staticmethod
    def _execute(conn, compiled: CompiledSQL) -> list[dict[str, Any]]:
        logger.debug("executing %s with %s", compiled.sql, compiled.params)
        result = conn.exec_driver_sql(compiled.sql, compiled.params)
        return [dict(row) for row in result.mappings()]
