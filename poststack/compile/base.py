"""Compiler abstractions: CompiledSQL and the SQLCompiler ABC.

The Template Method pattern (GoF) is used:
- ``SQLCompiler`` defines the primitives every renderer goes through:
  identifier quoting, parameter placeholders and literal formatting.
- ``PostgresCompiler`` and ``SQLiteCompiler`` override the dialect-specific
  steps.

Identifiers and values reach SQL text only through these primitives.
"""
from __future__ import annotations

import datetime
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from poststack.errors import CompilationError


@dataclass
class CompiledSQL:
    """The output of a successful compilation.

    Attributes:
        sql: The compiled SQL string with named placeholders.
        params: Values for the placeholders.  Empty when values were
            rendered inline.
        dialect: The target dialect (``'postgres'`` or ``'sqlite'``).
    """

    sql: str
    params: dict[str, Any]
    dialect: str


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers."""

    @abstractmethod
    def param_placeholder(self, name: str) -> str:
        """Return the SQL placeholder string for a named parameter.

        Args:
            name: Parameter name (e.g. ``'param_0'``).

        Returns:
            Dialect-specific placeholder string.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (``'postgres'`` or ``'sqlite'``)."""

    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Args:
            name: Unquoted identifier (table, column or function name).

        Returns:
            Quoted identifier.
        """
        escaped = name.replace('"', '""')
        return f'"{escaped}"'

    def format_boolean(self, value: bool) -> str:
        return "TRUE" if value else "FALSE"

    def format_literal(self, value: Any) -> str:
        """Return ``value`` as an escaped SQL literal.

        Used when rendering with inline values instead of placeholders.

        Raises:
            CompilationError: If the value has no literal form.
        """
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return self.format_boolean(value)
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise CompilationError(f"Cannot format non-finite number {value!r}.")
            return repr(value)
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise CompilationError(f"Cannot format non-finite number {value!r}.")
            return str(value)
        if isinstance(value, (datetime.date, datetime.time)):
            return self.format_string(value.isoformat())
        if isinstance(value, str):
            return self.format_string(value)
        raise CompilationError(
            f"Cannot format value of type {type(value).__name__} as a SQL literal."
        )

    def format_string(self, value: str) -> str:
        escaped = value.replace("'", "''")
        return f"'{escaped}'"
