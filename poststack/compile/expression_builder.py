"""Value and condition SQL compilers.

``ValueBuilder`` is the only place a value enters SQL text: either as a
named placeholder (the value itself goes to ``RuntimeContext.params``) or,
in inline mode, through :meth:`SQLCompiler.format_literal`.
``ConditionBuilder`` renders WHERE conditions on top of it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from poststack.compile.context import CompilationContext
from poststack.errors import CompilationError
from poststack.query.conditions import (
    BINARY_OPERATORS,
    UNARY_OPERATORS,
    BinaryCondition,
    Condition,
    UnaryCondition,
)


# ---------------------------------------------------------------------------
# Runtime parameter accumulator (shared across all sub-builders in one run)
# ---------------------------------------------------------------------------


@dataclass
class RuntimeContext:
    """Accumulates named parameters during a single compilation run."""

    params: dict[str, Any] = field(default_factory=dict)
    _counter: int = 0

    def add_value(self, value: Any) -> str:
        """Store a literal value and return its placeholder name."""
        name = f"param_{self._counter}"
        self._counter += 1
        self.params[name] = value
        return name


# ---------------------------------------------------------------------------
# Value builder
# ---------------------------------------------------------------------------


class ValueBuilder:
    """Places values into SQL text.

    Args:
        ctx: Static compilation context.
        runtime: Shared parameter accumulator for this statement.
    """

    def __init__(self, ctx: CompilationContext, runtime: RuntimeContext) -> None:
        self._ctx = ctx
        self._runtime = runtime

    def build(self, value: Any) -> str:
        if self._ctx.inline_values:
            return self._ctx.compiler.format_literal(value)
        name = self._runtime.add_value(value)
        return self._ctx.compiler.param_placeholder(name)


# ---------------------------------------------------------------------------
# Condition builder
# ---------------------------------------------------------------------------


class ConditionBuilder:
    """Compiles :data:`~poststack.query.conditions.Condition` models to SQL.

    Args:
        ctx: Static compilation context.
        value_builder: Builder used for binary condition values.
    """

    def __init__(self, ctx: CompilationContext, value_builder: ValueBuilder) -> None:
        self._ctx = ctx
        self._value = value_builder

    def build(self, condition: Condition) -> str:
        """Compile a single condition to a SQL fragment."""
        column = self._ctx.compiler.quote_identifier(condition.column)
        if isinstance(condition, UnaryCondition):
            self._check(condition.operator, UNARY_OPERATORS)
            return f"{column} {condition.operator.upper()}"
        if isinstance(condition, BinaryCondition):
            self._check(condition.operator, BINARY_OPERATORS)
            return f"{column} {condition.operator} {self._value.build(condition.value)}"
        raise CompilationError(
            f"Unknown condition type: {type(condition).__name__}", clause="WHERE"
        )

    def build_all(self, conditions: list[Condition]) -> str:
        """Compile conditions joined with ``AND``."""
        return " AND ".join(self.build(c) for c in conditions)

    @staticmethod
    def _check(operator: str, allowed: tuple[str, ...]) -> None:
        # Operators are written into the text verbatim.
        if operator not in allowed:
            raise CompilationError(f"Unknown operator '{operator}'.", clause="WHERE")
