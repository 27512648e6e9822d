"""Compilation context value object.

Packages the ``(compiler, inline_values)`` pair shared by the query
renderer, the command renderer and all clause-level sub-builders.
"""
from __future__ import annotations

from dataclasses import dataclass

from poststack.compile.base import SQLCompiler


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context for a single compilation run.

    Attributes:
        compiler: Dialect-specific SQL compiler instance.
        inline_values: Render values as escaped literals instead of
            placeholders (for display; execution uses placeholders).
    """

    compiler: SQLCompiler
    inline_values: bool = False
