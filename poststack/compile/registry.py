"""Compiler registry.

``CompilerFactory`` maps dialect names to
:class:`~poststack.compile.base.SQLCompiler` implementations.
:class:`~poststack.transport.db.DbTransport` looks a compiler up by the
SQLAlchemy engine's dialect name, so ``postgresql`` engines get the
``postgres`` compiler and ``sqlite`` engines the ``sqlite`` one.
"""

from __future__ import annotations

from typing import ClassVar

from poststack.compile.base import SQLCompiler
from poststack.errors import CompilationError


class CompilerFactory:
    """Registry mapping dialect names to :class:`SQLCompiler` classes.

    Example::

        compiler = CompilerFactory.create("postgresql")
    """

    _compilers: ClassVar[dict[str, type[SQLCompiler]]] = {}
    _aliases: ClassVar[dict[str, str]] = {"postgresql": "postgres"}

    @classmethod
    def register_class(cls, name: str, compiler_cls: type[SQLCompiler]) -> None:
        """Register ``compiler_cls`` for dialect ``name``, replacing any previous one."""
        cls._compilers[name] = compiler_cls

    @classmethod
    def create(cls, name: str) -> SQLCompiler:
        """Instantiate the compiler registered for ``name``.

        ``postgresql`` (SQLAlchemy's dialect name) is accepted for
        ``postgres``.

        Raises:
            CompilationError: If no compiler is registered for ``name``.
        """
        compiler_cls = cls._compilers.get(cls._aliases.get(name, name))
        if compiler_cls is None:
            raise CompilationError(
                f"Unsupported dialect: '{name}'. Registered dialects: {cls.registered_targets()}."
            )
        return compiler_cls()

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered dialect names."""
        return sorted(cls._compilers)
