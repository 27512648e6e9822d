"""poststack compilation layer: queries and commands → parameterized SQL."""
from poststack.compile.base import CompiledSQL, SQLCompiler
from poststack.compile.builder import QueryBuilder
from poststack.compile.commands import CommandBuilder
from poststack.compile.postgres import PostgresCompiler
from poststack.compile.registry import CompilerFactory
from poststack.compile.sqlite import SQLiteCompiler

CompilerFactory.register_class("postgres", PostgresCompiler)
CompilerFactory.register_class("sqlite", SQLiteCompiler)

__all__ = [
    "CompiledSQL",
    "SQLCompiler",
    "QueryBuilder",
    "CommandBuilder",
    "CompilerFactory",
    "PostgresCompiler",
    "SQLiteCompiler",
]
