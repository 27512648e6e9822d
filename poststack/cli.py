"""poststack command line.

Usage
-----
Print a human-readable schema summary::

    poststack inspect -d mydb -U me -v

Print the schema interchange JSON (or write it with ``-o``)::

    poststack inspect-json -o schema.json

Connection defaults come from ``DB_HOST``, ``DB_PORT``, ``DB_NAME``,
``DB_USER`` and ``DB_PASS`` (or ``DB_PASSWORD``). UDT allow-lists and a default
output path come from the nearest ``.poststack.json`` unless ``-f`` names one.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

from poststack.config import (
    ConnectionSettings,
    InspectOptions,
    ProjectConfig,
    find_project,
    load_project,
)
from poststack.errors import PoststackError
from poststack.inspect.catalog import CatalogAccess, SqlAlchemyCatalog
from poststack.inspect.discover import discover
from poststack.schema.snapshot import Attribute, Schema
from poststack.schema.types import describe

logger = logging.getLogger(__name__)

COMMANDS = {
    "inspect": "print human schema information",
    "inspect-json": "print schema in JSON",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poststack",
        description="Inspect a PostgreSQL schema.",
        epilog="\n".join(f"  {name:<14}{text}" for name, text in COMMANDS.items()),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", choices=sorted(COMMANDS), help="command to run")
    parser.add_argument("-f", "--file", help="path to project file (.poststack.json)")
    parser.add_argument("-o", "--output", help="send results to file")
    parser.add_argument("-H", "--host", help="database hostname")
    parser.add_argument("-p", "--port", type=int, help="database port")
    parser.add_argument("-d", "--dbname", help="database name")
    parser.add_argument("-U", "--user", help="database user name")
    parser.add_argument("-s", "--schema", default="public", help="catalog schema to inspect")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="log progress (-vv for debug)"
    )
    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def connection_settings(args: argparse.Namespace) -> ConnectionSettings:
    """Environment settings with command-line overrides applied."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "name": args.dbname,
        "user": args.user,
    }
    return ConnectionSettings(**{k: v for k, v in overrides.items() if v is not None})


def format_schema(schema: Schema) -> str:
    """Render a human-readable summary of ``schema``."""

    def attr(a: Attribute) -> str:
        return f"{a.name} {describe(a.type)}{'?' if a.nullable else ''}"

    lines: list[str] = []
    for enum in schema.enums:
        lines.append(f"enum {enum.name}: {', '.join(enum.labels)}")
    for composite in schema.types:
        lines.append(f"type {composite.name}: {', '.join(attr(a) for a in composite.attributes)}")
    for table in schema.tables:
        lines.append(f"table {table.name}: {', '.join(attr(a) for a in table.columns)}")
    for func in schema.functions:
        params = ", ".join(attr(p) for p in func.parameters)
        lines.append(f"function {func.name}({params}) -> {describe(func.return_type)}")
    return "\n".join(lines)


def run(
    command: str,
    catalog: CatalogAccess,
    options: InspectOptions,
    output: str | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Inspect ``catalog`` and emit the result for ``command``."""
    stdout = stdout or sys.stdout
    schema = discover(catalog, options)

    if command == "inspect-json":
        text = json.dumps(schema.model_dump(mode="json"), indent=2)
    else:
        text = format_schema(schema)

    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        logger.info("wrote %s", output)
    else:
        print(text, file=stdout)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    from sqlalchemy import create_engine

    try:
        project = load_project(args.file) if args.file else find_project() or ProjectConfig()
        options = InspectOptions(udts=project.udts, schema_name=args.schema)
        output = args.output or project.output
        engine = create_engine(connection_settings(args).url())
        try:
            logger.info("connecting")
            run(args.command, SqlAlchemyCatalog(engine, args.schema), options, output)
        finally:
            engine.dispose()
    except PoststackError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
