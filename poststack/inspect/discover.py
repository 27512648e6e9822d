"""Introspection entry point.

``discover`` reads enumerations, composite types, tables and routines from a
:class:`~poststack.inspect.catalog.CatalogAccess`, deduces each attribute's
type, and resolves forward references into a :class:`Schema`::

    from poststack import InspectOptions, discover
    from poststack.inspect.catalog import SqlAlchemyCatalog

    schema = discover(SqlAlchemyCatalog(engine), InspectOptions())

Per-type, per-table and per-routine catalog queries run concurrently on a
bounded thread pool.  Completion order is irrelevant: collections are
assembled in catalog order and attributes are sorted by ordinal position.
Resolution runs once, after every query has finished.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, TypeVar

from poststack.config import InspectOptions
from poststack.inspect.catalog import CatalogAccess, EnumLabelRecord
from poststack.inspect.deduce import (
    force_deduce_type,
    make_attribute,
    make_parameter,
    normalize_udt_name,
)
from poststack.inspect.resolver import resolve_schema
from poststack.schema.draft import (
    DraftAttribute,
    DraftCompositeType,
    DraftRoutine,
    DraftTable,
    SchemaDraft,
)
from poststack.schema.snapshot import EnumField, EnumType, Schema

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def snake_to_pascal(word: str) -> str:
    """Convert ``order_status`` to ``OrderStatus``."""
    return "".join(part[:1].upper() + part[1:] for part in word.split("_") if part)


def discover(catalog: CatalogAccess, options: InspectOptions | None = None) -> Schema:
    """Inspect ``catalog`` and return its fully-resolved schema.

    Args:
        catalog: Catalog access collaborator.
        options: Allow-lists and concurrency limit; defaults to
            ``InspectOptions()``.

    Returns:
        The resolved :class:`Schema`.

    Raises:
        UnsupportedTypeError: If a catalog type cannot be deduced.
        UnresolvedReferenceError: If a user-defined type reference cannot be
            resolved (``CyclicReferenceError`` for cyclic composite types).
    """
    options = options or InspectOptions()
    draft = discover_draft(catalog, options)

    logger.info("resolving types")
    resolution = resolve_schema(draft)
    logger.info("resolved %d attribute types", resolution.resolved)
    return resolution.schema


def discover_draft(catalog: CatalogAccess, options: InspectOptions) -> SchemaDraft:
    """Read the catalog into an unresolved :class:`SchemaDraft`."""
    udts = options.udts

    with ThreadPoolExecutor(
        max_workers=options.max_concurrency, thread_name_prefix="poststack-inspect"
    ) as pool:

        def fan_out(items: list[T], fetch: Callable[[T], R]) -> list[R]:
            # map() yields in submission order regardless of completion order.
            return list(pool.map(fetch, items))

        logger.info("discovering enum types")
        enums = _group_enums(catalog.enum_labels())
        logger.info("found %d enum types", len(enums))

        logger.info("discovering composite types")
        type_names = catalog.composite_type_names()
        type_attrs = fan_out(type_names, catalog.composite_attributes)
        types = [
            DraftCompositeType(
                name=name,
                display_name=snake_to_pascal(name),
                attributes=_sorted([make_attribute(r, udts) for r in records]),
            )
            for name, records in zip(type_names, type_attrs)
        ]
        logger.info("found %d composite types", len(types))

        logger.info("discovering tables")
        table_names = catalog.table_names()
        table_cols = fan_out(table_names, catalog.table_columns)
        tables = [
            DraftTable(
                name=name,
                display_name=snake_to_pascal(name),
                columns=_sorted([make_attribute(r, udts) for r in records]),
            )
            for name, records in zip(table_names, table_cols)
        ]
        logger.info("found %d tables", len(tables))

        logger.info("discovering functions")
        routines = catalog.routines()
        params = fan_out([r.specific_name for r in routines], catalog.routine_parameters)
        functions = [
            DraftRoutine(
                name=routine.name,
                parameters=_sorted([make_parameter(p, udts) for p in records]),
                return_type=force_deduce_type(
                    routine.data_type,
                    normalize_udt_name(routine.udt_name, False)[0],
                    udts,
                    attribute=routine.name,
                ),
            )
            for routine, records in zip(routines, params)
        ]
        logger.info("found %d functions", len(functions))

    return SchemaDraft(enums=enums, types=types, tables=tables, functions=functions)


def _sorted(attributes: list[DraftAttribute]) -> list[DraftAttribute]:
    return sorted(attributes, key=lambda a: a.order)


def _group_enums(records: list[EnumLabelRecord]) -> list[EnumType]:
    """Group enum label rows by enum, labels ordered by sort order."""
    grouped: dict[str, list[EnumField]] = {}
    for record in records:
        grouped.setdefault(record.enum_name, []).append(
            EnumField(name=record.name, order=record.order)
        )
    return [
        EnumType(
            name=name,
            display_name=snake_to_pascal(name),
            fields=tuple(sorted(fields, key=lambda f: f.order)),
        )
        for name, fields in grouped.items()
    ]
