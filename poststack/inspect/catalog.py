"""Catalog access: raw records and the SQLAlchemy-backed implementation.

:func:`~poststack.inspect.discover` consumes any object satisfying the
:class:`CatalogAccess` protocol.  :class:`SqlAlchemyCatalog` implements it
for PostgreSQL via ``information_schema`` and ``pg_catalog``.

Install a PostgreSQL driver before using it against a live database::

    pip install "poststack[postgres]"

Example::

    from sqlalchemy import create_engine
    from poststack.inspect.catalog import SqlAlchemyCatalog

    engine = create_engine("postgresql+psycopg://user:pw@host/db")
    catalog = SqlAlchemyCatalog(engine, schema_name="public")
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from sqlalchemy import Engine


class EnumLabelRecord(BaseModel):
    """One row of ``pg_enum``: a label of an enumeration."""

    model_config = ConfigDict(extra="forbid")

    enum_name: str
    name: str
    order: float


class AttributeRecord(BaseModel):
    """A column / composite attribute as reported by the catalog.

    Attributes:
        name: Attribute name.
        order: Ordinal position.
        nullable: ``is_nullable = 'YES'``.
        data_type: Raw catalog type (``integer``, ``ARRAY``, ``USER-DEFINED``...).
        udt_name: Underlying type name (``int4``, ``_text``, ``order_status``...).
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    order: int
    nullable: bool
    data_type: str
    udt_name: str | None = None


class RoutineRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    specific_name: str
    data_type: str
    udt_name: str | None = None


class ParameterRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None
    order: int
    data_type: str
    udt_name: str | None = None


class CatalogAccess(Protocol):
    """Read-only access to a database catalog.

    Implementations must be safe to call from several threads at once;
    ``discover`` fans the per-type, per-table and per-routine calls out
    over a bounded thread pool.
    """

    def enum_labels(self) -> list[EnumLabelRecord]: ...

    def composite_type_names(self) -> list[str]: ...

    def composite_attributes(self, type_name: str) -> list[AttributeRecord]: ...

    def table_names(self) -> list[str]: ...

    def table_columns(self, table_name: str) -> list[AttributeRecord]: ...

    def routines(self) -> list[RoutineRecord]: ...

    def routine_parameters(self, specific_name: str) -> list[ParameterRecord]: ...


# ---------------------------------------------------------------------------
# PostgreSQL catalog queries
# ---------------------------------------------------------------------------

_ENUM_LABELS_SQL = """
select e.enumlabel as name, e.enumsortorder as "order", t.typname as enum_name
  from pg_catalog.pg_enum e
  join pg_catalog.pg_type t on e.enumtypid = t.oid
  join pg_catalog.pg_namespace n on t.typnamespace = n.oid
 where n.nspname = :schema
 order by t.typname, e.enumsortorder
"""

_COMPOSITE_TYPES_SQL = """
select i.user_defined_type_name as name
  from information_schema.user_defined_types i
 where i.user_defined_type_schema = :schema
 order by i.user_defined_type_name
"""

_COMPOSITE_ATTRIBUTES_SQL = """
select i.attribute_name as name, i.ordinal_position as "order",
       i.is_nullable = 'YES' as nullable, i.data_type, i.attribute_udt_name as udt_name
  from information_schema.attributes i
 where i.udt_schema = :schema
   and i.udt_name = :name
 order by i.ordinal_position
"""

_TABLES_SQL = """
select table_name as name
  from information_schema.tables
 where table_schema = :schema
 order by table_name
"""

_TABLE_COLUMNS_SQL = """
select i.column_name as name, i.ordinal_position as "order",
       i.is_nullable = 'YES' as nullable, i.data_type,
       case when i.data_type in ('USER-DEFINED', 'ARRAY') then i.udt_name
            else coalesce(i.domain_name, i.udt_name) end as udt_name
  from information_schema.columns i
 where i.table_schema = :schema
   and i.table_name = :name
 order by i.ordinal_position
"""

_ROUTINES_SQL = """
select routine_name as name, data_type, udt_name, specific_name
  from information_schema.routines
 where specific_schema = :schema
 order by routine_name, specific_name
"""

_ROUTINE_PARAMETERS_SQL = """
select parameter_name as name, data_type, udt_name, ordinal_position as "order"
  from information_schema.parameters
 where specific_schema = :schema
   and specific_name = :name
 order by ordinal_position
"""


class SqlAlchemyCatalog:
    """:class:`CatalogAccess` over a SQLAlchemy engine connected to PostgreSQL.

    Each call checks out its own connection from the engine, so calls from
    different threads do not share a connection.  Catalog names are always
    bound as parameters.

    Args:
        engine: A SQLAlchemy :class:`~sqlalchemy.engine.Engine`.
        schema_name: The catalog schema to inspect.
    """

    def __init__(self, engine: Engine, schema_name: str = "public") -> None:
        self._engine = engine
        self._schema = schema_name

    def _fetch(self, sql: str, **params: object) -> list[dict]:
        from sqlalchemy import text

        with self._engine.connect() as conn:
            result = conn.execute(text(sql), {"schema": self._schema, **params})
            return [dict(row) for row in result.mappings()]

    def enum_labels(self) -> list[EnumLabelRecord]:
        return [EnumLabelRecord.model_validate(r) for r in self._fetch(_ENUM_LABELS_SQL)]

    def composite_type_names(self) -> list[str]:
        return [r["name"] for r in self._fetch(_COMPOSITE_TYPES_SQL)]

    def composite_attributes(self, type_name: str) -> list[AttributeRecord]:
        rows = self._fetch(_COMPOSITE_ATTRIBUTES_SQL, name=type_name)
        return [AttributeRecord.model_validate(r) for r in rows]

    def table_names(self) -> list[str]:
        return [r["name"] for r in self._fetch(_TABLES_SQL)]

    def table_columns(self, table_name: str) -> list[AttributeRecord]:
        rows = self._fetch(_TABLE_COLUMNS_SQL, name=table_name)
        return [AttributeRecord.model_validate(r) for r in rows]

    def routines(self) -> list[RoutineRecord]:
        return [RoutineRecord.model_validate(r) for r in self._fetch(_ROUTINES_SQL)]

    def routine_parameters(self, specific_name: str) -> list[ParameterRecord]:
        rows = self._fetch(_ROUTINE_PARAMETERS_SQL, name=specific_name)
        return [ParameterRecord.model_validate(r) for r in rows]
