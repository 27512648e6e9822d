"""Pydantic models for the resolved Schema.

The Schema describes the enumerations, composite types, tables and routines
found in the catalog.  It is produced by :func:`~poststack.inspect.discover`
and is immutable: every model is frozen and every collection is a tuple.

Serialised with ``model_dump(mode="json")`` it is the interchange shape
passed across process boundaries (e.g. to a code generator)::

    {"enums": [...], "types": [...], "tables": [...], "functions": [...]}
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from poststack.schema.types import ResolvedType

_FROZEN = ConfigDict(extra="forbid", frozen=True)


class EnumField(BaseModel):
    """One label of an enumeration.

    Attributes:
        name: The label.
        order: Catalog sort order; defines enumeration order.
    """

    model_config = _FROZEN

    name: str
    order: float


class EnumType(BaseModel):
    """An enumeration with ordered labels."""

    model_config = _FROZEN

    name: str
    display_name: str
    fields: tuple[EnumField, ...] = ()

    @property
    def labels(self) -> list[str]:
        """Returns labels in enumeration order."""
        return [f.name for f in self.fields]


class Attribute(BaseModel):
    """A column, composite attribute or routine parameter.

    Attributes:
        name: Attribute name.
        order: Ordinal position (1-based, as reported by the catalog).
        nullable: Whether the attribute accepts NULL.
        type: The resolved attribute type.
    """

    model_config = _FROZEN

    name: str
    order: int
    nullable: bool = True
    type: ResolvedType


class CompositeType(BaseModel):
    """A user-defined structured type."""

    model_config = _FROZEN

    name: str
    display_name: str
    attributes: tuple[Attribute, ...] = ()


class Table(BaseModel):
    """A table and its columns, ordered by ordinal position."""

    model_config = _FROZEN

    name: str
    display_name: str
    columns: tuple[Attribute, ...] = ()

    @property
    def column_names(self) -> list[str]:
        """Returns all column names for this table."""
        return [c.name for c in self.columns]

    def get_column(self, name: str) -> Attribute | None:
        """Returns the column with the given name, or ``None``."""
        for col in self.columns:
            if col.name == name:
                return col
        return None


class Routine(BaseModel):
    """A database function or procedure."""

    model_config = _FROZEN

    name: str
    parameters: tuple[Attribute, ...] = ()
    return_type: ResolvedType


class Schema(BaseModel):
    """The fully-resolved description of a database schema.

    Attributes:
        enums: All enumerations.
        types: All composite types.
        tables: All tables.
        functions: All routines.
    """

    model_config = _FROZEN

    enums: tuple[EnumType, ...] = ()
    types: tuple[CompositeType, ...] = ()
    tables: tuple[Table, ...] = ()
    functions: tuple[Routine, ...] = ()

    def get_enum(self, name: str) -> EnumType | None:
        """Returns the EnumType with the given name, or ``None``."""
        return next((e for e in self.enums if e.name == name), None)

    def get_type(self, name: str) -> CompositeType | None:
        """Returns the CompositeType with the given name, or ``None``."""
        return next((t for t in self.types if t.name == name), None)

    def get_table(self, name: str) -> Table | None:
        """Returns the Table with the given name, or ``None``."""
        return next((t for t in self.tables if t.name == name), None)

    def get_function(self, name: str) -> Routine | None:
        """Returns the first Routine with the given name, or ``None``.

        Overloaded routines share a name; only the first listed is returned.
        """
        return next((f for f in self.functions if f.name == name), None)

    @property
    def table_names(self) -> list[str]:
        """Returns all table names in the schema."""
        return [t.name for t in self.tables]
