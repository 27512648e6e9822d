"""poststack schema models: resolved Schema, drafts and attribute types."""
from poststack.schema.draft import (
    DraftAttribute,
    DraftCompositeType,
    DraftRoutine,
    DraftTable,
    SchemaDraft,
)
from poststack.schema.snapshot import (
    Attribute,
    CompositeType,
    EnumField,
    EnumType,
    Routine,
    Schema,
    Table,
)
from poststack.schema.types import (
    ArrayType,
    BooleanType,
    CompositeRef,
    DateType,
    DraftArrayType,
    DraftType,
    EnumRef,
    NumberType,
    ResolvedType,
    StringType,
    UnresolvedUdt,
)

__all__ = [
    "ArrayType",
    "BooleanType",
    "CompositeRef",
    "DateType",
    "DraftArrayType",
    "DraftType",
    "EnumRef",
    "NumberType",
    "ResolvedType",
    "StringType",
    "UnresolvedUdt",
    "Attribute",
    "CompositeType",
    "EnumField",
    "EnumType",
    "Routine",
    "Schema",
    "Table",
    "DraftAttribute",
    "DraftCompositeType",
    "DraftRoutine",
    "DraftTable",
    "SchemaDraft",
]
