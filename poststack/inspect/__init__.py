"""poststack inspection layer: catalog -> draft -> resolved Schema."""
from poststack.inspect.catalog import (
    AttributeRecord,
    CatalogAccess,
    EnumLabelRecord,
    ParameterRecord,
    RoutineRecord,
    SqlAlchemyCatalog,
)
from poststack.inspect.deduce import deduce_type, force_deduce_type, make_attribute
from poststack.inspect.discover import discover, discover_draft, snake_to_pascal
from poststack.inspect.resolver import Resolution, TypeResolver, resolve_schema

__all__ = [
    "AttributeRecord",
    "CatalogAccess",
    "EnumLabelRecord",
    "ParameterRecord",
    "RoutineRecord",
    "SqlAlchemyCatalog",
    "deduce_type",
    "force_deduce_type",
    "make_attribute",
    "discover",
    "discover_draft",
    "snake_to_pascal",
    "Resolution",
    "TypeResolver",
    "resolve_schema",
]
