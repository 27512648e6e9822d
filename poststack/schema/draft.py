"""Pre-resolution schema models.

A ``SchemaDraft`` is what catalog discovery assembles: the same shape as
:class:`~poststack.schema.snapshot.Schema`, except attribute types are
``DraftType`` values that may still hold :class:`UnresolvedUdt` forward
references.  Only :func:`~poststack.inspect.resolver.resolve_schema` turns a
draft into a ``Schema``.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from poststack.schema.snapshot import EnumType, Schema
from poststack.schema.types import DraftType, to_draft


class DraftAttribute(BaseModel):
    """An attribute whose type may still be unresolved."""

    model_config = ConfigDict(extra="forbid")

    name: str
    order: int
    nullable: bool = True
    type: DraftType


class DraftCompositeType(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    display_name: str
    attributes: list[DraftAttribute] = Field(default_factory=list)


class DraftTable(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    display_name: str
    columns: list[DraftAttribute] = Field(default_factory=list)


class DraftRoutine(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    parameters: list[DraftAttribute] = Field(default_factory=list)
    return_type: DraftType


class SchemaDraft(BaseModel):
    """Raw, unresolved schema facts produced by catalog discovery."""

    model_config = ConfigDict(extra="forbid")

    enums: list[EnumType] = Field(default_factory=list)
    types: list[DraftCompositeType] = Field(default_factory=list)
    tables: list[DraftTable] = Field(default_factory=list)
    functions: list[DraftRoutine] = Field(default_factory=list)

    @classmethod
    def from_schema(cls, schema: Schema) -> SchemaDraft:
        """Build a draft from an already-resolved schema.

        Resolving the result reports zero resolved attributes and yields a
        schema equal to ``schema``.
        """

        def attrs(items) -> list[DraftAttribute]:
            return [
                DraftAttribute(
                    name=a.name,
                    order=a.order,
                    nullable=a.nullable,
                    type=to_draft(a.type),
                )
                for a in items
            ]

        return cls(
            enums=list(schema.enums),
            types=[
                DraftCompositeType(
                    name=t.name,
                    display_name=t.display_name,
                    attributes=attrs(t.attributes),
                )
                for t in schema.types
            ],
            tables=[
                DraftTable(
                    name=t.name,
                    display_name=t.display_name,
                    columns=attrs(t.columns),
                )
                for t in schema.tables
            ],
            functions=[
                DraftRoutine(
                    name=f.name,
                    parameters=attrs(f.parameters),
                    return_type=to_draft(f.return_type),
                )
                for f in schema.functions
            ],
        )
