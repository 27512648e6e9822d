"""Typed attribute type models.

Every attribute in a resolved :class:`~poststack.schema.snapshot.Schema`
carries a ``ResolvedType`` - a closed union discriminated by ``kind``::

    {"kind": "boolean"}
    {"kind": "array", "element": {"kind": "enum", "name": "status"}}

Before resolution, attributes carry a ``DraftType`` instead.  ``DraftType``
adds :class:`UnresolvedUdt`, a forward reference to a composite or enum type
that has not been looked up yet, and :class:`DraftArrayType`, whose element
may itself be unresolved.  The two unions are distinct so an unresolved
reference cannot be stored in a resolved schema.
"""
from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

_FROZEN = ConfigDict(extra="forbid", frozen=True)


# ---------------------------------------------------------------------------
# Scalar types (shared by both unions)
# ---------------------------------------------------------------------------


class BooleanType(BaseModel):
    """A boolean attribute."""

    model_config = _FROZEN

    kind: Literal["boolean"] = "boolean"


class NumberType(BaseModel):
    """A numeric attribute (integers, numeric, money, allow-listed UDTs)."""

    model_config = _FROZEN

    kind: Literal["number"] = "number"


class StringType(BaseModel):
    """A textual attribute (text, uuid, citext, allow-listed UDTs)."""

    model_config = _FROZEN

    kind: Literal["string"] = "string"


class DateType(BaseModel):
    """A timestamp-family attribute."""

    model_config = _FROZEN

    kind: Literal["date"] = "date"


# ---------------------------------------------------------------------------
# References
# ---------------------------------------------------------------------------


class EnumRef(BaseModel):
    """A reference to an enumeration in the same schema."""

    model_config = _FROZEN

    kind: Literal["enum"] = "enum"
    name: str


class CompositeRef(BaseModel):
    """A reference to a composite type in the same schema."""

    model_config = _FROZEN

    kind: Literal["composite"] = "composite"
    name: str


class ArrayType(BaseModel):
    """An array of a resolved element type."""

    model_config = _FROZEN

    kind: Literal["array"] = "array"
    element: ResolvedType


ResolvedType = Annotated[
    Union[
        BooleanType,
        NumberType,
        StringType,
        DateType,
        ArrayType,
        EnumRef,
        CompositeRef,
    ],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Pre-resolution types
# ---------------------------------------------------------------------------


class UnresolvedUdt(BaseModel):
    """A user-defined type known only by name, pending resolution."""

    model_config = _FROZEN

    kind: Literal["unresolved"] = "unresolved"
    name: str


class DraftArrayType(BaseModel):
    """An array whose element may still be unresolved."""

    model_config = _FROZEN

    kind: Literal["array"] = "array"
    element: DraftType


DraftType = Annotated[
    Union[
        BooleanType,
        NumberType,
        StringType,
        DateType,
        DraftArrayType,
        EnumRef,
        CompositeRef,
        UnresolvedUdt,
    ],
    Field(discriminator="kind"),
]

ArrayType.model_rebuild()
DraftArrayType.model_rebuild()


def to_draft(resolved: ResolvedType) -> DraftType:
    """Return the draft equivalent of an already-resolved type."""
    if isinstance(resolved, ArrayType):
        return DraftArrayType(element=to_draft(resolved.element))
    return resolved


def describe(t: ResolvedType | DraftType) -> str:
    """Return a short human-readable rendering, e.g. ``status[]``."""
    if isinstance(t, (ArrayType, DraftArrayType)):
        return f"{describe(t.element)}[]"
    if isinstance(t, UnresolvedUdt):
        return f"?{t.name}"
    if isinstance(t, (EnumRef, CompositeRef)):
        return t.name
    return t.kind
