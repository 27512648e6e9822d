"""Phase 1: per-attribute type deduction.

Turns a raw catalog type (``data_type``) and its optional underlying type
name (``udt_name``) into a :data:`~poststack.schema.types.DraftType`.  Rules
are tried in a fixed precedence order:

1. boolean
2. number  (known numeric names, then the ``udts.number`` allow-list)
3. string  (known text names, then the ``udts.string`` allow-list)
4. date    (timestamp family)
5. ``USER-DEFINED`` -> :class:`UnresolvedUdt`
6. ``ARRAY``        -> :class:`DraftArrayType` of the deduced element

Anything else is an :class:`~poststack.errors.UnsupportedTypeError`.
"""
from __future__ import annotations

from poststack.config import UdtOptions
from poststack.errors import UnsupportedTypeError
from poststack.inspect.catalog import AttributeRecord, ParameterRecord
from poststack.schema.draft import DraftAttribute
from poststack.schema.types import (
    BooleanType,
    DateType,
    DraftArrayType,
    DraftType,
    NumberType,
    StringType,
    UnresolvedUdt,
)

USER_DEFINED = "USER-DEFINED"
ARRAY = "ARRAY"

#: Domain naming convention: ``foo_not_null`` is a NOT NULL domain over ``foo``.
NOT_NULL_SUFFIX = "_not_null"
#: Catalog prefix on the element type name of an array (``_int4`` for ``int4[]``).
ARRAY_ELEMENT_PREFIX = "_"

BOOLEAN_TYPES: frozenset[str] = frozenset({"boolean", "bool"})

NUMBER_TYPES: frozenset[str] = frozenset({
    "int2",
    "int4",
    "int8",
    "smallint",
    "integer",
    "bigint",
    "money",
    "numeric",
    "real",
    "double precision",
    "float4",
    "float8",
})

STRING_TYPES: frozenset[str] = frozenset({
    "text",
    "text_not_blank",
    "uuid",
    "citext",
    "character varying",
    "varchar",
    "character",
    "bpchar",
    "name",
})

DATE_TYPES: frozenset[str] = frozenset({
    "date",
    "timestamp",
    "timestamptz",
    "timestamp without time zone",
    "timestamp with time zone",
})


def _matches(known: frozenset[str] | list[str], *names: str | None) -> bool:
    return any(name is not None and name in known for name in names)


def deduce_type(
    data_type: str,
    udt_name: str | None,
    udts: UdtOptions | None = None,
) -> DraftType | None:
    """Deduce a draft type from a raw catalog type.

    Args:
        data_type: Raw catalog type name.
        udt_name: Underlying / element type name, already normalised.
        udts: Number and string allow-lists.

    Returns:
        The deduced type, or ``None`` when no rule matches.
    """
    udts = udts or UdtOptions()
    # For arrays the underlying name is the element type, not the attribute's.
    names = (data_type,) if data_type == ARRAY else (data_type, udt_name)

    if _matches(BOOLEAN_TYPES, *names):
        return BooleanType()
    if _matches(NUMBER_TYPES, *names) or _matches(udts.number, *names):
        return NumberType()
    if _matches(STRING_TYPES, *names) or _matches(udts.string, *names):
        return StringType()
    if _matches(DATE_TYPES, *names):
        return DateType()
    if data_type == USER_DEFINED and udt_name is not None:
        return UnresolvedUdt(name=udt_name)
    if data_type == ARRAY and udt_name is not None:
        if udt_name.startswith(ARRAY_ELEMENT_PREFIX):
            element = deduce_type(ARRAY, udt_name[len(ARRAY_ELEMENT_PREFIX):], udts)
        else:
            element = deduce_type(udt_name, None, udts)
        return DraftArrayType(element=element or UnresolvedUdt(name=udt_name))
    return None


def force_deduce_type(
    data_type: str,
    udt_name: str | None,
    udts: UdtOptions | None = None,
    attribute: str | None = None,
) -> DraftType:
    """Like :func:`deduce_type` but raise when no rule matches.

    Raises:
        UnsupportedTypeError: If the type cannot be deduced.
    """
    deduced = deduce_type(data_type, udt_name, udts)
    if deduced is None:
        raise UnsupportedTypeError(data_type, udt_name, attribute)
    return deduced


def normalize_udt_name(udt_name: str | None, nullable: bool) -> tuple[str | None, bool]:
    """Strip naming markers from an underlying type name.

    A ``_not_null`` suffix is removed and forces ``nullable`` to ``False``;
    one leading array-element prefix is removed.

    Returns:
        ``(udt_name, nullable)`` after normalisation.
    """
    if udt_name is None:
        return None, nullable
    if udt_name.endswith(NOT_NULL_SUFFIX):
        udt_name = udt_name[: -len(NOT_NULL_SUFFIX)]
        nullable = False
    if udt_name.startswith(ARRAY_ELEMENT_PREFIX):
        udt_name = udt_name[len(ARRAY_ELEMENT_PREFIX):]
    return udt_name, nullable


def make_attribute(record: AttributeRecord, udts: UdtOptions | None = None) -> DraftAttribute:
    """Build a draft attribute from a column / composite attribute record.

    Raises:
        UnsupportedTypeError: If the attribute's type cannot be deduced.
    """
    udt_name, nullable = normalize_udt_name(record.udt_name, record.nullable)
    return DraftAttribute(
        name=record.name,
        order=record.order,
        nullable=nullable,
        type=force_deduce_type(record.data_type, udt_name, udts, attribute=record.name),
    )


def make_parameter(record: ParameterRecord, udts: UdtOptions | None = None) -> DraftAttribute:
    """Build a draft attribute from a routine parameter record.

    Parameters are never nullable; unnamed parameters are called ``argN``.
    """
    name = record.name or f"arg{record.order}"
    udt_name, _ = normalize_udt_name(record.udt_name, False)
    return DraftAttribute(
        name=name,
        order=record.order,
        nullable=False,
        type=force_deduce_type(record.data_type, udt_name, udts, attribute=name),
    )
