"""Unit tests for global type resolution."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from poststack.errors import CyclicReferenceError, UnresolvedReferenceError
from poststack.inspect.resolver import resolve_schema
from poststack.schema.draft import (
    DraftAttribute,
    DraftCompositeType,
    DraftRoutine,
    DraftTable,
    SchemaDraft,
)
from poststack.schema.snapshot import EnumField, EnumType
from poststack.schema.types import (
    ArrayType,
    CompositeRef,
    DraftArrayType,
    EnumRef,
    NumberType,
    StringType,
    UnresolvedUdt,
)

STATUS = EnumType(
    name="status",
    display_name="Status",
    fields=(EnumField(name="active", order=1), EnumField(name="inactive", order=2)),
)


def _attr(name: str, type_, order: int = 1) -> DraftAttribute:
    return DraftAttribute(name=name, order=order, type=type_)


def _composite(name: str, *attributes: DraftAttribute) -> DraftCompositeType:
    return DraftCompositeType(name=name, display_name=name.title(), attributes=list(attributes))


def _table(name: str, *columns: DraftAttribute) -> DraftTable:
    return DraftTable(name=name, display_name=name.title(), columns=list(columns))


def test_enum_reference_resolved():
    draft = SchemaDraft(
        enums=[STATUS],
        tables=[_table("users", _attr("status", UnresolvedUdt(name="status")))],
    )
    resolution = resolve_schema(draft)
    column = resolution.schema.get_table("users").get_column("status")
    assert column.type == EnumRef(name="status")
    assert resolution.resolved == 1


def test_composite_reference_resolved_regardless_of_order():
    # The referencing type comes before the referenced one.
    draft = SchemaDraft(
        types=[
            _composite("order_line", _attr("price", UnresolvedUdt(name="money_amount"))),
            _composite("money_amount", _attr("value", NumberType())),
        ],
    )
    schema = resolve_schema(draft).schema
    assert schema.get_type("order_line").attributes[0].type == CompositeRef(name="money_amount")


def test_composite_preferred_over_enum_of_same_name():
    draft = SchemaDraft(
        enums=[STATUS],
        types=[_composite("status", _attr("code", StringType()))],
        tables=[_table("users", _attr("status", UnresolvedUdt(name="status")))],
    )
    column = resolve_schema(draft).schema.get_table("users").columns[0]
    assert column.type == CompositeRef(name="status")


def test_array_of_array_of_enum():
    nested = DraftArrayType(element=DraftArrayType(element=UnresolvedUdt(name="status")))
    draft = SchemaDraft(enums=[STATUS], tables=[_table("t", _attr("history", nested))])
    resolution = resolve_schema(draft)
    column = resolution.schema.get_table("t").columns[0]
    assert column.type == ArrayType(element=ArrayType(element=EnumRef(name="status")))
    assert resolution.resolved == 1


def test_primitive_array_not_counted():
    draft = SchemaDraft(tables=[_table("t", _attr("ids", DraftArrayType(element=NumberType())))])
    resolution = resolve_schema(draft)
    assert resolution.schema.get_table("t").columns[0].type == ArrayType(element=NumberType())
    assert resolution.resolved == 0


def test_missing_reference_names_the_type():
    draft = SchemaDraft(tables=[_table("users", _attr("mystery", UnresolvedUdt(name="ghost")))])
    with pytest.raises(UnresolvedReferenceError) as exc_info:
        resolve_schema(draft)
    err = exc_info.value
    assert err.type_name == "ghost"
    assert err.owner == "users"
    assert err.attribute == "mystery"
    assert "ghost" in str(err)


def test_missing_reference_inside_array():
    draft = SchemaDraft(
        tables=[_table("t", _attr("xs", DraftArrayType(element=UnresolvedUdt(name="ghost"))))]
    )
    with pytest.raises(UnresolvedReferenceError, match="ghost"):
        resolve_schema(draft)


def test_routine_parameters_and_return_type_resolved():
    draft = SchemaDraft(
        enums=[STATUS],
        functions=[
            DraftRoutine(
                name="user_status",
                parameters=[_attr("user_id", NumberType())],
                return_type=UnresolvedUdt(name="status"),
            )
        ],
    )
    resolution = resolve_schema(draft)
    routine = resolution.schema.get_function("user_status")
    assert routine.return_type == EnumRef(name="status")
    assert routine.parameters[0].type == NumberType()
    assert resolution.resolved == 1


def test_unresolvable_return_type():
    draft = SchemaDraft(
        functions=[DraftRoutine(name="f", return_type=UnresolvedUdt(name="ghost"))]
    )
    with pytest.raises(UnresolvedReferenceError, match="ghost"):
        resolve_schema(draft)


def test_self_referencing_composite_is_rejected():
    draft = SchemaDraft(
        types=[_composite("node", _attr("next", UnresolvedUdt(name="node")))],
    )
    with pytest.raises(CyclicReferenceError) as exc_info:
        resolve_schema(draft)
    assert exc_info.value.cycle == ["node", "node"]


def test_mutual_cycle_through_array_is_rejected():
    draft = SchemaDraft(
        types=[
            _composite("a", _attr("bs", DraftArrayType(element=UnresolvedUdt(name="b")))),
            _composite("b", _attr("a", UnresolvedUdt(name="a"))),
        ],
    )
    with pytest.raises(UnresolvedReferenceError) as exc_info:
        resolve_schema(draft)
    assert isinstance(exc_info.value, CyclicReferenceError)
    assert exc_info.value.code == "CYCLIC_REFERENCE"


def test_draft_is_not_modified():
    draft = SchemaDraft(
        enums=[STATUS],
        tables=[_table("users", _attr("status", UnresolvedUdt(name="status")))],
    )
    resolve_schema(draft)
    assert draft.tables[0].columns[0].type == UnresolvedUdt(name="status")


def test_resolution_is_idempotent(schema):
    resolution = resolve_schema(SchemaDraft.from_schema(schema))
    assert resolution.resolved == 0
    assert resolution.schema == schema


def test_resolved_schema_is_frozen(schema):
    with pytest.raises(ValidationError):
        schema.tables[0].name = "renamed"


def test_no_forward_reference_survives(schema):
    def walk(t):
        assert not isinstance(t, UnresolvedUdt)
        if isinstance(t, ArrayType):
            walk(t.element)

    for owner in (*schema.types, *schema.tables):
        for attr in getattr(owner, "attributes", None) or owner.columns:
            walk(attr.type)
    for routine in schema.functions:
        walk(routine.return_type)
        for param in routine.parameters:
            walk(param.type)
