"""Phase 2: global type resolution.

Replaces every :class:`~poststack.schema.types.UnresolvedUdt` in a
:class:`~poststack.schema.draft.SchemaDraft` with a concrete reference.
Names are looked up among composite types first, then enumerations, so the
order in which attributes are visited does not matter.  Arrays are resolved
by recursing into their element type.

The result is a new, frozen :class:`~poststack.schema.snapshot.Schema`;
the draft is left untouched.  A composite type graph containing a cycle is
rejected after replacement.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from poststack.errors import CyclicReferenceError, UnresolvedReferenceError
from poststack.schema.draft import DraftAttribute, SchemaDraft
from poststack.schema.snapshot import (
    Attribute,
    CompositeType,
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

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """The output of a resolution pass.

    Attributes:
        schema: The resolved, immutable schema.
        resolved: Number of attributes (and routine return types) whose type
            contained at least one forward reference.
    """

    schema: Schema
    resolved: int


class TypeResolver:
    """Resolves forward references of one draft against its own collections.

    Args:
        draft: The draft whose types, tables and routines are resolved.
    """

    def __init__(self, draft: SchemaDraft) -> None:
        self._draft = draft
        self._composites = {t.name for t in draft.types}
        self._enums = {e.name for e in draft.enums}
        self._resolved = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self) -> Resolution:
        """Resolve the draft.

        Raises:
            UnresolvedReferenceError: If a reference matches no composite
                type or enumeration.
            CyclicReferenceError: If composite types reference each other in
                a cycle.
        """
        self._resolved = 0
        draft = self._draft

        types = tuple(
            CompositeType(
                name=t.name,
                display_name=t.display_name,
                attributes=self._attributes(t.name, t.attributes),
            )
            for t in draft.types
        )
        tables = tuple(
            Table(
                name=t.name,
                display_name=t.display_name,
                columns=self._attributes(t.name, t.columns),
            )
            for t in draft.tables
        )
        functions = tuple(
            Routine(
                name=f.name,
                parameters=self._attributes(f.name, f.parameters),
                return_type=self._counted(f.name, "<return>", f.return_type),
            )
            for f in draft.functions
        )

        _check_cycles(types)

        schema = Schema(
            enums=tuple(draft.enums),
            types=types,
            tables=tables,
            functions=functions,
        )
        logger.debug("resolved %d forward references", self._resolved)
        return Resolution(schema=schema, resolved=self._resolved)

    # ------------------------------------------------------------------
    # Per-attribute resolution
    # ------------------------------------------------------------------

    def _attributes(
        self, owner: str, attributes: list[DraftAttribute]
    ) -> tuple[Attribute, ...]:
        return tuple(
            Attribute(
                name=a.name,
                order=a.order,
                nullable=a.nullable,
                type=self._counted(owner, a.name, a.type),
            )
            for a in attributes
        )

    def _counted(self, owner: str, attribute: str, draft_type: DraftType) -> ResolvedType:
        resolved, changed = self._resolve_type(owner, attribute, draft_type)
        if changed:
            self._resolved += 1
        return resolved

    def _resolve_type(
        self, owner: str, attribute: str, draft_type: DraftType
    ) -> tuple[ResolvedType, bool]:
        if isinstance(draft_type, DraftArrayType):
            element, changed = self._resolve_type(owner, attribute, draft_type.element)
            return ArrayType(element=element), changed
        if isinstance(draft_type, UnresolvedUdt):
            return self._lookup(owner, attribute, draft_type.name), True
        if isinstance(
            draft_type,
            (BooleanType, NumberType, StringType, DateType, EnumRef, CompositeRef),
        ):
            return draft_type, False
        raise TypeError(f"Unexpected draft type: {type(draft_type).__name__}")

    def _lookup(self, owner: str, attribute: str, name: str) -> ResolvedType:
        if name in self._composites:
            logger.debug("%s.%s -> composite %s", owner, attribute, name)
            return CompositeRef(name=name)
        if name in self._enums:
            logger.debug("%s.%s -> enum %s", owner, attribute, name)
            return EnumRef(name=name)
        raise UnresolvedReferenceError(name, owner=owner, attribute=attribute)


def resolve_schema(draft: SchemaDraft) -> Resolution:
    """Resolve all forward references in ``draft``.

    Example::

        resolution = resolve_schema(draft)
        schema = resolution.schema

    Returns:
        A :class:`Resolution` holding the schema and the resolved count.
    """
    return TypeResolver(draft).resolve()


# ---------------------------------------------------------------------------
# Cycle detection
# ---------------------------------------------------------------------------


def _composite_refs(t: ResolvedType) -> list[str]:
    if isinstance(t, ArrayType):
        return _composite_refs(t.element)
    if isinstance(t, CompositeRef):
        return [t.name]
    return []


def _check_cycles(types: tuple[CompositeType, ...]) -> None:
    """Raise :class:`CyclicReferenceError` if composite types form a cycle."""
    graph: dict[str, list[str]] = {
        t.name: [ref for a in t.attributes for ref in _composite_refs(a.type)]
        for t in types
    }
    done: set[str] = set()
    path: list[str] = []
    on_path: set[str] = set()

    def visit(name: str) -> None:
        if name in done:
            return
        if name in on_path:
            start = path.index(name)
            raise CyclicReferenceError(path[start:] + [name])
        on_path.add(name)
        path.append(name)
        for ref in graph.get(name, []):
            visit(ref)
        path.pop()
        on_path.discard(name)
        done.add(name)

    for name in graph:
        visit(name)
