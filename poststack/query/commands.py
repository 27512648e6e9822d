"""Pydantic models for queries and commands handed to a Transport.

One instance is created per builder chain, mutated by the chained calls,
and consumed by a single terminal ``fetch()`` / ``execute()``.  The models
are plain mutable pydantic models; they are not safe to share between
threads.
"""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from poststack.query.conditions import Condition

OrderDirection = Literal["asc", "desc"]


class OrderBy(BaseModel):
    """A single ORDER BY clause over one or more columns."""

    model_config = ConfigDict(extra="forbid")

    columns: list[str] = Field(min_length=1)
    direction: OrderDirection = "asc"


class SelectQuery(BaseModel):
    """Represents a select query.

    Attributes:
        table: Table to select from.
        selected: Columns to return; ``None`` selects all columns.
        conditions: Conditions joined with AND.
        limit: Maximum number of rows.
        offset: Number of rows to skip.
        order_by: Ordering clause.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    table: str
    selected: list[str] | None = None
    conditions: list[Condition] | None = None
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    order_by: OrderBy | None = None


class InsertCommand(BaseModel):
    """Represents an insert command.

    Attributes:
        table: Target table.
        columns: Columns to insert, in VALUES order.
        rows: One mapping per row; each must provide every listed column.
        returning: Columns to return (``["*"]`` for all).
    """

    model_config = ConfigDict(extra="forbid")

    table: str
    columns: list[str] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)
    returning: list[str] | None = None


class UpdateCommand(BaseModel):
    """Represents an update command.

    Attributes:
        table: Target table.
        values: Column -> new value.
        conditions: Conditions joined with AND.
        returning: Columns to return (``["*"]`` for all).
    """

    model_config = ConfigDict(extra="forbid")

    table: str
    values: dict[str, Any] = Field(default_factory=dict)
    conditions: list[Condition] | None = None
    returning: list[str] | None = None


class DeleteCommand(BaseModel):
    """Represents a delete command."""

    model_config = ConfigDict(extra="forbid")

    table: str
    conditions: list[Condition] | None = None
    returning: list[str] | None = None


class CallCommand(BaseModel):
    """Represents a function call."""

    model_config = ConfigDict(extra="forbid")

    procedure: str
    parameters: list[Any] | None = None
