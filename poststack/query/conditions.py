"""Condition models for WHERE clauses.

A condition is tagged by arity::

    {"column": "deleted_at", "arity": 1, "operator": "is null"}
    {"column": "status", "arity": 2, "operator": "=", "value": "active"}
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field

UnaryOperator = Literal["is null", "is not null"]
BinaryOperator = Literal["=", ">", "<", ">=", "<="]

UNARY_OPERATORS: tuple[str, ...] = get_args(UnaryOperator)
BINARY_OPERATORS: tuple[str, ...] = get_args(BinaryOperator)


class UnaryCondition(BaseModel):
    """``<column> is null`` / ``<column> is not null``."""

    model_config = ConfigDict(extra="forbid")

    column: str
    arity: Literal[1] = 1
    operator: UnaryOperator


class BinaryCondition(BaseModel):
    """``<column> <operator> <value>``."""

    model_config = ConfigDict(extra="forbid")

    column: str
    arity: Literal[2] = 2
    operator: BinaryOperator
    value: Any


Condition = Annotated[
    Union[UnaryCondition, BinaryCondition],
    Field(discriminator="arity"),
]


def is_unary_operator(operator: object) -> bool:
    return isinstance(operator, str) and operator in UNARY_OPERATORS


def is_binary_operator(operator: object) -> bool:
    return isinstance(operator, str) and operator in BINARY_OPERATORS
