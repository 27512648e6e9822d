"""poststack query/command model."""
from poststack.query.commands import (
    CallCommand,
    DeleteCommand,
    InsertCommand,
    OrderBy,
    OrderDirection,
    SelectQuery,
    UpdateCommand,
)
from poststack.query.conditions import (
    BINARY_OPERATORS,
    UNARY_OPERATORS,
    BinaryCondition,
    BinaryOperator,
    Condition,
    UnaryCondition,
    UnaryOperator,
)

__all__ = [
    "CallCommand",
    "DeleteCommand",
    "InsertCommand",
    "OrderBy",
    "OrderDirection",
    "SelectQuery",
    "UpdateCommand",
    "BINARY_OPERATORS",
    "UNARY_OPERATORS",
    "BinaryCondition",
    "BinaryOperator",
    "Condition",
    "UnaryCondition",
    "UnaryOperator",
]
