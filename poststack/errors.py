"""Custom exception hierarchy for poststack.

All public errors inherit from PoststackError so callers can catch the base
class for any poststack-specific failure.  Catalog I/O errors raised by the
database driver and HTTP errors raised by ``requests`` are never wrapped.
"""
from __future__ import annotations

from typing import Any


class PoststackError(Exception):
    """Base exception for all poststack errors.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. ``UNSUPPORTED_TYPE``).
        details: Extra structured context.
    """

    code = "POSTSTACK_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response suitable for API clients."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class UnsupportedTypeError(PoststackError):
    """Raised when no deduction rule matches a raw catalog type."""

    def __init__(
        self,
        data_type: str,
        udt_name: str | None,
        attribute: str | None = None,
    ) -> None:
        where = f" for attribute '{attribute}'" if attribute else ""
        super().__init__(
            f"Unhandled type '{data_type}/{udt_name}'{where}.",
            code="UNSUPPORTED_TYPE",
            details={
                "data_type": data_type,
                "udt_name": udt_name,
                "attribute": attribute,
            },
        )
        self.data_type = data_type
        self.udt_name = udt_name
        self.attribute = attribute


class UnresolvedReferenceError(PoststackError):
    """Raised when a user-defined type reference matches no composite or enum."""

    def __init__(
        self,
        type_name: str,
        owner: str | None = None,
        attribute: str | None = None,
    ) -> None:
        where = f" (referenced by '{owner}.{attribute}')" if owner else ""
        super().__init__(
            f"Can't resolve type '{type_name}'{where}.",
            code="UNRESOLVED_REFERENCE",
            details={"type_name": type_name, "owner": owner, "attribute": attribute},
        )
        self.type_name = type_name
        self.owner = owner
        self.attribute = attribute


class CyclicReferenceError(UnresolvedReferenceError):
    """Raised when composite types reference each other in a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        PoststackError.__init__(
            self,
            f"Cyclic composite type reference: {' -> '.join(cycle)}.",
            code="CYCLIC_REFERENCE",
            details={"cycle": cycle},
        )
        self.cycle = cycle
        self.type_name = cycle[0]
        self.owner = None
        self.attribute = None


class InvalidOrderDirectionError(PoststackError):
    """Raised when ``order_by`` is given a direction other than asc/desc."""

    def __init__(self, direction: object) -> None:
        super().__init__(
            f"Invalid order_by direction: {direction!r}.",
            code="INVALID_ORDER_DIRECTION",
            details={"direction": direction, "allowed": ["asc", "desc"]},
        )
        self.direction = direction


class InvalidOperatorError(PoststackError):
    """Raised when ``where`` is given a value with a non-binary operator."""

    def __init__(self, operator: object, allowed: list[str]) -> None:
        super().__init__(
            f"Invalid condition operator: {operator!r}.",
            code="INVALID_OPERATOR",
            details={"operator": operator, "allowed": allowed},
        )
        self.operator = operator


class UnknownColumnError(PoststackError):
    """Raised when a builder references a column the table does not have."""

    def __init__(
        self,
        table: str,
        column: str,
        allowed_columns: list[str],
    ) -> None:
        super().__init__(
            f"Column '{column}' does not exist on table '{table}'.",
            code="UNKNOWN_COLUMN",
            details={
                "table": table,
                "column": column,
                "allowed_columns": allowed_columns,
            },
        )
        self.table = table
        self.column = column


class InvalidCommandError(PoststackError):
    """Raised when a command cannot be encoded as SQL.

    Args:
        message: Human-readable description.
        command: The command kind (``'insert'``, ``'update'``, ...).
    """

    def __init__(self, message: str, command: str) -> None:
        super().__init__(
            message, code="INVALID_COMMAND", details={"command": command}
        )
        self.command = command


class OperationNotImplementedError(PoststackError, NotImplementedError):
    """Raised by a transport for an operation it does not back."""

    def __init__(self, operation: str, transport: str | None = None) -> None:
        owner = f" by {transport}" if transport else ""
        super().__init__(
            f"Operation '{operation}' is not implemented{owner}.",
            code="NOT_IMPLEMENTED",
            details={"operation": operation, "transport": transport},
        )
        self.operation = operation


class CompilationError(PoststackError):
    """Raised when SQL rendering fails for an unexpected reason.

    Args:
        message: Human-readable description.
        clause: The clause being rendered when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(
            message, code="COMPILATION_ERROR", details={"clause": clause}
        )
        self.clause = clause


class ProjectConfigError(PoststackError):
    """Raised when a ``.poststack.json`` project file cannot be loaded."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message, code="PROJECT_CONFIG", details={"path": path})
        self.path = path
