"""Server side of :class:`~poststack.transport.web.WebTransport`.

``handle`` turns one HTTP request into a call on a local transport and
returns ``(status, payload)``; the web framework only has to pass the
method, the path below the API root, the query string and the raw body,
then serialise the payload as JSON::

    status, payload = handle(DbTransport(engine), "GET", "select",
                             query={"query": '{"table": "users"}'})

Routes::

    GET    select?query=<json>
    POST   insert
    PATCH  update
    DELETE delete
    POST   call

Unknown routes answer 404; payloads that are not valid JSON or do not
match the command model answer 400, as do poststack errors raised while
compiling.  Database and connection errors propagate.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from poststack.errors import PoststackError
from poststack.query.commands import (
    CallCommand,
    DeleteCommand,
    InsertCommand,
    SelectQuery,
    UpdateCommand,
)
from poststack.transport.base import Transport

logger = logging.getLogger(__name__)

ROUTES: dict[tuple[str, str], type[BaseModel]] = {
    ("GET", "select"): SelectQuery,
    ("POST", "insert"): InsertCommand,
    ("PATCH", "update"): UpdateCommand,
    ("DELETE", "delete"): DeleteCommand,
    ("POST", "call"): CallCommand,
}


def _bad_request(message: str, details: dict[str, Any] | None = None) -> tuple[int, Any]:
    logger.warning("rejected request: %s", message)
    return 400, {"error": "INVALID_REQUEST", "message": message, "details": details or {}}


def handle(
    transport: Transport,
    method: str,
    route: str,
    query: Mapping[str, str] | None = None,
    body: str | bytes | None = None,
) -> tuple[int, Any]:
    """Dispatch one request to ``transport``.

    Args:
        transport: Transport executing the command, usually a ``DbTransport``.
        method: HTTP method, any case.
        route: Path below the API root, e.g. ``"select"`` or ``"/insert"``.
        query: Query-string parameters; ``select`` reads ``query["query"]``.
        body: Raw JSON request body for the other routes.

    Returns:
        ``(status, payload)`` where payload is JSON-serialisable.
    """
    operation = route.strip("/")
    key = (method.upper(), operation)
    model = ROUTES.get(key)
    if model is None:
        logger.info("no route for %s %s", *key)
        message = f"No route for {key[0]} {key[1]}."
        return 404, {"error": "NOT_FOUND", "message": message, "details": {}}

    raw = (query or {}).get("query") if operation == "select" else body
    if not raw:
        what = "query parameter 'query'" if operation == "select" else "request body"
        return _bad_request(f"Missing {what}.")
    try:
        command = model.model_validate_json(raw)
    except ValidationError as exc:
        return _bad_request(
            f"Invalid {operation} payload.",
            {"errors": json.loads(exc.json(include_url=False))},
        )

    logger.debug("%s %s", *key)
    try:
        result = getattr(transport, operation)(command)
    except PoststackError as exc:
        logger.warning("%s failed: %s", operation, exc)
        return 400, exc.to_error_response()
    return 200, result
