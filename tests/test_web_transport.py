"""Unit tests for WebTransport routing, using a stand-in requests session."""

from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from poststack.query.commands import (
    CallCommand,
    DeleteCommand,
    InsertCommand,
    SelectQuery,
    UpdateCommand,
)
from poststack.query.conditions import BinaryCondition, UnaryCondition
from poststack.transport.web import WebTransport


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        return self.payload


class FakeSession:
    """Records ``request`` calls the way ``requests.Session`` receives them."""

    def __init__(self, payload: Any = None, status_code: int = 200) -> None:
        self.headers: dict[str, str] = {}
        self.requests: list[dict[str, Any]] = []
        self.response = FakeResponse(payload if payload is not None else [], status_code)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        return self.response


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession(payload=[{"id": 1}])


@pytest.fixture()
def web(session) -> WebTransport:
    return WebTransport("https://api.example.com/v1/", session=session, timeout=5)


def test_select_encodes_query_param(web, session):
    query = SelectQuery(
        table="users",
        selected=["id"],
        conditions=[BinaryCondition(column="status", operator="=", value="active")],
        limit=10,
    )
    assert web.select(query) == [{"id": 1}]

    sent = session.requests[0]
    assert sent["method"] == "GET"
    assert sent["url"] == "https://api.example.com/v1/select"
    assert sent["json"] is None
    assert sent["timeout"] == 5
    assert json.loads(sent["params"]["query"]) == {
        "table": "users",
        "selected": ["id"],
        "conditions": [{"column": "status", "arity": 2, "operator": "=", "value": "active"}],
        "limit": 10,
    }


@pytest.mark.parametrize(
    "operation, command, method, route",
    [
        ("insert", InsertCommand(table="users", columns=["id"], rows=[{"id": 1}]), "POST", "insert"),
        ("update", UpdateCommand(table="users", values={"id": 2}), "PATCH", "update"),
        (
            "delete",
            DeleteCommand(
                table="users",
                conditions=[UnaryCondition(column="deleted_at", operator="is null")],
            ),
            "DELETE",
            "delete",
        ),
        ("call", CallCommand(procedure="add_user_to_group", parameters=[1, 2]), "POST", "call"),
    ],
)
def test_command_routes(web, session, operation, command, method, route):
    getattr(web, operation)(command)
    sent = session.requests[0]
    assert sent["method"] == method
    assert sent["url"] == f"https://api.example.com/v1/{route}"
    assert sent["params"] is None
    assert sent["json"] == command.model_dump(mode="json", exclude_none=True)


def test_json_content_type(web, session):
    assert session.headers["Content-Type"] == "application/json"


def test_http_error_propagates():
    web = WebTransport("https://api.example.com", session=FakeSession(status_code=500))
    with pytest.raises(requests.HTTPError):
        web.select(SelectQuery(table="users"))
