"""Integration tests: client → DbTransport → a real SQLite in-memory DB.

Covers select with every condition form, ordering and paging, inserts of one
and many rows, updates and deletes with and without RETURNING, and NULL
values.
"""
from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from poststack.client.api import ApiClient
from poststack.errors import InvalidCommandError
from poststack.query.commands import InsertCommand
from poststack.transport.db import DbTransport

DDL = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY,
    email TEXT NOT NULL,
    role TEXT NOT NULL,
    home TEXT,
    created_at TEXT NOT NULL,
    deleted_at TEXT,
    status TEXT
)
"""

USERS = [
    {"id": 1, "email": "ann@x.io", "role": "admin", "created_at": "2025-01-01", "deleted_at": None, "status": "active"},
    {"id": 2, "email": "bo@x.io", "role": "member", "created_at": "2025-01-02", "deleted_at": None, "status": "active"},
    {"id": 3, "email": "cy@x.io", "role": "member", "created_at": "2025-01-03", "deleted_at": "2025-02-01", "status": "inactive"},
    {"id": 4, "email": "di@x.io", "role": "member", "created_at": "2025-01-04", "deleted_at": None, "status": "active"},
]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    with engine.begin() as conn:
        conn.exec_driver_sql(DDL)
    yield engine
    engine.dispose()


@pytest.fixture()
def client(schema, engine) -> ApiClient:
    client = ApiClient(schema, DbTransport(engine))
    client.users.insert(list(USERS[0]), USERS).execute()
    return client


def test_select_equality(client):
    rows = client.users.select(["id"]).where("status", "=", "active").limit(10).fetch()
    assert rows == [{"id": 1}, {"id": 2}, {"id": 4}]


def test_select_shorthand_and_unary(client):
    rows = (
        client.users.select(["email"])
        .where("status", "active")
        .where("deleted_at", "is null")
        .where("id", ">", 1)
        .fetch()
    )
    assert rows == [{"email": "bo@x.io"}, {"email": "di@x.io"}]


def test_select_is_not_null(client):
    rows = client.users.select(["id", "deleted_at"]).where("deleted_at", "is not null").fetch()
    assert rows == [{"id": 3, "deleted_at": "2025-02-01"}]


def test_order_limit_offset(client):
    rows = client.users.select(["id"]).order_by(["id"], "desc").limit(2).offset(1).fetch()
    assert rows == [{"id": 3}, {"id": 2}]


def test_select_all_columns(client):
    rows = client.users.select().where("id", 1).fetch()
    assert rows[0]["email"] == "ann@x.io"
    assert rows[0]["home"] is None


def test_hostile_value_is_bound(client):
    rows = client.users.select(["id"]).where("email", "x' OR '1'='1").fetch()
    assert rows == []
    assert len(client.users.select().fetch()) == 4


def test_insert_returning(client):
    row = {"id": 5, "email": "ed@x.io", "role": "member", "created_at": "2025-03-01"}
    assert client.users.insert(row).returning(["id", "email"]).execute() == [
        {"id": 5, "email": "ed@x.io"}
    ]


def test_insert_without_returning(client):
    row = {"id": 6, "email": "fa@x.io", "role": "member", "created_at": "2025-03-02"}
    assert client.users.insert(row).execute() == []
    assert client.users.select(["email"]).where("id", 6).fetch() == [{"email": "fa@x.io"}]


def test_insert_missing_column_rejected(client, engine):
    transport = DbTransport(engine)
    command = InsertCommand(table="users", columns=["id", "email"], rows=[{"id": 9}])
    with pytest.raises(InvalidCommandError):
        transport.insert(command)
    assert client.users.select().where("id", 9).fetch() == []


def test_update(client):
    updated = (
        client.users.update({"status": "inactive"})
        .where("role", "member")
        .where("deleted_at", "is null")
        .returning(["id"])
        .execute()
    )
    assert sorted(r["id"] for r in updated) == [2, 4]
    assert client.users.select(["id"]).where("status", "active").fetch() == [{"id": 1}]


def test_delete(client):
    assert client.users.delete().where("deleted_at", "is not null").execute() == []
    assert [r["id"] for r in client.users.select(["id"]).fetch()] == [1, 2, 4]


def test_delete_returning(client):
    deleted = client.users.delete().where("id", "<=", 2).returning("*").execute()
    assert sorted(r["email"] for r in deleted) == ["ann@x.io", "bo@x.io"]
