"""Unit tests for project files, inspection options and connection settings."""

from __future__ import annotations

import json

import pytest

from poststack.config import (
    PROJECT_FILE_NAME,
    ConnectionSettings,
    InspectOptions,
    ProjectConfig,
    UdtOptions,
    find_project,
    load_project,
)
from poststack.errors import ProjectConfigError


def test_inspect_defaults():
    options = InspectOptions()
    assert options.udts == UdtOptions()
    assert options.schema_name == "public"
    assert options.max_concurrency >= 1


def test_load_project(tmp_path):
    path = tmp_path / PROJECT_FILE_NAME
    path.write_text(json.dumps({"output": "schema.json", "udts": {"string": ["email"]}}))
    project = load_project(path)
    assert project == ProjectConfig(output="schema.json", udts=UdtOptions(string=["email"]))


def test_load_project_invalid_json(tmp_path):
    path = tmp_path / PROJECT_FILE_NAME
    path.write_text("{not json")
    with pytest.raises(ProjectConfigError) as exc_info:
        load_project(path)
    assert exc_info.value.path == str(path)


def test_load_project_unknown_key(tmp_path):
    path = tmp_path / PROJECT_FILE_NAME
    path.write_text(json.dumps({"udts": {"strings": ["email"]}}))
    with pytest.raises(ProjectConfigError):
        load_project(path)


def test_find_project_walks_up(tmp_path):
    (tmp_path / PROJECT_FILE_NAME).write_text(json.dumps({"udts": {"number": ["cents"]}}))
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    project = find_project(nested)
    assert project is not None
    assert project.udts.number == ["cents"]


def test_find_project_nearest_wins(tmp_path):
    (tmp_path / PROJECT_FILE_NAME).write_text(json.dumps({"output": "outer.json"}))
    inner = tmp_path / "inner"
    inner.mkdir()
    (inner / PROJECT_FILE_NAME).write_text(json.dumps({"output": "inner.json"}))
    assert find_project(inner).output == "inner.json"


def test_connection_settings_from_env(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_NAME", "shop")
    settings = ConnectionSettings()
    assert settings.host == "db.internal"
    assert settings.port == 6543
    assert settings.name == "shop"


def test_connection_settings_url(monkeypatch):
    monkeypatch.delenv("DB_PASSWORD", raising=False)
    url = ConnectionSettings(host="h", port=5433, name="d", user="u", password="p").url()
    assert url.drivername == "postgresql+psycopg"
    assert url.host == "h"
    assert url.port == 5433
    assert url.database == "d"
    assert url.username == "u"


@pytest.mark.parametrize("variable", ["DB_PASS", "DB_PASSWORD"])
def test_connection_password_from_env(monkeypatch, variable):
    monkeypatch.delenv("DB_PASS", raising=False)
    monkeypatch.delenv("DB_PASSWORD", raising=False)
    monkeypatch.setenv(variable, "secret")
    settings = ConnectionSettings()
    assert settings.password == "secret"
    assert settings.url().password == "secret"


def test_connection_password_by_field_name(monkeypatch):
    monkeypatch.delenv("DB_PASS", raising=False)
    monkeypatch.delenv("DB_PASSWORD", raising=False)
    assert ConnectionSettings(password="p").password == "p"
