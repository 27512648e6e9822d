"""Configuration models: inspection options, project files and connection settings.

Inspection options control how catalog types are deduced::

    from poststack import InspectOptions, UdtOptions

    options = InspectOptions(udts=UdtOptions(number=["positive_int"], string=["email"]))

A project file (``.poststack.json``) carries the same allow-lists plus an
output path, and is looked up from the working directory towards the
filesystem root::

    {"output": "schema.json", "udts": {"string": ["email"], "number": []}}

Connection settings are read from ``DB_*`` environment variables; the password
is taken from ``DB_PASS`` or ``DB_PASSWORD``.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from poststack.errors import ProjectConfigError

logger = logging.getLogger(__name__)

#: File name searched for by :func:`find_project`.
PROJECT_FILE_NAME = ".poststack.json"


class UdtOptions(BaseModel):
    """Allow-lists for user-defined types the catalog cannot classify.

    Attributes:
        number: Type names (raw or underlying) to treat as numbers.
        string: Type names (raw or underlying) to treat as strings.
    """

    model_config = ConfigDict(extra="forbid")

    number: list[str] = Field(default_factory=list)
    string: list[str] = Field(default_factory=list)


class InspectOptions(BaseModel):
    """Options for :func:`~poststack.inspect.discover`.

    Attributes:
        udts: Number / string allow-lists.
        schema_name: Catalog schema to inspect.
        max_concurrency: Upper bound on concurrent per-table / per-type
            catalog queries.
    """

    model_config = ConfigDict(extra="forbid")

    udts: UdtOptions = Field(default_factory=UdtOptions)
    schema_name: str = "public"
    max_concurrency: int = Field(default=4, ge=1)


class ProjectConfig(BaseModel):
    """Contents of a ``.poststack.json`` project file."""

    model_config = ConfigDict(extra="forbid")

    output: str | None = None
    udts: UdtOptions = Field(default_factory=UdtOptions)


def load_project(path: str | Path) -> ProjectConfig:
    """Load a project file.

    Args:
        path: Path to a ``.poststack.json`` file.

    Returns:
        The parsed :class:`ProjectConfig`.

    Raises:
        ProjectConfigError: If the file is not valid JSON or has the wrong shape.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProjectConfigError(f"Invalid JSON in {path}: {exc}", str(path)) from exc
    try:
        return ProjectConfig.model_validate(raw)
    except ValidationError as exc:
        raise ProjectConfigError(f"Invalid project file {path}: {exc}", str(path)) from exc


def find_project(start: str | Path | None = None) -> ProjectConfig | None:
    """Find and load the nearest project file.

    Searches ``start`` (default: the working directory) and each parent
    directory up to the filesystem root.

    Returns:
        The first project found, or ``None``.
    """
    directory = Path(start) if start is not None else Path.cwd()
    directory = directory.resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / PROJECT_FILE_NAME
        if candidate.is_file():
            logger.info("using project file %s", candidate)
            return load_project(candidate)
    return None


class ConnectionSettings(BaseSettings):
    """Database connection settings read from ``DB_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="DB_", extra="ignore", populate_by_name=True)

    host: str = "localhost"
    port: int = 5432
    name: str = "postgres"
    user: str = "postgres"
    password: str = Field(
        default="postgres", validation_alias=AliasChoices("DB_PASS", "DB_PASSWORD")
    )
    driver: str = "postgresql+psycopg"

    def url(self):
        """Return a SQLAlchemy :class:`~sqlalchemy.engine.URL` for these settings."""
        from sqlalchemy.engine import URL

        return URL.create(
            self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.name,
        )
