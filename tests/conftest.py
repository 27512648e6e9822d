"""Shared pytest fixtures for poststack unit and integration tests."""
from __future__ import annotations

import pytest

from poststack.inspect.discover import discover
from poststack.schema.snapshot import Schema
from tests.fixtures import FakeCatalog, RecordingTransport, sample_options


@pytest.fixture(scope="session")
def schema() -> Schema:
    """Schema discovered from the sample catalog, shared across all tests."""
    return discover(FakeCatalog(), sample_options())


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()
