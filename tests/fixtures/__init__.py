"""Test fixtures: an in-memory catalog built from catalog.json, and a recording transport."""

from __future__ import annotations

import copy
import json
import threading
import time
from pathlib import Path
from typing import Any

from poststack.config import InspectOptions, UdtOptions
from poststack.inspect.catalog import (
    AttributeRecord,
    EnumLabelRecord,
    ParameterRecord,
    RoutineRecord,
)
from poststack.query.commands import (
    CallCommand,
    DeleteCommand,
    InsertCommand,
    SelectQuery,
    UpdateCommand,
)
from poststack.transport.base import Transport

_FIXTURES_DIR = Path(__file__).parent

#: Allow-lists matching the user-defined domains used in catalog.json.
SAMPLE_UDTS = UdtOptions(number=["positive_int"], string=["email"])


def load_catalog_data() -> dict[str, Any]:
    """Load the raw sample catalog from catalog.json."""
    return json.loads((_FIXTURES_DIR / "catalog.json").read_text())


def sample_options(**overrides: Any) -> InspectOptions:
    return InspectOptions(udts=SAMPLE_UDTS, **overrides)


class FakeCatalog:
    """In-memory :class:`~poststack.inspect.catalog.CatalogAccess`.

    Records every call and the peak number of calls in flight at once.
    ``delay`` makes each per-item call sleep, so concurrent calls overlap.
    """

    def __init__(self, data: dict[str, Any] | None = None, delay: float = 0.0) -> None:
        self.data = copy.deepcopy(data) if data is not None else load_catalog_data()
        self.delay = delay
        self.calls: list[tuple[str, str | None]] = []
        self.peak_in_flight = 0
        self._in_flight = 0
        self._lock = threading.Lock()

    def _enter(self, method: str, arg: str | None = None) -> None:
        with self._lock:
            self.calls.append((method, arg))
            self._in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self._in_flight)

    def _leave(self) -> None:
        if self.delay:
            time.sleep(self.delay)
        with self._lock:
            self._in_flight -= 1

    def enum_labels(self) -> list[EnumLabelRecord]:
        self._enter("enum_labels")
        self._leave()
        return [EnumLabelRecord.model_validate(r) for r in self.data["enum_labels"]]

    def composite_type_names(self) -> list[str]:
        self._enter("composite_type_names")
        self._leave()
        return list(self.data["types"])

    def composite_attributes(self, type_name: str) -> list[AttributeRecord]:
        self._enter("composite_attributes", type_name)
        self._leave()
        return [AttributeRecord.model_validate(r) for r in self.data["types"][type_name]]

    def table_names(self) -> list[str]:
        self._enter("table_names")
        self._leave()
        return list(self.data["tables"])

    def table_columns(self, table_name: str) -> list[AttributeRecord]:
        self._enter("table_columns", table_name)
        self._leave()
        return [AttributeRecord.model_validate(r) for r in self.data["tables"][table_name]]

    def routines(self) -> list[RoutineRecord]:
        self._enter("routines")
        self._leave()
        return [RoutineRecord.model_validate(r) for r in self.data["routines"]]

    def routine_parameters(self, specific_name: str) -> list[ParameterRecord]:
        self._enter("routine_parameters", specific_name)
        self._leave()
        rows = self.data["parameters"].get(specific_name, [])
        return [ParameterRecord.model_validate(r) for r in rows]


class RecordingTransport(Transport):
    """Transport that records every operation and returns canned rows."""

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self.rows = rows if rows is not None else []
        self.calls: list[tuple[str, Any]] = []

    def select(self, query: SelectQuery) -> list[dict[str, Any]]:
        self.calls.append(("select", query))
        return self.rows

    def insert(self, command: InsertCommand) -> list[dict[str, Any]]:
        self.calls.append(("insert", command))
        return self.rows

    def update(self, command: UpdateCommand) -> list[dict[str, Any]]:
        self.calls.append(("update", command))
        return self.rows

    def delete(self, command: DeleteCommand) -> list[dict[str, Any]]:
        self.calls.append(("delete", command))
        return self.rows

    def call(self, command: CallCommand) -> Any:
        self.calls.append(("call", command))
        return self.rows
