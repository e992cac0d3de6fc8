"""Shared fixtures for the airtypes test suite."""

import logging
from pathlib import Path

import pytest

from airtypes.codegen.core.schema import RemoteField, RemoteTable, RemoteView
from airtypes.config import BaseConfig, ParsedConfig


@pytest.fixture
def my_table():
    """Table with a select and a number field."""
    return RemoteTable(
        id="tblMy",
        name="MyTable",
        fields=[
            RemoteField(id="fld1", name="Status", type="singleSelect"),
            RemoteField(id="fld2", name="Count", type="number"),
        ],
    )


@pytest.fixture
def base_config():
    return BaseConfig(base_name="Ops", base_id="appOps")


@pytest.fixture
def projects_table():
    """Table with a link field and two grid views."""
    return RemoteTable(
        id="tblProjects",
        name="Projects",
        fields=[
            RemoteField(id="fldName", name="Name", type="singleLineText"),
            RemoteField(id="fldDue", name="Due Date", type="date"),
            RemoteField(
                id="fldTasks",
                name="Tasks",
                type="multipleRecordLinks",
                options={"linkedTableId": "tblTasks"},
            ),
            RemoteField(id="fldDone", name="Done", type="checkbox"),
        ],
        views=[
            RemoteView(
                id="viwMain",
                name="Main",
                type="grid",
                visible_field_ids=["fldName", "fldTasks"],
            ),
            RemoteView(
                id="viwDates",
                name="Dates",
                type="grid",
                visible_field_ids=["fldName", "fldDue"],
            ),
            RemoteView(id="viwBoard", name="Board", type="kanban"),
        ],
    )


@pytest.fixture
def tasks_table():
    return RemoteTable(
        id="tblTasks",
        name="Tasks",
        fields=[
            RemoteField(id="fldTitle", name="Title", type="singleLineText"),
            RemoteField(id="fldEstimate", name="Estimate", type="duration"),
        ],
        views=[RemoteView(id="viwTasks", name="All tasks", type="grid")],
    )


@pytest.fixture
def base_tables(projects_table, tasks_table):
    return [projects_table, tasks_table]


@pytest.fixture
def api_tables_payload():
    """Raw meta API response body."""
    return {
        "tables": [
            {
                "id": "tblProjects",
                "name": "Projects",
                "primaryFieldId": "fldName",
                "fields": [
                    {"id": "fldName", "name": "Name", "type": "singleLineText"},
                    {
                        "id": "fldTasks",
                        "name": "Tasks",
                        "type": "multipleRecordLinks",
                        "options": {"linkedTableId": "tblTasks"},
                    },
                ],
                "views": [
                    {
                        "id": "viwMain",
                        "name": "Main",
                        "type": "grid",
                        "visibleFieldIds": ["fldName"],
                    }
                ],
            },
            {
                "id": "tblTasks",
                "name": "Tasks",
                "fields": [{"id": "fldTitle", "name": "Title", "type": "singleLineText"}],
                "views": [],
            },
        ]
    }


class StaticFetcher:
    """Fetcher returning canned tables per base id."""

    def __init__(self, tables_by_base):
        self.tables_by_base = tables_by_base
        self.calls = []

    def fetch(self, base_id):
        self.calls.append(base_id)
        return self.tables_by_base[base_id]


@pytest.fixture
def static_fetcher():
    return StaticFetcher


@pytest.fixture
def parsed_config(tmp_path: Path):
    return ParsedConfig(
        api_key="key123",
        output=tmp_path / "out" / "airtable-types.ts",
        bases=[BaseConfig(base_name="Ops", base_id="appOps")],
    )


@pytest.fixture
def config_file(tmp_path: Path):
    """Write a config TOML into ``tmp_path`` and return its path."""

    def _write(content: str, name: str = "airtypes.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_airtypes_logger():
    """Undo handlers and levels installed by CLI runs."""
    logger = logging.getLogger("airtypes")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
