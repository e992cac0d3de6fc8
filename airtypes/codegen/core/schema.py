"""
Core schema representation for code generation.

Holds the remote table descriptors as fetched from the meta API and the
normalized per-table model that generators render.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional
from enum import Enum


class SpecKind(Enum):
    """Value shapes a validation spec can describe."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    RECORD = "record"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class ValidationSpec:
    """
    Shape a field value must satisfy, independent of any output syntax.

    ``inner`` is only meaningful for arrays and describes the element shape.
    """

    kind: SpecKind
    optional: bool = True
    inner: Optional["ValidationSpec"] = None

    def with_optional(self, optional: bool = True) -> "ValidationSpec":
        """Return a copy with the given optionality."""
        return replace(self, optional=optional)

    def as_inner(self) -> "ValidationSpec":
        """Return a copy usable as an element spec (never optional)."""
        inner = self.inner.as_inner() if self.inner else None
        return replace(self, optional=False, inner=inner)


@dataclass(frozen=True)
class RemoteField:
    """A column descriptor from the remote base."""

    id: str
    name: str
    type: str
    options: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemoteField":
        options = data.get("options")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            options=options if isinstance(options, dict) else None,
        )


@dataclass(frozen=True)
class RemoteView:
    """A saved view; grid views may restrict the visible fields."""

    id: str
    name: str
    type: str
    visible_field_ids: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemoteView":
        visible = data.get("visibleFieldIds")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            visible_field_ids=list(visible) if isinstance(visible, list) else None,
        )


@dataclass(frozen=True)
class RemoteTable:
    """A table with its fields and views, in remote order."""

    id: str
    name: str
    fields: List[RemoteField] = field(default_factory=list)
    views: List[RemoteView] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemoteTable":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            fields=[RemoteField.from_dict(f) for f in data.get("fields") or []],
            views=[RemoteView.from_dict(v) for v in data.get("views") or []],
        )

    def with_fields(self, fields: List[RemoteField]) -> "RemoteTable":
        """Return a copy of this table restricted to ``fields``."""
        return replace(self, fields=list(fields))


@dataclass(frozen=True)
class GeneratedField:
    """A remote field paired with its generated identifier and spec.

    ``spec`` is None for field types that cannot be mapped; such fields are
    only emitted as comments.
    """

    field: RemoteField
    identifier: str
    spec: Optional[ValidationSpec]

    @property
    def id(self) -> str:
        return self.field.id

    @property
    def original_name(self) -> str:
        return self.field.name

    @property
    def type(self) -> str:
        return self.field.type

    @property
    def supported(self) -> bool:
        return self.spec is not None

    @property
    def renamed(self) -> bool:
        return self.original_name != self.identifier

    def with_spec(self, spec: Optional[ValidationSpec]) -> "GeneratedField":
        return replace(self, spec=spec)


@dataclass(frozen=True)
class LinkMeta:
    """Target table of a link field."""

    identifier: str
    linked_table_id: str


# Declarations derived from a table type name, e.g. ``OpsTasksSchema``
DERIVED_DECLARATION_SUFFIXES = ("Schema", "RecordSchema", "Record")


@dataclass
class TableModel:
    """Everything a generator needs to render one table."""

    base_name: str
    base_id: str
    table_id: str
    table_name: str
    type_name: str
    table_const: str
    fields: List[GeneratedField] = field(default_factory=list)
    required_fields: List[str] = field(default_factory=list)
    links: List[LinkMeta] = field(default_factory=list)

    @property
    def schema_name(self) -> str:
        return f"{self.type_name}Schema"

    @property
    def record_schema_name(self) -> str:
        return f"{self.type_name}RecordSchema"

    @property
    def record_type_name(self) -> str:
        return f"{self.type_name}Record"
