"""Query result and output data models.

This module defines the input shape and the consumer-facing output shapes:
- Field, QueryResult: schema-described columnar query results
- ResultFormat: picker entry for projects, datasets, tables and fields
- DataTarget: one time-series bucket
- Column, Table: generic table output
- AnnotationEvent: one annotation extracted from a query
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from result_shaper.config import DEFAULT_SETTINGS, RECORD_TYPES
from result_shaper.core.enums import ValueKind, type_tag

Row = Optional[Tuple[Any, ...]]


@dataclass(frozen=True)
class Field:
    """Schema entry naming a column and its type.

    Attributes:
        name: Column name.
        type: BigQuery type tag (e.g. "INT64", "TIMESTAMP", "RECORD").
        mode: Column mode ("NULLABLE", "REQUIRED", "REPEATED"), if known.
        fields: Child fields of a RECORD column, empty otherwise.

    Examples:
        >>> Field.from_api({"name": "ts", "type": "TIMESTAMP"}).kind
        <ValueKind.TEMPORAL: 'temporal'>
    """

    name: str
    type: str
    mode: Optional[str] = None
    fields: Tuple["Field", ...] = ()

    @property
    def is_record(self) -> bool:
        return self.type in RECORD_TYPES

    @property
    def kind(self) -> ValueKind:
        return DEFAULT_SETTINGS.kind_for(self.type)

    @classmethod
    def from_api(cls, payload: Any) -> "Field":
        """Build a Field from an API schema entry (recursively for records)."""
        if isinstance(payload, Field):
            return payload
        return cls(
            name=str(payload.get("name", "")),
            type=type_tag(payload.get("type")),
            mode=payload.get("mode"),
            fields=tuple(cls.from_api(child) for child in payload.get("fields") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "type": self.type}
        if self.mode is not None:
            out["mode"] = self.mode
        if self.fields:
            out["fields"] = [f.to_dict() for f in self.fields]
        return out


def _row_cells(row: Any) -> Row:
    if row is None:
        return None
    if isinstance(row, Mapping):
        cells = row.get("f") or ()
        return tuple(cell.get("v") if isinstance(cell, Mapping) else cell for cell in cells)
    return tuple(row)


@dataclass(frozen=True)
class QueryResult:
    """Schema plus rows of raw cells, positionally aligned with the schema.

    A row is ``None`` when the payload contains a null row entry.
    """

    schema: Tuple[Field, ...] = ()
    rows: Tuple[Row, ...] = ()

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "QueryResult":
        """Build from a query response (``{"schema": {"fields": [...]}, "rows": [{"f": [{"v": ...}]}]}``).

        Rows given as plain sequences of cells are accepted as well.
        """
        schema = payload.get("schema") or {}
        raw_fields = schema.get("fields") if isinstance(schema, Mapping) else schema
        return cls(
            schema=tuple(Field.from_api(f) for f in raw_fields or ()),
            rows=tuple(_row_cells(r) for r in payload.get("rows") or ()),
        )

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.schema]


@dataclass(frozen=True)
class ResultFormat:
    """Display label and identifier of a picker entry."""

    text: Any
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "value": self.value}


@dataclass
class DataTarget:
    """A named series of ``[value, epoch_millis]`` datapoints.

    ``ref_id`` and ``query`` are filled in by the caller that issued the query.
    """

    target: Any
    datapoints: List[List[Any]] = field(default_factory=list)
    ref_id: str = ""
    query: Any = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "datapoints": [list(dp) for dp in self.datapoints],
            "refId": self.ref_id,
            "query": self.query,
        }


@dataclass(frozen=True)
class Column:
    text: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "type": self.type}


@dataclass
class Table:
    """Generic table output: columns in schema order and coerced rows."""

    columns: List[Column] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)
    type: str = "table"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": [c.to_dict() for c in self.columns],
            "rows": [list(r) for r in self.rows],
            "type": self.type,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Return the table as a ``pandas.DataFrame`` with column texts as headers."""
        headers = [c.text for c in self.columns]
        width = len(headers)
        # Rows may be ragged when the payload has fewer cells than the schema
        data = [list(r[:width]) + [None] * (width - len(r)) for r in self.rows]
        return pd.DataFrame(data, columns=headers)


@dataclass(frozen=True)
class AnnotationEvent:
    """One annotation. ``title`` is never populated by the extractor."""

    annotation: Any
    tags: Sequence[str]
    text: Any
    time: Any
    title: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "annotation": self.annotation,
            "tags": list(self.tags),
            "text": self.text,
            "time": self.time,
            "title": self.title,
        }


__all__ = [
    "Field",
    "QueryResult",
    "Row",
    "ResultFormat",
    "DataTarget",
    "Column",
    "Table",
    "AnnotationEvent",
]
