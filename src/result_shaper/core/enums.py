"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class FieldType(str, Enum):
    """BigQuery schema type tags.

    Values are strings to ease comparison with raw API payloads, which carry
    the tag as plain text (e.g. ``{"name": "ts", "type": "TIMESTAMP"}``).
    """

    INT64 = "INT64"
    INT = "INT"
    INTEGER = "INTEGER"
    NUMERIC = "NUMERIC"
    FLOAT64 = "FLOAT64"
    FLOAT = "FLOAT"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIMESTAMP = "TIMESTAMP"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    BYTES = "BYTES"
    RECORD = "RECORD"
    STRUCT = "STRUCT"


class ValueKind(str, Enum):
    """How a cell value is interpreted once its schema type is known."""

    NUMERIC = "numeric"
    TEMPORAL = "temporal"
    TEXT = "text"


class ResultFormatType(str, Enum):
    """Output shapes a data query can be converted into."""

    TIME_SERIES = "time_series"
    TABLE = "table"


def type_tag(value: object) -> str:
    """Normalize a type tag given as a ``FieldType`` or a raw string to upper-case text."""
    if isinstance(value, Enum):
        value = value.value
    return str(value or "").upper()


__all__ = ["FieldType", "ValueKind", "ResultFormatType", "type_tag"]
